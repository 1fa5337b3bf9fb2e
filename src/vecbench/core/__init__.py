"""
core - Shared constants and timing primitives for the vector benchmarks.

    constants  - Default benchmark parameters and throughput constants.
    timing     - TimingStatistics accumulator and its immutable snapshot.
"""
