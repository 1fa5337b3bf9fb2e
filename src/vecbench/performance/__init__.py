"""
performance - Benchmark driver and reporting for vector representations.

    vector_benchmarks  - Create / clone / dot / distance phases over the
                         three representations, timed per call.
    reporting          - pandas summary table and matplotlib throughput
                         charts built from the phase results.
"""
