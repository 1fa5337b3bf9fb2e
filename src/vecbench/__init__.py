"""
vecbench - Vector Representation & Distance Measure Benchmarks

Measures how the storage strategy of a numeric vector affects the cost of
the operations that clustering and similarity search spend their time in:

    core         - Defaults, reporting constants and the timing accumulator.
    vectormath   - Dense, random-access sparse and sequential-access sparse
                   vectors plus five pluggable distance measures.
    performance  - The benchmark driver (create, clone, dot, distance phases)
                   and the pandas/matplotlib reporting layer.

Run ``python -m vecbench --help`` for the command-line options.
"""

__version__ = "0.1.0"
