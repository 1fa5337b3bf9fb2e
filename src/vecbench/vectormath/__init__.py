"""
vectormath - Vector representations and distance measures.

    vectors   - DenseVector, RandomAccessSparseVector,
                SequentialAccessSparseVector and the VectorKind variant.
    distance  - Cosine, squared-Euclidean, Euclidean, Manhattan and
                Tanimoto distance measures.
"""

from vecbench.vectormath.vectors import (
    CardinalityError,
    DenseVector,
    RandomAccessSparseVector,
    SequentialAccessSparseVector,
    Vector,
    VectorKind,
)
from vecbench.vectormath.distance import (
    DEFAULT_MEASURES,
    CosineDistanceMeasure,
    DistanceMeasure,
    EuclideanDistanceMeasure,
    ManhattanDistanceMeasure,
    SquaredEuclideanDistanceMeasure,
    TanimotoDistanceMeasure,
)

__all__ = [
    "CardinalityError",
    "DenseVector",
    "RandomAccessSparseVector",
    "SequentialAccessSparseVector",
    "Vector",
    "VectorKind",
    "DEFAULT_MEASURES",
    "CosineDistanceMeasure",
    "DistanceMeasure",
    "EuclideanDistanceMeasure",
    "ManhattanDistanceMeasure",
    "SquaredEuclideanDistanceMeasure",
    "TanimotoDistanceMeasure",
]
