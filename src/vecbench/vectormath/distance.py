"""
distance.py - Pluggable distance measures over :class:`Vector` instances.

Each measure maps a pair of same-cardinality vectors to a non-negative
scalar.  When both operands are dense the Euclidean family and Manhattan
hand the raw arrays to :mod:`scipy.spatial.distance`; every other
combination goes through the vector capability interface so that the
sparse representations pay their own arithmetic costs.

    Measure            Formula
    -----------------  --------------------------------------------------
    Cosine             1 - a.b / (|a| |b|)
    SquaredEuclidean   |a - b|^2
    Euclidean          |a - b|
    Manhattan          sum_i |a_i - b_i|
    Tanimoto           1 - a.b / (|a|^2 + |b|^2 - a.b)
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Tuple

import scipy.spatial.distance as scipy_distance

from vecbench.vectormath.vectors import CardinalityError, DenseVector, Vector


class DistanceMeasure(ABC):
    """Open interface for ``distance(a, b) -> float``."""

    name: str = "distance"

    @staticmethod
    def _check(v1: Vector, v2: Vector) -> None:
        if v1.size() != v2.size():
            raise CardinalityError(v1.size(), v2.size())

    @abstractmethod
    def distance(self, v1: Vector, v2: Vector) -> float:
        ...

    def __call__(self, v1: Vector, v2: Vector) -> float:
        return self.distance(v1, v2)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class CosineDistanceMeasure(DistanceMeasure):
    """One minus the cosine of the angle between the vectors."""

    name = "cosine"

    def distance(self, v1: Vector, v2: Vector) -> float:
        self._check(v1, v2)
        length_squared_1 = v1.get_length_squared()
        length_squared_2 = v2.get_length_squared()
        dot_product = v1.dot(v2)

        denominator = math.sqrt(length_squared_1) * math.sqrt(length_squared_2)
        # Rounding can leave the denominator just below the dot product
        if denominator < dot_product:
            denominator = dot_product
        if denominator == 0.0 and dot_product == 0.0:
            return 0.0
        return 1.0 - dot_product / denominator


class SquaredEuclideanDistanceMeasure(DistanceMeasure):
    name = "squared_euclidean"

    def distance(self, v1: Vector, v2: Vector) -> float:
        self._check(v1, v2)
        if isinstance(v1, DenseVector) and isinstance(v2, DenseVector):
            return float(scipy_distance.sqeuclidean(v1.values, v2.values))
        return v2.get_distance_squared(v1)


class EuclideanDistanceMeasure(SquaredEuclideanDistanceMeasure):
    name = "euclidean"

    def distance(self, v1: Vector, v2: Vector) -> float:
        self._check(v1, v2)
        if isinstance(v1, DenseVector) and isinstance(v2, DenseVector):
            return float(scipy_distance.euclidean(v1.values, v2.values))
        return math.sqrt(max(v2.get_distance_squared(v1), 0.0))


class ManhattanDistanceMeasure(DistanceMeasure):
    """Sum of absolute component differences (L1 / city-block)."""

    name = "manhattan"

    def distance(self, v1: Vector, v2: Vector) -> float:
        self._check(v1, v2)
        if isinstance(v1, DenseVector) and isinstance(v2, DenseVector):
            return float(scipy_distance.cityblock(v1.values, v2.values))
        return v1.minus(v2).norm(1)


class TanimotoDistanceMeasure(DistanceMeasure):
    """
    Tanimoto (extended Jaccard) distance.

    Equals the cosine distance for unit vectors and reduces to the Jaccard
    distance for binary vectors.
    """

    name = "tanimoto"

    def distance(self, v1: Vector, v2: Vector) -> float:
        self._check(v1, v2)
        ab = v1.dot(v2)
        denominator = v1.get_length_squared() + v2.get_length_squared() - ab
        if denominator < ab:
            denominator = ab
        if denominator > 0.0:
            return 1.0 - ab / denominator
        return 0.0


# Fixed order the benchmark driver runs the measures in
DEFAULT_MEASURES: Tuple[DistanceMeasure, ...] = (
    CosineDistanceMeasure(),
    SquaredEuclideanDistanceMeasure(),
    EuclideanDistanceMeasure(),
    ManhattanDistanceMeasure(),
    TanimotoDistanceMeasure(),
)
