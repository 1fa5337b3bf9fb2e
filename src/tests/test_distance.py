"""
===============================================================================
VECBENCH - Distance Measure Test Suite
===============================================================================
Checks every distance measure against an independent numpy reference for all
three vector representations, plus the degenerate cases (zero vectors,
identical vectors) and the measure registry.
===============================================================================
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np
import pytest
from numpy.testing import assert_allclose

from vecbench.vectormath.distance import (
    DEFAULT_MEASURES,
    CosineDistanceMeasure,
    EuclideanDistanceMeasure,
    ManhattanDistanceMeasure,
    SquaredEuclideanDistanceMeasure,
    TanimotoDistanceMeasure,
)
from vecbench.vectormath.vectors import (
    CardinalityError,
    DenseVector,
    RandomAccessSparseVector,
    SequentialAccessSparseVector,
)

VECTOR_CLASSES = [DenseVector, RandomAccessSparseVector, SequentialAccessSparseVector]


# =============================================================================
# Reference formulas
# =============================================================================

def ref_cosine(a, b):
    return 1.0 - np.dot(a, b) / (np.linalg.norm(a) * np.linalg.norm(b))


def ref_squared_euclidean(a, b):
    return float(np.sum((a - b) ** 2))


def ref_euclidean(a, b):
    return float(np.sqrt(np.sum((a - b) ** 2)))


def ref_manhattan(a, b):
    return float(np.sum(np.abs(a - b)))


def ref_tanimoto(a, b):
    ab = np.dot(a, b)
    return 1.0 - ab / (np.dot(a, a) + np.dot(b, b) - ab)


CASES = [
    (CosineDistanceMeasure, ref_cosine),
    (SquaredEuclideanDistanceMeasure, ref_squared_euclidean),
    (EuclideanDistanceMeasure, ref_euclidean),
    (ManhattanDistanceMeasure, ref_manhattan),
    (TanimotoDistanceMeasure, ref_tanimoto),
]


@pytest.fixture
def pair():
    rng = np.random.default_rng(1234)
    a = rng.standard_normal(32)
    b = rng.standard_normal(32)
    # Knock out some components so the sparse paths see real gaps
    a[::3] = 0.0
    b[1::4] = 0.0
    return a, b


# =============================================================================
# Agreement with reference formulas
# =============================================================================

class TestAgainstReference:

    @pytest.mark.parametrize("measure_class,reference", CASES,
                             ids=[c[0].__name__ for c in CASES])
    @pytest.mark.parametrize("vector_class", VECTOR_CLASSES, ids=lambda c: c.__name__)
    def test_matches_reference(self, measure_class, reference, vector_class, pair):
        a, b = pair
        measure = measure_class()
        got = measure.distance(vector_class(a), vector_class(b))
        assert_allclose(got, reference(a, b), rtol=1e-10, atol=1e-12)

    @pytest.mark.parametrize("measure_class,reference", CASES,
                             ids=[c[0].__name__ for c in CASES])
    def test_mixed_kinds(self, measure_class, reference, pair):
        a, b = pair
        measure = measure_class()
        got = measure.distance(DenseVector(a), SequentialAccessSparseVector(b))
        assert_allclose(got, reference(a, b), rtol=1e-10, atol=1e-12)

    @pytest.mark.parametrize("measure_class", [c[0] for c in CASES])
    def test_callable(self, measure_class, pair):
        a, b = pair
        measure = measure_class()
        va, vb = DenseVector(a), DenseVector(b)
        assert measure(va, vb) == measure.distance(va, vb)


# =============================================================================
# Degenerate inputs
# =============================================================================

class TestDegenerateCases:

    @pytest.mark.parametrize("measure_class", [c[0] for c in CASES])
    @pytest.mark.parametrize("vector_class", VECTOR_CLASSES, ids=lambda c: c.__name__)
    def test_self_distance_is_zero(self, measure_class, vector_class, pair):
        a, _ = pair
        v = vector_class(a)
        assert_allclose(measure_class().distance(v, v), 0.0, atol=1e-12)

    @pytest.mark.parametrize("measure_class", [c[0] for c in CASES])
    def test_zero_vectors(self, measure_class):
        zero = RandomAccessSparseVector(6)
        assert measure_class().distance(zero, zero) == 0.0

    def test_cosine_opposite_vectors(self):
        a = DenseVector([1.0, 2.0, 3.0])
        b = DenseVector([-1.0, -2.0, -3.0])
        assert_allclose(CosineDistanceMeasure().distance(a, b), 2.0)

    def test_tanimoto_binary_is_jaccard(self):
        a = np.array([1.0, 1.0, 0.0, 1.0, 0.0])
        b = np.array([1.0, 0.0, 1.0, 1.0, 0.0])
        # |A & B| = 2, |A | B| = 4
        got = TanimotoDistanceMeasure().distance(
            SequentialAccessSparseVector(a), SequentialAccessSparseVector(b)
        )
        assert_allclose(got, 1.0 - 2.0 / 4.0)

    @pytest.mark.parametrize("measure_class", [c[0] for c in CASES])
    def test_cardinality_mismatch(self, measure_class):
        with pytest.raises(CardinalityError):
            measure_class().distance(DenseVector(3), DenseVector(4))


# =============================================================================
# Registry
# =============================================================================

class TestRegistry:

    def test_default_order(self):
        assert [m.name for m in DEFAULT_MEASURES] == [
            "cosine", "squared_euclidean", "euclidean", "manhattan", "tanimoto",
        ]

