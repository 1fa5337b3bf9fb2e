"""
vectors.py - Three interchangeable vector representations over a fixed-size
index space.

    DenseVector                   -- every component stored in a contiguous
                                     float64 array, zeros included.
    RandomAccessSparseVector      -- only non-zero components, kept in a hash
                                     map (index -> value).  O(1) get/set,
                                     unordered iteration.
    SequentialAccessSparseVector  -- only non-zero components, kept as sorted
                                     parallel index/value arrays.  O(log n)
                                     lookup, O(n) insertion, fast ordered
                                     merges for dot products and differences.

All three share the capability interface defined by :class:`Vector`, so the
benchmark driver and the distance measures never need to know which storage
strategy they are working with.  :class:`VectorKind` is the closed set of
representations; its iteration order is the order the benchmarks run in.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Iterator, Sequence, Tuple, Type, Union

import numpy as np


class CardinalityError(ValueError):
    """Raised when a binary operation mixes vectors of different sizes."""

    def __init__(self, expected: int, actual: int):
        super().__init__(f"Cardinality mismatch: expected {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


class VectorKind(Enum):
    """Closed set of vector representations, in benchmark order."""
    DENSE = "DenseVector"
    RANDOM_ACCESS_SPARSE = "RandomAccessSparseVector"
    SEQUENTIAL_ACCESS_SPARSE = "SequentialAccessSparseVector"

    @property
    def label(self) -> str:
        return self.value


VectorSource = Union[int, "Vector", Sequence[float], np.ndarray]

_EMPTY_INDICES = np.empty(0, dtype=np.int64)
_EMPTY_VALUES = np.empty(0, dtype=np.float64)


def _as_dense_array(source) -> np.ndarray:
    """Copy a 1-D numeric sequence into a fresh float64 array."""
    values = np.array(source, dtype=np.float64)
    if values.ndim != 1:
        raise ValueError(f"Vector source must be 1-D, got shape {values.shape}")
    return values


def _source_nonzeros(source: VectorSource) -> Tuple[int, np.ndarray, np.ndarray]:
    """Return ``(cardinality, indices, values)`` for a constructor argument.

    ``indices`` are sorted and the arrays are always fresh copies.
    """
    if isinstance(source, Vector):
        indices, values = source.nonzero_arrays()
        return source.size(), indices, values
    if isinstance(source, (int, np.integer)):
        if source < 0:
            raise ValueError(f"Cardinality must be non-negative, got {source}")
        return int(source), _EMPTY_INDICES.copy(), _EMPTY_VALUES.copy()
    dense = _as_dense_array(source)
    indices = np.flatnonzero(dense).astype(np.int64)
    return dense.shape[0], indices, dense[indices]


def _norm_of(values: np.ndarray, power: float) -> float:
    """p-norm of the stored values; implicit zeros contribute nothing."""
    if power < 0:
        raise ValueError(f"Norm power must be non-negative, got {power}")
    if power == 0:
        return float(np.count_nonzero(values))
    if values.size == 0:
        return 0.0
    if math.isinf(power):
        return float(np.abs(values).max())
    if power == 1:
        return float(np.abs(values).sum())
    if power == 2:
        return float(np.sqrt(np.dot(values, values)))
    return float(np.power(np.abs(values), power).sum() ** (1.0 / power))


# ---------------------------------------------------------------------------
# Shared capability interface
# ---------------------------------------------------------------------------

class Vector(ABC):
    """
    Abstract numeric vector of fixed cardinality.

    Subclasses decide how components are stored; every operation below is
    defined in terms of component values only, so two vectors of different
    kinds holding the same values compare equal.
    """

    kind: VectorKind

    def __init__(self, cardinality: int):
        self._cardinality = int(cardinality)

    # ---- Size & element access ----------------------------------------

    def size(self) -> int:
        return self._cardinality

    def __len__(self) -> int:
        return self._cardinality

    def _check_index(self, index: int) -> int:
        if not 0 <= index < self._cardinality:
            raise IndexError(
                f"Index {index} out of range for vector of size {self._cardinality}"
            )
        return int(index)

    def _check_cardinality(self, other: "Vector") -> None:
        if other.size() != self._cardinality:
            raise CardinalityError(self._cardinality, other.size())

    @abstractmethod
    def get(self, index: int) -> float:
        """Value of component *index* (0.0 when not stored)."""

    @abstractmethod
    def set(self, index: int, value: float) -> None:
        """Assign component *index*."""

    def __getitem__(self, index: int) -> float:
        return self.get(index)

    def __setitem__(self, index: int, value: float) -> None:
        self.set(index, value)

    # ---- Storage views --------------------------------------------------

    @abstractmethod
    def nonzero_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        """Sorted ``(indices, values)`` copies of the non-zero components."""

    def iter_nonzero(self) -> Iterator[Tuple[int, float]]:
        indices, values = self.nonzero_arrays()
        return zip(indices.tolist(), values.tolist())

    @abstractmethod
    def num_nondefault_elements(self) -> int:
        """Number of explicitly stored components."""

    @abstractmethod
    def to_array(self) -> np.ndarray:
        """Dense float64 copy of all components."""

    # ---- Algebra ----------------------------------------------------------

    @abstractmethod
    def clone(self) -> "Vector":
        """Independent copy of the same kind."""

    @abstractmethod
    def dot(self, other: "Vector") -> float:
        ...

    @abstractmethod
    def minus(self, other: "Vector") -> "Vector":
        """``self - other`` as a new vector of ``self``'s kind."""

    @abstractmethod
    def norm(self, power: float) -> float:
        """p-norm for p >= 0 (p = 0 counts non-zeros, p = inf is max-abs)."""

    def get_length_squared(self) -> float:
        return self.dot(self)

    def get_distance_squared(self, other: "Vector") -> float:
        self._check_cardinality(other)
        return self.minus(other).get_length_squared()

    # ---- Dunder helpers --------------------------------------------------

    def __eq__(self, other):
        if not isinstance(other, Vector):
            return NotImplemented
        return (
            self.size() == other.size()
            and np.array_equal(self.to_array(), other.to_array())
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(size={self._cardinality}, "
            f"nondefault={self.num_nondefault_elements()})"
        )


# ---------------------------------------------------------------------------
# Dense
# ---------------------------------------------------------------------------

class DenseVector(Vector):
    """All components held in one contiguous float64 array."""

    kind = VectorKind.DENSE

    def __init__(self, source: VectorSource = 0):
        if isinstance(source, Vector):
            values = source.to_array()
        elif isinstance(source, (int, np.integer)):
            if source < 0:
                raise ValueError(f"Cardinality must be non-negative, got {source}")
            values = np.zeros(int(source), dtype=np.float64)
        else:
            values = _as_dense_array(source)
        super().__init__(values.shape[0])
        self.values = values

    @classmethod
    def _wrap(cls, values: np.ndarray) -> "DenseVector":
        """Adopt *values* without copying."""
        vector = cls.__new__(cls)
        Vector.__init__(vector, values.shape[0])
        vector.values = values
        return vector

    def get(self, index: int) -> float:
        return float(self.values[self._check_index(index)])

    def set(self, index: int, value: float) -> None:
        self.values[self._check_index(index)] = value

    def nonzero_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        indices = np.flatnonzero(self.values).astype(np.int64)
        return indices, self.values[indices]

    def num_nondefault_elements(self) -> int:
        return self._cardinality

    def to_array(self) -> np.ndarray:
        return self.values.copy()

    def clone(self) -> "DenseVector":
        return DenseVector._wrap(self.values.copy())

    def dot(self, other: Vector) -> float:
        self._check_cardinality(other)
        if isinstance(other, DenseVector):
            return float(np.dot(self.values, other.values))
        # Let the sparse side drive so only its non-zeros are visited
        return other.dot(self)

    def minus(self, other: Vector) -> "DenseVector":
        self._check_cardinality(other)
        if isinstance(other, DenseVector):
            return DenseVector._wrap(self.values - other.values)
        result = self.values.copy()
        indices, values = other.nonzero_arrays()
        result[indices] -= values
        return DenseVector._wrap(result)

    def norm(self, power: float) -> float:
        return _norm_of(self.values, power)

    def get_length_squared(self) -> float:
        return float(np.dot(self.values, self.values))

    def get_distance_squared(self, other: Vector) -> float:
        if isinstance(other, DenseVector):
            self._check_cardinality(other)
            diff = self.values - other.values
            return float(np.dot(diff, diff))
        return super().get_distance_squared(other)


# ---------------------------------------------------------------------------
# Random-access sparse
# ---------------------------------------------------------------------------

class RandomAccessSparseVector(Vector):
    """Non-zero components in a hash map keyed by index."""

    kind = VectorKind.RANDOM_ACCESS_SPARSE

    def __init__(self, source: VectorSource = 0):
        cardinality, indices, values = _source_nonzeros(source)
        super().__init__(cardinality)
        self.entries: Dict[int, float] = dict(zip(indices.tolist(), values.tolist()))

    def get(self, index: int) -> float:
        return self.entries.get(self._check_index(index), 0.0)

    def set(self, index: int, value: float) -> None:
        index = self._check_index(index)
        if value == 0.0:
            self.entries.pop(index, None)
        else:
            self.entries[index] = float(value)

    def iter_nonzero(self) -> Iterator[Tuple[int, float]]:
        return iter(self.entries.items())

    def nonzero_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        n = len(self.entries)
        if n == 0:
            return _EMPTY_INDICES.copy(), _EMPTY_VALUES.copy()
        indices = np.fromiter(self.entries.keys(), dtype=np.int64, count=n)
        values = np.fromiter(self.entries.values(), dtype=np.float64, count=n)
        order = np.argsort(indices, kind="stable")
        return indices[order], values[order]

    def num_nondefault_elements(self) -> int:
        return len(self.entries)

    def to_array(self) -> np.ndarray:
        result = np.zeros(self._cardinality, dtype=np.float64)
        indices, values = self.nonzero_arrays()
        result[indices] = values
        return result

    def clone(self) -> "RandomAccessSparseVector":
        copy = RandomAccessSparseVector(self._cardinality)
        copy.entries = dict(self.entries)
        return copy

    def dot(self, other: Vector) -> float:
        self._check_cardinality(other)
        if isinstance(other, RandomAccessSparseVector):
            # Probe the larger map with the smaller one's keys
            small, large = (self, other) if len(self.entries) <= len(other.entries) else (other, self)
            lookup = large.entries.get
            return float(sum(v * lookup(i, 0.0) for i, v in small.entries.items()))
        if isinstance(other, DenseVector):
            return float(sum(v * other.values[i] for i, v in self.entries.items()))
        return float(sum(v * self.entries.get(i, 0.0) for i, v in other.iter_nonzero()))

    def minus(self, other: Vector) -> "RandomAccessSparseVector":
        self._check_cardinality(other)
        result = self.clone()
        entries = result.entries
        for i, v in other.iter_nonzero():
            updated = entries.get(i, 0.0) - v
            if updated == 0.0:
                entries.pop(i, None)
            else:
                entries[i] = updated
        return result

    def norm(self, power: float) -> float:
        values = np.fromiter(self.entries.values(), dtype=np.float64, count=len(self.entries))
        return _norm_of(values, power)

    def get_length_squared(self) -> float:
        return float(sum(v * v for v in self.entries.values()))


# ---------------------------------------------------------------------------
# Sequential-access sparse
# ---------------------------------------------------------------------------

class SequentialAccessSparseVector(Vector):
    """Non-zero components as sorted parallel index/value arrays."""

    kind = VectorKind.SEQUENTIAL_ACCESS_SPARSE

    def __init__(self, source: VectorSource = 0):
        cardinality, indices, values = _source_nonzeros(source)
        super().__init__(cardinality)
        self.indices = indices
        self.values = values

    def _find(self, index: int) -> Tuple[int, bool]:
        pos = int(np.searchsorted(self.indices, index))
        return pos, pos < self.indices.size and self.indices[pos] == index

    def get(self, index: int) -> float:
        pos, found = self._find(self._check_index(index))
        return float(self.values[pos]) if found else 0.0

    def set(self, index: int, value: float) -> None:
        pos, found = self._find(self._check_index(index))
        if found:
            if value == 0.0:
                self.indices = np.delete(self.indices, pos)
                self.values = np.delete(self.values, pos)
            else:
                self.values[pos] = value
        elif value != 0.0:
            self.indices = np.insert(self.indices, pos, index)
            self.values = np.insert(self.values, pos, value)

    def nonzero_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        return self.indices.copy(), self.values.copy()

    def num_nondefault_elements(self) -> int:
        return int(self.indices.size)

    def to_array(self) -> np.ndarray:
        result = np.zeros(self._cardinality, dtype=np.float64)
        result[self.indices] = self.values
        return result

    def clone(self) -> "SequentialAccessSparseVector":
        copy = SequentialAccessSparseVector(self._cardinality)
        copy.indices = self.indices.copy()
        copy.values = self.values.copy()
        return copy

    def dot(self, other: Vector) -> float:
        self._check_cardinality(other)
        if isinstance(other, SequentialAccessSparseVector):
            _, mine, theirs = np.intersect1d(
                self.indices, other.indices, assume_unique=True, return_indices=True
            )
            return float(np.dot(self.values[mine], other.values[theirs]))
        if isinstance(other, DenseVector):
            return float(np.dot(self.values, other.values[self.indices]))
        return float(sum(v * self.get(i) for i, v in other.iter_nonzero()))

    def minus(self, other: Vector) -> "SequentialAccessSparseVector":
        self._check_cardinality(other)
        other_indices, other_values = other.nonzero_arrays()
        merged = np.union1d(self.indices, other_indices)
        values = np.zeros(merged.size, dtype=np.float64)
        values[np.searchsorted(merged, self.indices)] += self.values
        values[np.searchsorted(merged, other_indices)] -= other_values
        keep = values != 0.0
        result = SequentialAccessSparseVector(self._cardinality)
        result.indices = merged[keep].astype(np.int64)
        result.values = values[keep]
        return result

    def norm(self, power: float) -> float:
        return _norm_of(self.values, power)

    def get_length_squared(self) -> float:
        return float(np.dot(self.values, self.values))


# Kind -> class, in benchmark order
VECTOR_TYPES: Dict[VectorKind, Type[Vector]] = {
    VectorKind.DENSE: DenseVector,
    VectorKind.RANDOM_ACCESS_SPARSE: RandomAccessSparseVector,
    VectorKind.SEQUENTIAL_ACCESS_SPARSE: SequentialAccessSparseVector,
}
