"""
vector_benchmarks.py - Throughput benchmarks for vector representations

Times the four operations that dominate similarity workloads across the
three vector representations in :mod:`vecbench.vectormath.vectors`:

    1. Create    - build each representation from a dense reference vector
    2. Clone     - duplicate every vector in place
    3. Dot       - dot product of each vector with its circular neighbour
    4. Distance  - minimum distance from each vector to the first
                   ``ops_per_unit`` vectors, once per distance measure

Each phase is a pure function of its inputs: it receives the benchmark
parameters plus either the reference corpus or a representation matrix, and
returns the matrix it built (where applicable) together with one
:class:`PhaseResult` per representation kind.  Nothing is kept on the class.

Reading the numbers
-------------------
"UnitsProcessed/sec" counts logical operations (one creation, one clone,
one dot product, or one scan of ``ops_per_unit`` distances) per second.
"MBytes/sec" assumes 12 bytes touched per component (an 8-byte value and a
4-byte index), which is exact for the sparse layouts and a slight
over-estimate for dense storage.  Sums of dot products and minimum
distances are carried through every phase and reported so the work cannot
be skipped.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from vecbench.core.constants import (
    BYTES_PER_COMPONENT,
    DEFAULT_CARDINALITY,
    DEFAULT_LOOP,
    DEFAULT_MULTIPLIER,
    DEFAULT_NUM_VECTORS,
    DEFAULT_OPS_PER_UNIT,
    MB_SCALE,
    NANOS_PER_SECOND,
    OP_CLONE,
    OP_CREATE,
    OP_DISTANCE,
    OP_DOT,
)
from vecbench.core.timing import TimingSnapshot, TimingStatistics
from vecbench.vectormath.distance import DEFAULT_MEASURES, DistanceMeasure
from vecbench.vectormath.vectors import VECTOR_TYPES, DenseVector, Vector, VectorKind

logger = logging.getLogger(__name__)

RepresentationMatrix = Dict[VectorKind, List[Vector]]


# ---------------------------------------------------------------------------
# Parameters & results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BenchmarkParameters:
    """
    Fixed inputs shared by every phase.

    Attributes
    ----------
    cardinality : int
        Components per vector.
    num_vectors : int
        Size of the reference corpus (and of every matrix row).
    loop : int
        Outer repetitions of each phase.
    ops_per_unit : int
        Distance calls folded into one timed unit.  Must not exceed
        ``num_vectors`` because the scan indexes the matrix row directly.
    multiplier : int
        Scale factor applied to the MB/sec estimate.
    """
    cardinality: int = DEFAULT_CARDINALITY
    num_vectors: int = DEFAULT_NUM_VECTORS
    loop: int = DEFAULT_LOOP
    ops_per_unit: int = DEFAULT_OPS_PER_UNIT
    multiplier: int = DEFAULT_MULTIPLIER

    def __post_init__(self):
        for name in ("cardinality", "num_vectors", "loop", "ops_per_unit", "multiplier"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise ValueError(f"{name} must be an integer, got {value!r}")
            if value < 1:
                raise ValueError(f"{name} must be positive, got {value}")
        if self.ops_per_unit > self.num_vectors:
            raise ValueError(
                f"ops_per_unit ({self.ops_per_unit}) cannot exceed "
                f"num_vectors ({self.num_vectors})"
            )


@dataclass(frozen=True)
class PhaseResult:
    """Outcome of one phase for one representation kind."""
    operation: str
    kind: VectorKind
    label: str
    stats: TimingSnapshot
    units_per_sec: float
    mb_per_sec: float
    result: Optional[float] = None
    measure: Optional[str] = None

    def report_line(self) -> str:
        return (
            f"{self.label} {self.stats} \n"
            f"Speed: {self.units_per_sec} UnitsProcessed/sec "
            f"{self.mb_per_sec} MBytes/sec"
        )


# ---------------------------------------------------------------------------
# Throughput derivation
# ---------------------------------------------------------------------------

def units_per_second(loop: int, num_vectors: int, sum_time_ns: float) -> float:
    """Logical operations per second given the total elapsed nanoseconds."""
    if sum_time_ns <= 0:
        return math.inf
    return loop * num_vectors * NANOS_PER_SECOND / sum_time_ns


def megabytes_per_second(
    loop: int,
    num_vectors: int,
    cardinality: int,
    sum_time_ns: float,
    multiplier: int = DEFAULT_MULTIPLIER,
) -> float:
    """Estimated memory bandwidth (MB/sec) given the total elapsed nanoseconds."""
    if sum_time_ns <= 0:
        return math.inf
    return (
        multiplier * loop * num_vectors * cardinality * MB_SCALE * BYTES_PER_COMPONENT
        / sum_time_ns
    )


def generate_corpus(
    params: BenchmarkParameters,
    rng: Optional[np.random.Generator] = None,
) -> Tuple[DenseVector, ...]:
    """Draw ``num_vectors`` dense vectors with standard-normal components."""
    if rng is None:
        rng = np.random.default_rng()
    return tuple(
        DenseVector(rng.standard_normal(params.cardinality))
        for _ in range(params.num_vectors)
    )


# ---------------------------------------------------------------------------
# Benchmark phases
# ---------------------------------------------------------------------------

class VectorBenchmarks:
    """
    The benchmark driver.

    Every phase is a static method taking explicit state and returning its
    results, so phases can be run individually (as the tests do) or chained
    through :meth:`run_all`.
    """

    @staticmethod
    def _finish(
        params: BenchmarkParameters,
        stats: TimingStatistics,
        operation: str,
        kind: VectorKind,
        label: str,
        result: Optional[float] = None,
        measure: Optional[str] = None,
    ) -> PhaseResult:
        snapshot = stats.snapshot()
        phase = PhaseResult(
            operation=operation,
            kind=kind,
            label=label,
            stats=snapshot,
            units_per_sec=units_per_second(params.loop, params.num_vectors, snapshot.sum_time),
            mb_per_sec=megabytes_per_second(
                params.loop, params.num_vectors, params.cardinality,
                snapshot.sum_time, params.multiplier,
            ),
            result=result,
            measure=measure,
        )
        logger.info(phase.report_line())
        return phase

    @staticmethod
    def create_benchmark(
        params: BenchmarkParameters,
        corpus: Sequence[Vector],
    ) -> Tuple[RepresentationMatrix, List[PhaseResult]]:
        """
        Time construction of every representation from the corpus.

        Each slot is overwritten on every loop, so the returned matrix holds
        the instances built by the final iteration.
        """
        if len(corpus) != params.num_vectors:
            raise ValueError(
                f"Corpus has {len(corpus)} vectors, expected {params.num_vectors}"
            )
        matrix: RepresentationMatrix = {}
        results: List[PhaseResult] = []

        for kind in VectorKind:
            vector_type = VECTOR_TYPES[kind]
            row: List[Optional[Vector]] = [None] * params.num_vectors
            stats = TimingStatistics()
            logger.debug("Creating %d x %d %s", params.loop, params.num_vectors, kind.label)
            for _ in range(params.loop):
                for i in range(params.num_vectors):
                    call = stats.new_call()
                    row[i] = vector_type(corpus[i])
                    call.end()
            matrix[kind] = row
            results.append(
                VectorBenchmarks._finish(params, stats, OP_CREATE, kind, f"{OP_CREATE} {kind.label}")
            )
        return matrix, results

    @staticmethod
    def clone_benchmark(
        params: BenchmarkParameters,
        matrix: RepresentationMatrix,
    ) -> Tuple[RepresentationMatrix, List[PhaseResult]]:
        """
        Time self-duplication of every matrix entry.

        The returned matrix holds the clones; later loops clone the clones of
        earlier ones.  The input matrix is left untouched.
        """
        cloned: RepresentationMatrix = {kind: list(row) for kind, row in matrix.items()}
        results: List[PhaseResult] = []

        for kind in VectorKind:
            row = cloned[kind]
            stats = TimingStatistics()
            logger.debug("Cloning %d x %d %s", params.loop, params.num_vectors, kind.label)
            for _ in range(params.loop):
                for i in range(params.num_vectors):
                    call = stats.new_call()
                    row[i] = row[i].clone()
                    call.end()
            results.append(
                VectorBenchmarks._finish(params, stats, OP_CLONE, kind, f"{OP_CLONE} {kind.label}")
            )
        return cloned, results

    @staticmethod
    def dot_benchmark(
        params: BenchmarkParameters,
        matrix: RepresentationMatrix,
    ) -> List[PhaseResult]:
        """
        Time the dot product of entry ``i`` with entry ``(i + 1) % n``.

        The running sum spans all kinds, so each result is cumulative.
        """
        n = params.num_vectors
        total = 0.0
        results: List[PhaseResult] = []

        for kind in VectorKind:
            row = matrix[kind]
            stats = TimingStatistics()
            for _ in range(params.loop):
                for i in range(n):
                    call = stats.new_call()
                    total += row[i].dot(row[(i + 1) % n])
                    call.end()
            results.append(
                VectorBenchmarks._finish(
                    params, stats, OP_DOT, kind,
                    f"{OP_DOT} {kind.label} sum = {total} ",
                    result=total,
                )
            )
        return results

    @staticmethod
    def distance_measure_benchmark(
        params: BenchmarkParameters,
        matrix: RepresentationMatrix,
        measure: DistanceMeasure,
    ) -> List[PhaseResult]:
        """
        Time scans of ``ops_per_unit`` distances from each entry.

        One timed unit is the whole scan from entry ``i`` to entries
        ``0 .. ops_per_unit - 1``; the minimum of each scan is summed across
        all loops and kinds.
        """
        total = 0.0
        results: List[PhaseResult] = []

        for kind in VectorKind:
            row = matrix[kind]
            stats = TimingStatistics()
            for _ in range(params.loop):
                for i in range(params.num_vectors):
                    call = stats.new_call()
                    min_distance = math.inf
                    for u in range(params.ops_per_unit):
                        distance = measure.distance(row[i], row[u])
                        if distance < min_distance:
                            min_distance = distance
                    total += min_distance
                    call.end()
            results.append(
                VectorBenchmarks._finish(
                    params, stats, OP_DISTANCE, kind,
                    f"{OP_DISTANCE} {measure.name} {kind.label} minDistance = {total} ",
                    result=total,
                    measure=measure.name,
                )
            )
        return results

    # ---- Orchestration ---------------------------------------------------

    @staticmethod
    def run_all(
        params: BenchmarkParameters,
        corpus: Sequence[Vector],
        measures: Sequence[DistanceMeasure] = DEFAULT_MEASURES,
    ) -> List[PhaseResult]:
        """Run create -> clone -> dot -> distance (per measure), in that order."""
        logger.info("=" * 60)
        logger.info(
            "VECTOR BENCHMARKS: cardinality=%d numVectors=%d loop=%d opsPerUnit=%d",
            params.cardinality, params.num_vectors, params.loop, params.ops_per_unit,
        )
        logger.info("=" * 60)

        matrix, results = VectorBenchmarks.create_benchmark(params, corpus)
        matrix, cloned = VectorBenchmarks.clone_benchmark(params, matrix)
        results += cloned
        results += VectorBenchmarks.dot_benchmark(params, matrix)
        for measure in measures:
            results += VectorBenchmarks.distance_measure_benchmark(params, matrix, measure)

        logger.info("Benchmarks complete: %d phase results", len(results))
        return results
