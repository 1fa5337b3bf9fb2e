"""
timing.py - Per-call timing accumulator for the vector benchmarks.

Every timed unit of work is bracketed by a :class:`Call`::

    stats = TimingStatistics()
    for v in vectors:
        call = stats.new_call()
        v.clone()
        call.end()

or, equivalently, ``with stats.new_call(): v.clone()``.

The accumulator keeps only running aggregates (count, sum, min, max and
sum of squares) so memory stays constant no matter how many samples are
recorded.  It is meant for single-threaded use: calls must be recorded in
strict start/end pairs.

All durations are integer nanoseconds from :func:`time.perf_counter_ns`.
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import Optional

from vecbench.core.constants import NANOS_PER_MILLI, NANOS_PER_SECOND


@dataclass(frozen=True)
class TimingSnapshot:
    """Immutable view of a :class:`TimingStatistics` accumulator.

    Attributes
    ----------
    num_calls : int
        Number of recorded samples.
    sum_time : int
        Total elapsed time across all samples (ns).
    min_time, max_time : int
        Fastest and slowest sample (ns).  Zero when no calls were recorded.
    mean_time : float
        Average sample duration (ns).
    std_dev_time : float
        Population standard deviation of the samples (ns).
    """
    num_calls: int
    sum_time: int
    min_time: int
    max_time: int
    mean_time: float
    std_dev_time: float

    def __str__(self) -> str:
        return (
            "\n"
            f"nCalls = {self.num_calls};\n"
            f"sum    = {self.sum_time / NANOS_PER_SECOND:.6f}s;\n"
            f"min    = {self.min_time / NANOS_PER_MILLI:.6f}ms;\n"
            f"max    = {self.max_time / NANOS_PER_MILLI:.6f}ms;\n"
            f"mean   = {self.mean_time / NANOS_PER_MILLI:.6f}ms;\n"
            f"stdDev = {self.std_dev_time / NANOS_PER_MILLI:.6f}ms;"
        )


class TimingStatistics:
    """Running timing aggregates for one benchmark phase."""

    class Call:
        """Handle for a single in-flight timed unit of work."""

        def __init__(self, owner: "TimingStatistics"):
            self._owner = owner
            self._start = time.perf_counter_ns()
            self._ended = False

        def end(self) -> int:
            """Stop the clock and record the elapsed time.  Returns it (ns)."""
            if self._ended:
                raise RuntimeError("Call.end() invoked twice for the same call.")
            elapsed = time.perf_counter_ns() - self._start
            self._ended = True
            self._owner.record(elapsed)
            return elapsed

        def __enter__(self) -> "TimingStatistics.Call":
            return self

        def __exit__(self, *args) -> None:
            if not self._ended:
                self.end()

    def __init__(self):
        self.num_calls = 0
        self.sum_time = 0
        self.sum_squared_time = 0.0
        self.min_time: Optional[int] = None
        self.max_time: Optional[int] = None

    def new_call(self) -> "TimingStatistics.Call":
        """Start timing one atomic unit of work."""
        return TimingStatistics.Call(self)

    def record(self, duration: int) -> None:
        """Fold one sample (ns) into the running aggregates."""
        duration = int(duration)
        self.num_calls += 1
        self.sum_time += duration
        self.sum_squared_time += float(duration) * float(duration)
        if self.min_time is None or duration < self.min_time:
            self.min_time = duration
        if self.max_time is None or duration > self.max_time:
            self.max_time = duration

    def snapshot(self) -> TimingSnapshot:
        """Freeze the current aggregates into a :class:`TimingSnapshot`."""
        if self.num_calls == 0:
            return TimingSnapshot(0, 0, 0, 0, 0.0, 0.0)

        mean = self.sum_time / self.num_calls
        # sqrt(E[x^2] - E[x]^2); rounding can push the difference below zero
        variance = self.sum_squared_time / self.num_calls - mean * mean
        return TimingSnapshot(
            num_calls=self.num_calls,
            sum_time=self.sum_time,
            min_time=self.min_time,
            max_time=self.max_time,
            mean_time=mean,
            std_dev_time=math.sqrt(max(variance, 0.0)),
        )

    def __repr__(self) -> str:
        return f"TimingStatistics(num_calls={self.num_calls}, sum_time={self.sum_time})"
