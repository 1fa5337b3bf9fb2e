"""
reporting.py - Tabular summaries and throughput plots for benchmark results.

:func:`summarize` folds a list of :class:`PhaseResult` records into a pandas
DataFrame indexed by (phase, representation) so the whole run can be read at
a glance; :func:`plot_throughput` draws grouped bar charts from that table.
"""

from __future__ import annotations

import os
from typing import List, Sequence

import numpy as np
import pandas as pd
import matplotlib

matplotlib.use("Agg")  # Non-interactive backend for server / CI environments
import matplotlib.pyplot as plt

from vecbench.core.constants import NANOS_PER_MICRO, NANOS_PER_SECOND
from vecbench.performance.vector_benchmarks import PhaseResult

SUMMARY_COLUMNS = [
    "label",
    "measure",
    "result",
    "num_calls",
    "sum_time_s",
    "mean_time_us",
    "std_dev_time_us",
    "units_per_sec",
    "mb_per_sec",
]


def _phase_name(result: PhaseResult) -> str:
    if result.measure:
        return f"{result.operation} {result.measure}"
    return result.operation


def summarize(results: Sequence[PhaseResult]) -> pd.DataFrame:
    """
    One row per (phase, representation) in run order.

    Returns
    -------
    pd.DataFrame
        Indexed by ``phase`` (operation, plus the measure name for distance
        phases) and ``kind`` (representation label).
    """
    rows = []
    for r in results:
        rows.append(
            {
                "phase": _phase_name(r),
                "kind": r.kind.label,
                "label": r.label.strip(),
                "measure": r.measure,
                "result": np.nan if r.result is None else r.result,
                "num_calls": r.stats.num_calls,
                "sum_time_s": r.stats.sum_time / NANOS_PER_SECOND,
                "mean_time_us": r.stats.mean_time / NANOS_PER_MICRO,
                "std_dev_time_us": r.stats.std_dev_time / NANOS_PER_MICRO,
                "units_per_sec": r.units_per_sec,
                "mb_per_sec": r.mb_per_sec,
            }
        )
    if not rows:
        empty = pd.DataFrame(columns=["phase", "kind"] + SUMMARY_COLUMNS)
        return empty.set_index(["phase", "kind"])
    return pd.DataFrame(rows).set_index(["phase", "kind"])[SUMMARY_COLUMNS]


def format_summary(summary: pd.DataFrame) -> str:
    """Human-readable table of the throughput columns."""
    columns = ["num_calls", "mean_time_us", "std_dev_time_us", "units_per_sec", "mb_per_sec"]
    return summary[columns].to_string(float_format=lambda x: f"{x:,.2f}")


def plot_throughput(summary: pd.DataFrame, output_dir: str) -> List[str]:
    """
    Save grouped bar charts of units/sec and MB/sec per phase.

    Parameters
    ----------
    summary : pd.DataFrame
        Output of :func:`summarize`.
    output_dir : str
        Directory for the PNG files (created if missing).

    Returns
    -------
    List[str]
        Paths of the files written.
    """
    os.makedirs(output_dir, exist_ok=True)

    flat = summary.reset_index()
    phases = list(dict.fromkeys(flat["phase"]))
    kinds = list(dict.fromkeys(flat["kind"]))

    paths: List[str] = []
    for column, ylabel, filename in (
        ("units_per_sec", "Units processed / sec", "units_per_sec.png"),
        ("mb_per_sec", "MB / sec", "mb_per_sec.png"),
    ):
        table = (
            flat.pivot(index="phase", columns="kind", values=column)
            .reindex(index=phases, columns=kinds)
            .replace([np.inf, -np.inf], np.nan)
        )

        fig, ax = plt.subplots(figsize=(12, 5))
        x = np.arange(len(phases))
        width = 0.8 / max(len(kinds), 1)
        for k, kind in enumerate(kinds):
            ax.bar(x + (k - (len(kinds) - 1) / 2) * width, table[kind].to_numpy(),
                   width, label=kind, edgecolor="black")
        ax.set_xticks(x)
        ax.set_xticklabels(phases, rotation=30, ha="right")
        ax.set_yscale("log")
        ax.set_ylabel(ylabel)
        ax.set_title(f"{ylabel} by phase and representation")
        ax.legend()
        plt.tight_layout()

        path = os.path.join(output_dir, filename)
        fig.savefig(path, dpi=150)
        plt.close(fig)
        paths.append(path)

    return paths
