"""
===============================================================================
VECBENCH - Reporting Test Suite
===============================================================================
Tests the pandas summary table and the matplotlib throughput charts built
from a real (tiny) benchmark run.
===============================================================================
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np
import pytest

from vecbench.performance.reporting import (
    SUMMARY_COLUMNS,
    format_summary,
    plot_throughput,
    summarize,
)
from vecbench.performance.vector_benchmarks import (
    BenchmarkParameters,
    VectorBenchmarks,
    generate_corpus,
)


@pytest.fixture(scope="module")
def results():
    params = BenchmarkParameters(cardinality=8, num_vectors=3, loop=2, ops_per_unit=2)
    corpus = generate_corpus(params, np.random.default_rng(42))
    return VectorBenchmarks.run_all(params, corpus)


class TestSummarize:

    def test_one_row_per_result(self, results):
        summary = summarize(results)
        assert len(summary) == len(results)
        assert list(summary.index.names) == ["phase", "kind"]
        assert list(summary.columns) == SUMMARY_COLUMNS

    def test_phase_names_keep_run_order(self, results):
        phases = list(dict.fromkeys(summarize(results).index.get_level_values("phase")))
        assert phases == [
            "Create", "Clone", "DotProduct",
            "DistanceMeasure cosine", "DistanceMeasure squared_euclidean",
            "DistanceMeasure euclidean", "DistanceMeasure manhattan",
            "DistanceMeasure tanimoto",
        ]

    def test_values_match_results(self, results):
        summary = summarize(results)
        row = summary.loc[("DotProduct", "DenseVector")]
        dot = next(r for r in results if r.operation == "DotProduct")
        assert row["result"] == dot.result
        assert row["num_calls"] == 6
        assert row["units_per_sec"] == dot.units_per_sec

    def test_create_rows_have_no_result(self, results):
        summary = summarize(results)
        assert summary.loc["Create"]["result"].isna().all()

    def test_empty(self):
        summary = summarize([])
        assert summary.empty
        assert list(summary.columns) == SUMMARY_COLUMNS


class TestFormatting:

    def test_format_mentions_every_kind(self, results):
        text = format_summary(summarize(results))
        for kind in ("DenseVector", "RandomAccessSparseVector", "SequentialAccessSparseVector"):
            assert kind in text
        assert "units_per_sec" in text


class TestPlots:

    def test_plot_files_written(self, results, tmp_path):
        out_dir = tmp_path / "plots"
        paths = plot_throughput(summarize(results), str(out_dir))
        assert len(paths) == 2
        for path in paths:
            assert os.path.isfile(path)
            assert os.path.getsize(path) > 0
