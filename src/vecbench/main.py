#!/usr/bin/env python3
"""
===============================================================================
VECBENCH - MAIN ENTRY POINT
===============================================================================
Benchmarks dense, random-access sparse and sequential-access sparse vectors
on creation, cloning, dot products and five distance measures, and reports
throughput (units/sec) and estimated memory bandwidth (MB/sec).

USAGE:
    python -m vecbench                          # Defaults: 1000 x 100, 200 loops
    python -m vecbench -vs 10000 -nv 50 -l 20   # Larger, fewer vectors
    python -m vecbench --seed 7                 # Reproducible corpus
    python -m vecbench --config config/benchmark_config.yaml
    python -m vecbench --plot-dir results/      # Also save throughput charts

Parameter precedence: built-in defaults < YAML config file < command line.
===============================================================================
"""

import sys
import argparse
import logging
from typing import Any, Dict, Optional, Sequence, Tuple

import numpy as np
import yaml

from vecbench.core.constants import (
    CONFIG_KEYS,
    CONFIG_SECTION,
    DEFAULT_CARDINALITY,
    DEFAULT_LOOP,
    DEFAULT_NUM_VECTORS,
    DEFAULT_OPS_PER_UNIT,
    LOG_FORMAT,
)
from vecbench.performance.reporting import format_summary, plot_throughput, summarize
from vecbench.performance.vector_benchmarks import (
    BenchmarkParameters,
    VectorBenchmarks,
    generate_corpus,
)

logger = logging.getLogger('VECBENCH_MAIN')


class UsageError(Exception):
    """Command line could not be parsed."""


class _UsageParser(argparse.ArgumentParser):
    """ArgumentParser that reports problems instead of exiting the process."""

    def error(self, message):
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _UsageParser(
        prog='vecbench',
        description='Vector representation and distance measure benchmarks',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        epilog="""
Examples:
  vecbench                          Default run
  vecbench -vs 100 -nv 10 -l 5      Quick run
  vecbench --seed 42 --plot-dir out Reproducible run with charts
        """
    )

    parser.add_argument('-vs', '--vectorSize', dest='vector_size', type=int, default=None,
                        metavar='vs',
                        help=f'Cardinality of the vector. Default {DEFAULT_CARDINALITY}')
    parser.add_argument('-nv', '--numVectors', dest='num_vectors', type=int, default=None,
                        metavar='nv',
                        help=f'Number of Vectors to create. Default: {DEFAULT_NUM_VECTORS}')
    parser.add_argument('-l', '--loop', dest='loop', type=int, default=None,
                        metavar='loop',
                        help=f'Number of times to loop. Default: {DEFAULT_LOOP}')
    parser.add_argument('-no', '--numOps', dest='num_ops', type=int, default=None,
                        metavar='numOps',
                        help='Number of operations to do per timer. E.g In distance '
                             'measure, the distance is calculated numOps times and the '
                             f'total time is measured. Default: {DEFAULT_OPS_PER_UNIT}')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for the reference corpus (default: unseeded)')
    parser.add_argument('--config', type=str, default=None,
                        help='Path to a benchmark config YAML')
    parser.add_argument('--plot-dir', type=str, default=None,
                        help='Directory to save throughput charts into')
    parser.add_argument('--log-level', type=str, default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging verbosity (default: INFO)')
    parser.add_argument('-h', '--help', action='store_true',
                        help='Print out help')
    return parser


def load_config(config_path: str) -> Dict[str, Any]:
    """
    Load the ``benchmark`` section of a YAML config file.

    Args:
        config_path: Path to the YAML file.

    Returns:
        Mapping of recognised keys (vector_size, num_vectors, loop, num_ops,
        seed) to values.  An empty file or missing section yields ``{}``.
    """
    logger.info(f"Loading configuration from: {config_path}")
    with open(config_path, 'r') as f:
        try:
            config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid config file {config_path}: {e}") from e
    if not isinstance(config, dict):
        raise ValueError(f"Invalid config file {config_path}: top level must be a mapping")
    section = config.get(CONFIG_SECTION) or {}
    if not isinstance(section, dict):
        raise ValueError(f"'{CONFIG_SECTION}' section must be a mapping")
    unknown = sorted(set(section) - set(CONFIG_KEYS))
    if unknown:
        raise ValueError(f"Unknown config keys: {unknown}. Valid: {list(CONFIG_KEYS)}")
    return section


def resolve_parameters(
    args: argparse.Namespace,
    config: Dict[str, Any],
) -> Tuple[BenchmarkParameters, Optional[int]]:
    """Merge defaults, config values and CLI flags into benchmark parameters."""

    def pick(flag_value, key, default):
        if flag_value is not None:
            return flag_value
        return config.get(key, default)

    params = BenchmarkParameters(
        cardinality=pick(args.vector_size, 'vector_size', DEFAULT_CARDINALITY),
        num_vectors=pick(args.num_vectors, 'num_vectors', DEFAULT_NUM_VECTORS),
        loop=pick(args.loop, 'loop', DEFAULT_LOOP),
        ops_per_unit=pick(args.num_ops, 'num_ops', DEFAULT_OPS_PER_UNIT),
    )
    seed = pick(args.seed, 'seed', None)
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int) or seed < 0):
        raise ValueError(f"seed must be a non-negative integer, got {seed!r}")
    return params, seed


def run_benchmarks(params: BenchmarkParameters, seed: Optional[int] = None,
                   plot_dir: Optional[str] = None):
    """
    Generate the corpus, run every phase and log the summary table.

    Returns the list of phase results.
    """
    rng = np.random.default_rng(seed)
    logger.info(f"Generating {params.num_vectors} Gaussian vectors of size "
                f"{params.cardinality} (seed={seed})")
    corpus = generate_corpus(params, rng)

    results = VectorBenchmarks.run_all(params, corpus)

    summary = summarize(results)
    logger.info("=" * 60)
    logger.info("SUMMARY")
    logger.info("=" * 60)
    logger.info("\n" + format_summary(summary))

    if plot_dir:
        paths = plot_throughput(summary, plot_dir)
        logger.info(f"Plots saved to {plot_dir}: {len(paths)} files")
    return results


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point. Parses command line arguments and runs the benchmarks.

    Help requests, unparseable arguments and invalid parameter combinations
    print the usage text and return without running anything.
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except UsageError as e:
        print(f"vecbench: error: {e}", file=sys.stderr)
        parser.print_help()
        return 0

    if args.help:
        parser.print_help()
        return 0

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    try:
        config = load_config(args.config) if args.config else {}
        params, seed = resolve_parameters(args, config)
    except ValueError as e:
        print(f"vecbench: error: {e}", file=sys.stderr)
        parser.print_help()
        return 0

    run_benchmarks(params, seed=seed, plot_dir=args.plot_dir)
    return 0


if __name__ == '__main__':
    sys.exit(main())
