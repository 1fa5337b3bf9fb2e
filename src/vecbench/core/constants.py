"""
===============================================================================
VECBENCH - Benchmark Defaults and Reporting Constants
===============================================================================
Central repository for every number the benchmark harness uses when no
configuration file or command-line flag says otherwise. Times are kept in
nanoseconds throughout.
===============================================================================
"""

# =============================================================================
# DEFAULT BENCHMARK PARAMETERS
# =============================================================================
DEFAULT_CARDINALITY = 1000             # components per vector
DEFAULT_NUM_VECTORS = 100              # size of the reference corpus
DEFAULT_LOOP = 200                     # outer repetitions per phase
DEFAULT_OPS_PER_UNIT = 10              # distance calls folded into one timed unit
DEFAULT_MULTIPLIER = 1                 # MB/sec scaling factor

# =============================================================================
# THROUGHPUT DERIVATION
# =============================================================================
NANOS_PER_SECOND = 1.0e9
NANOS_PER_MILLI = 1.0e6
NANOS_PER_MICRO = 1.0e3
# Approximate bytes touched per component (8-byte value + 4-byte index)
BYTES_PER_COMPONENT = 12
# Nanosecond denominator -> MB/sec: bytes * 1e9 / ns / 1e6
MB_SCALE = 1000.0

# =============================================================================
# OPERATION LABELS (report order)
# =============================================================================
OP_CREATE = "Create"
OP_CLONE = "Clone"
OP_DOT = "DotProduct"
OP_DISTANCE = "DistanceMeasure"

# =============================================================================
# CONFIGURATION FILE KEYS
# =============================================================================
CONFIG_SECTION = "benchmark"
CONFIG_KEYS = ("vector_size", "num_vectors", "loop", "num_ops", "seed")

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
