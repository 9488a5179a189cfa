from pathlib import Path

DEFAULT_DATA_PATH = Path('data')
DEFAULT_VOCABULARY_PATH = Path('../TestData/vocabulary')

DEFAULT_K = 2
DEFAULT_THREADS = 2
DEFAULT_MAX_ITER = 300
DEFAULT_N_WORDS = 10

# Convergence: stop once an iteration improves total quality by no more than this
Q_THRESHOLD = 0.001

# Cosine similarity reported for zero-norm operands (lowest value of the cosine range)
DEGENERATE_SIMILARITY = -1.0
DEGENERATE_POLICIES = ('ignore', 'raise')
