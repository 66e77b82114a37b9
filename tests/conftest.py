import sys
from pathlib import Path

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from cachematrix.cell import CacheCell  # noqa: E402


ROUND_TRIP_MATRIX = [[1, 2, 3], [0, 1, 4], [5, 6, 0]]
SINGULAR_MATRIX = [[2, 6], [1, 3]]


@pytest.fixture
def round_trip_cell():
    return CacheCell(ROUND_TRIP_MATRIX)


@pytest.fixture
def singular_cell():
    return CacheCell(SINGULAR_MATRIX)


@pytest.fixture
def random_invertible():
    rng = np.random.default_rng(seed=7)
    # Diagonal dominance keeps the matrix well conditioned.
    return rng.uniform(-1, +1, (5, 5)) + 5 * np.identity(5)
