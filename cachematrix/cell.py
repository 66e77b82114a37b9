"""Mutable matrix container that can hold the inverse of its current value."""

import logging
import threading
from typing import Any, Optional, Tuple

import numpy as np

from cachematrix.matrix import as_matrix
from cachematrix.models import CacheStats

logger = logging.getLogger(__name__)


def _frozen_copy(value: Any) -> np.ndarray:
    array = np.array(value, copy=True)
    array.setflags(write=False)
    return array


class CacheCell:
    """Own a matrix and, optionally, the cached inverse of that matrix.

    The cached inverse is cleared every time the matrix is replaced, so when it
    is present it always belongs to the current value. Both fields are private
    read-only copies: callers can neither mutate the cell through an array they
    still hold nor through an array the cell returned.

    ``lock`` guards both fields. :func:`cachematrix.solver.solve_with_cache`
    holds it across the whole check-compute-store sequence.
    """

    def __init__(self, initial: Any, *, validate_on_set: bool = True) -> None:
        self._value = _frozen_copy(as_matrix(initial))
        self._inverse: Optional[np.ndarray] = None
        self.validate_on_set = validate_on_set
        self.lock = threading.RLock()
        self._stats = CacheStats()

    def set(self, matrix: Any) -> None:
        """Replace the matrix and drop any cached inverse."""
        value = as_matrix(matrix) if self.validate_on_set else np.asarray(matrix)
        with self.lock:
            self._value = _frozen_copy(value)
            self._inverse = None
            self._stats.invalidations += 1
        logger.debug("Matrix replaced (shape=%s); cached inverse cleared", value.shape)

    def get(self) -> np.ndarray:
        """Return the current matrix as a read-only array."""
        with self.lock:
            return self._value

    def set_inverse(self, inverse: Any) -> None:
        """Store ``inverse`` as the cached inverse without checking it."""
        with self.lock:
            self._inverse = _frozen_copy(inverse)

    def get_inverse(self) -> Optional[np.ndarray]:
        """Return the cached inverse, or ``None`` when nothing is cached."""
        with self.lock:
            return self._inverse

    @property
    def has_inverse(self) -> bool:
        with self.lock:
            return self._inverse is not None

    @property
    def shape(self) -> Tuple[int, ...]:
        with self.lock:
            return self._value.shape

    @property
    def stats(self) -> CacheStats:
        """Snapshot of the lookup counters."""
        with self.lock:
            return self._stats.model_copy()

    def record_hit(self) -> None:
        with self.lock:
            self._stats.hits += 1

    def record_miss(self, failed: bool = False) -> None:
        with self.lock:
            self._stats.misses += 1
            if failed:
                self._stats.failures += 1

    def __repr__(self) -> str:
        state = "cached" if self.has_inverse else "stale"
        return f"CacheCell(shape={self.shape}, inverse={state})"
