"""Memoized matrix inversion on top of :class:`~cachematrix.cell.CacheCell`."""

import logging
from typing import Callable, Optional

import numpy as np

from cachematrix.cell import CacheCell
from cachematrix.config import SolverConfig
from cachematrix.exceptions import NotInvertibleError
from cachematrix.matrix import invert

logger = logging.getLogger(__name__)

CACHE_HIT_MESSAGE = "Getting cached inverse matrix"


def solve_with_cache(
    cell: CacheCell,
    *,
    config: Optional[SolverConfig] = None,
    on_cache_hit: Optional[Callable[[CacheCell], None]] = None,
) -> np.ndarray:
    """Return the inverse of ``cell``'s matrix, computing it only when nothing is cached.

    A cached inverse is returned as is; the hit is logged and reported to
    ``on_cache_hit``. Otherwise the current matrix is inverted, stored on the
    cell and returned. The cell lock is held for the whole lookup so a
    concurrent ``set`` cannot leave the inverse of a replaced matrix behind.

    Raises:
        NotInvertibleError: the matrix is not square or is singular. Nothing
            is cached, so the next call tries again.
    """
    config = config or SolverConfig()

    with cell.lock:
        cached = cell.get_inverse()
        if cached is not None:
            cell.record_hit()
            if config.log_cache_hits:
                logger.info(CACHE_HIT_MESSAGE)
            if on_cache_hit is not None:
                on_cache_hit(cell)
            return cached

        matrix = cell.get()
        try:
            inverse = invert(
                matrix,
                method=config.method,
                rcond_tolerance=config.rcond_tolerance,
            )
        except NotInvertibleError:
            cell.record_miss(failed=True)
            logger.debug("Matrix of shape %s is not invertible", matrix.shape)
            raise

        cell.record_miss()
        cell.set_inverse(inverse)
        return cell.get_inverse()
