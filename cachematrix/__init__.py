from .cell import CacheCell
from .config import SolverConfig
from .exceptions import CacheMatrixError, InvalidInputError, NotInvertibleError
from .matrix import as_matrix, invert, is_inverse
from .models import CacheStats
from .solver import solve_with_cache

__all__ = [
    "CacheCell",
    "CacheMatrixError",
    "CacheStats",
    "InvalidInputError",
    "NotInvertibleError",
    "SolverConfig",
    "as_matrix",
    "invert",
    "is_inverse",
    "solve_with_cache",
]
