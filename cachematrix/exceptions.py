"""Exception hierarchy raised by the cachematrix package."""

from typing import Optional, Tuple


class CacheMatrixError(Exception):
    """Base class for every error raised by cachematrix."""


class InvalidInputError(CacheMatrixError, ValueError):
    """The supplied value is not a well-formed two-dimensional numeric matrix."""


class NotInvertibleError(CacheMatrixError, ArithmeticError):
    """The matrix is not square, or is square but singular."""

    def __init__(
        self,
        message: str = "Matrix is not invertible",
        shape: Optional[Tuple[int, ...]] = None,
        rcond: Optional[float] = None,
    ) -> None:
        super().__init__(message)
        self.shape = shape
        self.rcond = rcond
