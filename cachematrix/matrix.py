"""Matrix validation and the inversion routines used by the solver.

Inputs are coerced to ``float64`` two-dimensional arrays by :func:`as_matrix`.
:func:`invert` never hands back a partial or garbage result: when a matrix is
not square, is exactly singular, produces non-finite entries, or has a
reciprocal 1-norm condition number below ``rcond_tolerance`` the call raises
:class:`~cachematrix.exceptions.NotInvertibleError`.

Available methods:

* ``inv`` delegates to :func:`numpy.linalg.inv`.
* ``lu`` factors once with :func:`scipy.linalg.lu_factor` and solves against
  the identity.
* ``gauss_jordan`` reduces ``[A | I]`` with partial pivoting.
"""

import logging
import warnings
from typing import Any, Callable, Dict

import numpy as np
from scipy.linalg import LinAlgWarning, lu_factor, lu_solve

from cachematrix.exceptions import InvalidInputError, NotInvertibleError

logger = logging.getLogger(__name__)

# Same cut-off R's solve() applies before declaring a system computationally singular.
DEFAULT_RCOND_TOLERANCE = float(np.finfo(np.float64).eps)

_NUMERIC_KINDS = {"i", "u", "f"}


def as_matrix(value: Any) -> np.ndarray:
    """Return a private ``float64`` copy of ``value`` or raise ``InvalidInputError``."""
    try:
        array = np.asarray(value)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"Cannot interpret input as a matrix: {exc}") from exc

    if array.dtype.kind not in _NUMERIC_KINDS:
        raise InvalidInputError(
            f"Matrix entries must be real numbers, got dtype '{array.dtype}'"
        )
    if array.ndim != 2:
        raise InvalidInputError(
            f"Matrix must be two-dimensional, got {array.ndim} dimension(s)"
        )
    if array.size == 0:
        raise InvalidInputError(
            f"Matrix must have at least one row and one column, got shape {array.shape}"
        )

    matrix = np.array(array, dtype=np.float64)
    if not np.all(np.isfinite(matrix)):
        raise InvalidInputError("Matrix entries must be finite")
    return matrix


def invert_numpy(matrix: np.ndarray) -> np.ndarray:
    """Invert with LAPACK ``gesv`` through numpy."""
    return np.linalg.inv(matrix)


def invert_lu(matrix: np.ndarray) -> np.ndarray:
    """Invert matrix using LU decomposition."""
    with warnings.catch_warnings():
        warnings.simplefilter("error", LinAlgWarning)
        try:
            lu, piv = lu_factor(matrix, check_finite=False)
        except LinAlgWarning as exc:
            raise np.linalg.LinAlgError(str(exc)) from exc
    identity = np.identity(matrix.shape[0])
    return lu_solve((lu, piv), identity, check_finite=False)


def invert_gauss_jordan(matrix: np.ndarray) -> np.ndarray:
    """Invert matrix using Gauss-Jordan elimination."""
    n = matrix.shape[0]
    augmented = np.hstack([np.array(matrix, dtype=float), np.identity(n)])

    for i in range(n):
        # Pivoting
        max_row = int(np.argmax(np.abs(augmented[i:, i]))) + i
        if augmented[max_row, i] == 0.0:
            raise np.linalg.LinAlgError("Singular matrix")
        augmented[[i, max_row]] = augmented[[max_row, i]]

        augmented[i] /= augmented[i, i]

        for j in range(n):
            if i != j:
                augmented[j] -= augmented[i] * augmented[j, i]

    return augmented[:, n:]


INVERSION_METHODS: Dict[str, Callable[[np.ndarray], np.ndarray]] = {
    "inv": invert_numpy,
    "lu": invert_lu,
    "gauss_jordan": invert_gauss_jordan,
}


def reciprocal_condition(matrix: np.ndarray, inverse: np.ndarray) -> float:
    """Return ``1 / (||A||_1 * ||A^-1||_1)``, or ``0.0`` when the product is not finite."""
    product = float(np.linalg.norm(matrix, 1) * np.linalg.norm(inverse, 1))
    if not np.isfinite(product) or product == 0.0:
        return 0.0
    return 1.0 / product


def invert(
    matrix: Any,
    method: str = "inv",
    rcond_tolerance: float = DEFAULT_RCOND_TOLERANCE,
) -> np.ndarray:
    """Invert ``matrix`` with ``method`` or raise ``NotInvertibleError``.

    Args:
        matrix: Square matrix to invert. Anything numpy can turn into a float
            array is accepted; other input is reported as not invertible.
        method: One of :data:`INVERSION_METHODS`.
        rcond_tolerance: Matrices whose reciprocal condition number falls
            below this value are treated as singular.

    Raises:
        ValueError: ``method`` is unknown.
        NotInvertibleError: the matrix has no usable inverse.
    """
    solver = INVERSION_METHODS.get(method)
    if solver is None:
        raise ValueError(
            f"Unknown inversion method: {method}. Expected one of "
            + ", ".join(sorted(INVERSION_METHODS))
        )

    try:
        array = np.asarray(matrix, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise NotInvertibleError(f"Matrix is not invertible: {exc}") from exc

    if array.ndim != 2 or array.size == 0 or array.shape[0] != array.shape[1]:
        raise NotInvertibleError(
            f"Matrix is not invertible: expected a square matrix, got shape {array.shape}",
            shape=array.shape,
        )
    if not np.all(np.isfinite(array)):
        raise NotInvertibleError(
            "Matrix is not invertible: entries must be finite", shape=array.shape
        )

    try:
        inverse = solver(array)
    except np.linalg.LinAlgError as exc:
        raise NotInvertibleError(
            f"Matrix is not invertible: {exc}", shape=array.shape, rcond=0.0
        ) from exc

    if not np.all(np.isfinite(inverse)):
        raise NotInvertibleError(
            "Matrix is not invertible: inversion produced non-finite entries",
            shape=array.shape,
            rcond=0.0,
        )

    rcond = reciprocal_condition(array, inverse)
    if rcond < rcond_tolerance:
        raise NotInvertibleError(
            f"Matrix is computationally singular: reciprocal condition number = {rcond:.6g}",
            shape=array.shape,
            rcond=rcond,
        )

    logger.debug(
        "Inverted %dx%d matrix with method=%s (rcond=%.3g)",
        array.shape[0],
        array.shape[1],
        method,
        rcond,
    )
    return inverse


def is_inverse(matrix: Any, candidate: Any, atol: float = 1e-8) -> bool:
    """Return ``True`` when ``matrix @ candidate`` and ``candidate @ matrix`` are the identity."""
    a = np.asarray(matrix, dtype=np.float64)
    b = np.asarray(candidate, dtype=np.float64)
    if a.ndim != 2 or b.shape != a.T.shape or a.shape[0] != a.shape[1]:
        return False
    identity = np.identity(a.shape[0])
    return bool(np.allclose(a @ b, identity, atol=atol) and np.allclose(b @ a, identity, atol=atol))
