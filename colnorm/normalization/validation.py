"""
Input validation for normalization.

Converts array-likes to float64 arrays and fails fast on malformed shapes.
Numeric edge cases are NOT validation failures: a zero-scale column or a
non-positive log input produces NaN/Inf, never an exception.
"""

import logging

import numpy as np
from numpy.typing import ArrayLike

from colnorm.core.exceptions import ValidationError
from colnorm.core.types import ColumnVector, Matrix


logger = logging.getLogger(__name__)


def as_matrix(matrix: ArrayLike) -> Matrix:
    """
    Convert input to a 2-D float64 matrix.

    Args:
        matrix: Nested lists, ndarray, or DataFrame of shape (samples, features)

    Returns:
        2-D float64 array (the input itself when already float64; never mutated)

    Raises:
        ValidationError: If the input is ragged, non-numeric, not 2-D, or empty
    """
    try:
        arr = np.asarray(matrix, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise ValidationError(
            f"Matrix must be numeric and rectangular: {e}",
            field="matrix",
        ) from e

    if arr.ndim != 2:
        raise ValidationError(
            f"Matrix must be 2-D, got {arr.ndim}-D",
            field="matrix.ndim",
            value=arr.ndim,
        )

    num_samples, num_features = arr.shape
    if num_samples < 1 or num_features < 1:
        raise ValidationError(
            "Matrix needs at least one sample and one feature",
            field="matrix.shape",
            value=arr.shape,
        )

    return arr


def check_column_vector(
    vector: ArrayLike,
    num_features: int,
    field: str = "vector",
) -> ColumnVector:
    """
    Convert a per-column statistic to a 1-D float64 array of the right length.

    Args:
        vector: One value per column
        num_features: Expected length (matrix column count)
        field: Name used in the error message

    Returns:
        1-D float64 array

    Raises:
        ValidationError: If the vector is not 1-D or its length is wrong
    """
    try:
        arr = np.asarray(vector, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{field} must be numeric: {e}", field=field) from e

    if arr.ndim != 1:
        raise ValidationError(
            f"{field} must be 1-D, got {arr.ndim}-D",
            field=field,
            value=arr.shape,
        )

    if len(arr) != num_features:
        raise ValidationError(
            f"{field} has length {len(arr)}, matrix has {num_features} columns",
            field=field,
            value=len(arr),
        )

    return arr


def zero_scale_columns(scale: ColumnVector) -> list[int]:
    """
    Find columns whose scale (std, range or IQR) is zero or NaN.

    Dividing by these yields NaN/Inf in the normalized output.

    Args:
        scale: Per-column divisor

    Returns:
        Sorted column indices
    """
    bad = (scale == 0) | np.isnan(scale)
    return [int(i) for i in np.flatnonzero(bad)]


def warn_zero_scale(scale: ColumnVector, method: str) -> None:
    """Log a warning naming constant columns about to produce NaN/Inf."""
    columns = zero_scale_columns(scale)
    if columns:
        logger.warning(
            f"{method}: zero scale in columns {columns}, output will contain NaN/Inf"
        )
