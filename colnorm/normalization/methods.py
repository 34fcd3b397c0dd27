"""
Normalization methods.

Implements z-score, min-max, log10 and robust (median/IQR) normalization
over the columns of a 2-D matrix (rows = samples, columns = features).

Every statistic is computed per column across all rows. Each stateful
method is split into a compute step and an apply step so that statistics
fitted on training data can be reapplied to held-out data.

Zero scales are not guarded: a constant column yields NaN/Inf, and so does
log scaling of non-positive values. Both are logged, never raised.
"""

import logging

import numpy as np
from numpy.typing import ArrayLike

from colnorm.core.constants import (
    Q1_PERCENTILE,
    Q3_PERCENTILE,
    QUARTILE_METHOD,
    STD_DDOF,
)
from colnorm.core.exceptions import NormalizationError
from colnorm.core.types import ColumnStats, ColumnVector, Matrix, NormalizationMethod
from colnorm.normalization.validation import (
    as_matrix,
    check_column_vector,
    warn_zero_scale,
)


logger = logging.getLogger(__name__)


# ============================================================
# COLUMN STATISTICS
# ============================================================


def compute_mean_and_std(matrix: ArrayLike) -> tuple[ColumnVector, ColumnVector]:
    """
    Per-column mean and population standard deviation.

    Formula: std = sqrt(mean((x - mean)^2))

    Args:
        matrix: Data of shape (samples, features)

    Returns:
        (mean, std), each of length features. A constant column has std 0.
    """
    arr = as_matrix(matrix)
    mean = np.mean(arr, axis=0)
    std = np.std(arr, axis=0, ddof=STD_DDOF)
    return mean, std


def compute_min_max(matrix: ArrayLike) -> tuple[ColumnVector, ColumnVector]:
    """Per-column minimum and maximum."""
    arr = as_matrix(matrix)
    return np.min(arr, axis=0), np.max(arr, axis=0)


def compute_median_and_iqr_bounds(
    matrix: ArrayLike,
) -> tuple[ColumnVector, ColumnVector, ColumnVector]:
    """
    Per-column median and first/third quartiles.

    Quartiles use linear interpolation between closest ranks for both
    Q1 and Q3, so column [1, 2, 3, 4, 5] gives median 3, Q1 2, Q3 4.

    Args:
        matrix: Data of shape (samples, features)

    Returns:
        (median, q1, q3), each of length features
    """
    arr = as_matrix(matrix)
    median = np.median(arr, axis=0)
    q1, q3 = np.percentile(
        arr,
        [Q1_PERCENTILE, Q3_PERCENTILE],
        axis=0,
        method=QUARTILE_METHOD,
    )
    return median, q1, q3


def compute_column_stats(matrix: ArrayLike) -> ColumnStats:
    """
    Compute every statistic the normalization methods need.

    Args:
        matrix: Data of shape (samples, features)

    Returns:
        ColumnStats for the matrix
    """
    arr = as_matrix(matrix)

    mean, std = compute_mean_and_std(arr)
    min_val, max_val = compute_min_max(arr)
    median, q1, q3 = compute_median_and_iqr_bounds(arr)

    return ColumnStats(
        mean=mean,
        std=std,
        min=min_val,
        max=max_val,
        median=median,
        q1=q1,
        q3=q3,
        count=arr.shape[0],
    )


# ============================================================
# APPLY WITH GIVEN STATISTICS
# ============================================================


def _shift_and_scale(
    arr: Matrix,
    center: ColumnVector,
    scale: ColumnVector,
    method: str,
    warn: bool,
) -> Matrix:
    """(arr - center) / scale, column by column, letting IEEE 754 handle zeros."""
    if warn:
        warn_zero_scale(scale, method)

    with np.errstate(divide="ignore", invalid="ignore"):
        return (arr - center) / scale


def apply_zscore(
    matrix: ArrayLike,
    mean: ArrayLike,
    std: ArrayLike,
    warn: bool = True,
) -> Matrix:
    """
    Z-score normalization with caller-supplied statistics.

    Formula: (x - mean) / std

    Args:
        matrix: Data of shape (samples, features)
        mean: Per-column mean (e.g. from training data)
        std: Per-column standard deviation
        warn: Log a warning for zero-std columns

    Returns:
        New matrix of the same shape. NaN/Inf where std is 0.
    """
    arr = as_matrix(matrix)
    num_features = arr.shape[1]
    mean = check_column_vector(mean, num_features, field="mean")
    std = check_column_vector(std, num_features, field="std")
    return _shift_and_scale(arr, mean, std, NormalizationMethod.ZSCORE.value, warn)


def apply_minmax(
    matrix: ArrayLike,
    min_val: ArrayLike,
    max_val: ArrayLike,
    warn: bool = True,
) -> Matrix:
    """
    Min-max normalization with caller-supplied bounds.

    Formula: (x - min) / (max - min)

    Values outside the given bounds are NOT clipped, so held-out data may
    fall outside [0, 1].
    """
    arr = as_matrix(matrix)
    num_features = arr.shape[1]
    min_val = check_column_vector(min_val, num_features, field="min")
    max_val = check_column_vector(max_val, num_features, field="max")
    return _shift_and_scale(
        arr, min_val, max_val - min_val, NormalizationMethod.MINMAX.value, warn
    )


def apply_robust_scaling(
    matrix: ArrayLike,
    median: ArrayLike,
    q1: ArrayLike,
    q3: ArrayLike,
    warn: bool = True,
) -> Matrix:
    """
    Robust scaling with caller-supplied median and quartiles.

    Formula: (x - median) / (q3 - q1)
    """
    arr = as_matrix(matrix)
    num_features = arr.shape[1]
    median = check_column_vector(median, num_features, field="median")
    q1 = check_column_vector(q1, num_features, field="q1")
    q3 = check_column_vector(q3, num_features, field="q3")
    return _shift_and_scale(arr, median, q3 - q1, NormalizationMethod.ROBUST.value, warn)


# ============================================================
# ONE-SHOT NORMALIZATION
# ============================================================


def normalize_with_zscore(matrix: ArrayLike) -> Matrix:
    """
    Normalize each column to zero mean and unit standard deviation.

    Same result as apply_zscore(matrix, *compute_mean_and_std(matrix)).
    """
    arr = as_matrix(matrix)
    mean, std = compute_mean_and_std(arr)
    return apply_zscore(arr, mean, std)


def normalize_with_minmax(matrix: ArrayLike) -> Matrix:
    """Normalize each column onto [0, 1]. Constant columns become NaN."""
    arr = as_matrix(matrix)
    min_val, max_val = compute_min_max(arr)
    return apply_minmax(arr, min_val, max_val)


def normalize_with_log_scaling(matrix: ArrayLike, warn: bool = True) -> Matrix:
    """
    Take log base 10 of every element.

    Zero gives -inf and negative values give NaN. Keeping inputs
    strictly positive is the caller's job. With warn=True, non-positive
    inputs are logged.
    """
    arr = as_matrix(matrix)

    non_positive = int(np.count_nonzero(arr <= 0))
    if warn and non_positive:
        logger.warning(
            f"log: {non_positive} non-positive values, output will contain NaN/-inf"
        )

    with np.errstate(divide="ignore", invalid="ignore"):
        return np.log10(arr)


def normalize_with_robust_scaling(matrix: ArrayLike) -> Matrix:
    """Subtract the column median and divide by the interquartile range."""
    arr = as_matrix(matrix)
    median, q1, q3 = compute_median_and_iqr_bounds(arr)
    return apply_robust_scaling(arr, median, q1, q3)


def normalize(
    matrix: ArrayLike,
    method: NormalizationMethod | str = NormalizationMethod.ZSCORE,
) -> Matrix:
    """
    Normalize a matrix with the named method.

    Args:
        matrix: Data of shape (samples, features)
        method: NormalizationMethod or its string value

    Returns:
        New normalized matrix

    Raises:
        NormalizationError: If the method is unknown
    """
    try:
        method = NormalizationMethod(method)
    except ValueError as e:
        raise NormalizationError(
            f"Unknown normalization method: {method}",
            method=str(method),
        ) from e

    if method == NormalizationMethod.ZSCORE:
        return normalize_with_zscore(matrix)
    elif method == NormalizationMethod.MINMAX:
        return normalize_with_minmax(matrix)
    elif method == NormalizationMethod.LOG:
        return normalize_with_log_scaling(matrix)
    elif method == NormalizationMethod.ROBUST:
        return normalize_with_robust_scaling(matrix)
    else:
        return as_matrix(matrix).copy()


def apply_with_stats(
    matrix: ArrayLike,
    method: NormalizationMethod,
    stats: ColumnStats,
    warn: bool = True,
) -> Matrix:
    """
    Apply a method using previously fitted ColumnStats.

    Args:
        matrix: Data of shape (samples, features)
        method: Normalization method
        stats: Stats with one entry per matrix column
        warn: Log a warning for zero-scale columns

    Returns:
        New normalized matrix
    """
    if method == NormalizationMethod.ZSCORE:
        return apply_zscore(matrix, stats.mean, stats.std, warn=warn)
    elif method == NormalizationMethod.MINMAX:
        return apply_minmax(matrix, stats.min, stats.max, warn=warn)
    elif method == NormalizationMethod.ROBUST:
        return apply_robust_scaling(matrix, stats.median, stats.q1, stats.q3, warn=warn)
    elif method == NormalizationMethod.LOG:
        return normalize_with_log_scaling(matrix, warn=warn)
    return as_matrix(matrix).copy()
