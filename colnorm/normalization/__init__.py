"""
Normalization module for colnorm.

Provides column-wise z-score, min-max, log10 and robust scaling of a
2-D matrix, plus a DataFrame pipeline that fits statistics once and
reapplies them to held-out data.
"""

from colnorm.normalization.methods import (
    apply_minmax,
    apply_robust_scaling,
    apply_zscore,
    compute_column_stats,
    compute_mean_and_std,
    compute_median_and_iqr_bounds,
    compute_min_max,
    normalize,
    normalize_with_log_scaling,
    normalize_with_minmax,
    normalize_with_robust_scaling,
    normalize_with_zscore,
)
from colnorm.normalization.pipeline import NormalizationPipeline

__all__ = [
    "apply_minmax",
    "apply_robust_scaling",
    "apply_zscore",
    "compute_column_stats",
    "compute_mean_and_std",
    "compute_median_and_iqr_bounds",
    "compute_min_max",
    "normalize",
    "normalize_with_log_scaling",
    "normalize_with_minmax",
    "normalize_with_robust_scaling",
    "normalize_with_zscore",
    "NormalizationPipeline",
]
