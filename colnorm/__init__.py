"""
colnorm - Column-wise normalization for tabular regression data

This package rescales the feature columns of a 2-D numeric matrix before
it is handed to a regression model:
- Z-score: zero mean, unit (population) standard deviation
- Min-max: linear rescaling onto [0, 1]
- Log scaling: log base 10 of every element
- Robust scaling: median and interquartile range

Pure transforms only. Loading data and training models happen elsewhere.
"""

__version__ = "0.1.0"
__author__ = "colnorm Team"

from colnorm.core.types import ColumnStats, NormalizationMethod
from colnorm.normalization.methods import (
    apply_zscore,
    compute_mean_and_std,
    normalize,
    normalize_with_log_scaling,
    normalize_with_minmax,
    normalize_with_robust_scaling,
    normalize_with_zscore,
)

__all__ = [
    "ColumnStats",
    "NormalizationMethod",
    "apply_zscore",
    "compute_mean_and_std",
    "normalize",
    "normalize_with_log_scaling",
    "normalize_with_minmax",
    "normalize_with_robust_scaling",
    "normalize_with_zscore",
]
