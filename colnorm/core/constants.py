"""
Constants for colnorm.

Central location for default values used by the normalization methods.
"""

# ============================================================
# NORMALIZATION DEFAULTS
# ============================================================

# Method applied to columns without an explicit entry in normalization.yaml
DEFAULT_METHOD = "zscore"

# Population standard deviation (divide by N, not N - 1)
STD_DDOF = 0

# ============================================================
# ROBUST SCALING
# ============================================================

# Lower and upper quartile percentiles
Q1_PERCENTILE = 25.0
Q3_PERCENTILE = 75.0

# Linear interpolation between closest ranks, applied to both quartiles.
# Column [1, 2, 3, 4, 5] -> Q1 = 2, Q3 = 4
QUARTILE_METHOD = "linear"

# ============================================================
# CONFIG FILES
# ============================================================

CONFIG_FILES = {
    "normalization": "normalization.yaml",
}
