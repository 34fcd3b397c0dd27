"""
Core type definitions for colnorm.

Defines enums, dataclasses, and type aliases used throughout the package.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Sequence, TypeAlias

import numpy as np
from numpy.typing import NDArray


# A 1-D array holding one statistic per column
ColumnVector: TypeAlias = NDArray[np.float64]

# A 2-D array of shape (num_samples, num_features)
Matrix: TypeAlias = NDArray[np.float64]


class NormalizationMethod(str, Enum):
    """Available normalization methods."""

    ZSCORE = "zscore"
    MINMAX = "minmax"
    LOG = "log"
    ROBUST = "robust"
    PASSTHROUGH = "passthrough"


@dataclass(frozen=True, eq=False)
class ColumnStats:
    """
    Per-column statistics of a matrix.

    Every field except count is a ColumnVector with one entry per column.
    Computed once on training data and reapplied to held-out data.
    """

    mean: ColumnVector
    std: ColumnVector  # Population standard deviation
    min: ColumnVector
    max: ColumnVector
    median: ColumnVector
    q1: ColumnVector  # 25th percentile
    q3: ColumnVector  # 75th percentile
    count: int

    @property
    def num_features(self) -> int:
        """Number of columns the stats describe."""
        return len(self.mean)

    @property
    def range(self) -> ColumnVector:
        """max - min per column."""
        return self.max - self.min

    @property
    def iqr(self) -> ColumnVector:
        """Interquartile range (Q3 - Q1) per column."""
        return self.q3 - self.q1

    def take(self, indices: Sequence[int]) -> "ColumnStats":
        """Return stats restricted to the given column indices."""
        idx = np.asarray(indices, dtype=np.intp)
        return ColumnStats(
            mean=self.mean[idx],
            std=self.std[idx],
            min=self.min[idx],
            max=self.max[idx],
            median=self.median[idx],
            q1=self.q1[idx],
            q3=self.q3[idx],
            count=self.count,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "mean": self.mean.tolist(),
            "std": self.std.tolist(),
            "min": self.min.tolist(),
            "max": self.max.tolist(),
            "median": self.median.tolist(),
            "q1": self.q1.tolist(),
            "q3": self.q3.tolist(),
            "count": self.count,
        }
