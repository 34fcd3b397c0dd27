"""
Normalization pipeline.

Orchestrates normalization of all columns of a DataFrame using configured
methods.

FIT / TRANSFORM:
    Column statistics are fitted once (typically on the training split)
    and then reapplied unchanged to any frame with the same columns,
    e.g. the held-out test split. Statistics are never refitted on
    transform.
"""

import logging
from typing import Any

import numpy as np
import pandas as pd

from colnorm.core.config import NormalizationConfig, load_config
from colnorm.core.exceptions import NormalizationError, ValidationError
from colnorm.core.types import ColumnStats, NormalizationMethod
from colnorm.normalization.methods import apply_with_stats, compute_column_stats
from colnorm.normalization.validation import as_matrix


logger = logging.getLogger(__name__)


class NormalizationPipeline:
    """
    Pipeline for normalizing the feature columns of a DataFrame.

    Loads configuration from YAML and applies the configured method to
    each column. Columns without an entry use the default method.
    """

    def __init__(self, config: NormalizationConfig | None = None) -> None:
        """
        Initialize normalization pipeline.

        Args:
            config: Normalization configuration (loaded from YAML if not provided)
        """
        self.config = config or load_config("normalization")

        self._columns: list = []
        self._stats: ColumnStats | None = None

    @property
    def is_fitted(self) -> bool:
        """Whether fit() has been called."""
        return self._stats is not None

    @property
    def stats(self) -> ColumnStats:
        """Fitted column statistics."""
        if self._stats is None:
            raise NormalizationError("Pipeline has not been fitted")
        return self._stats

    def get_method(self, column: str) -> NormalizationMethod:
        """Normalization method configured for a column."""
        return self.config.get_method(str(column))

    def fit(self, frame: pd.DataFrame) -> "NormalizationPipeline":
        """
        Compute column statistics from a frame.

        Args:
            frame: Training data, one column per feature

        Returns:
            self
        """
        numeric = frame.select_dtypes(include="number")
        skipped = [c for c in frame.columns if c not in numeric.columns]
        if skipped:
            logger.warning(f"Skipping non-numeric columns: {skipped}")

        self._stats = compute_column_stats(numeric.to_numpy(dtype=np.float64))
        self._columns = list(numeric.columns)

        logger.info(
            f"Fitted normalization stats on {self._stats.count} rows, "
            f"{len(self._columns)} columns"
        )
        return self

    def transform(self, frame: pd.DataFrame) -> pd.DataFrame:
        """
        Normalize a frame with the fitted statistics.

        Args:
            frame: Data with (at least) the fitted columns

        Returns:
            New DataFrame with the fitted columns normalized, same index
        """
        if self._stats is None:
            raise NormalizationError("transform() called before fit()")

        missing = [c for c in self._columns if c not in frame.columns]
        if missing:
            raise ValidationError(
                f"Frame is missing fitted columns: {missing}",
                field="columns",
                value=missing,
            )

        result = pd.DataFrame(index=frame.index, columns=self._columns, dtype=np.float64)

        for method, indices in self._group_by_method().items():
            columns = [self._columns[i] for i in indices]

            try:
                values = as_matrix(frame[columns])
            except ValidationError as e:
                raise ValidationError(
                    f"Fitted columns must be numeric: {e.args[0]}",
                    field="columns",
                    value=columns,
                ) from e

            try:
                normalized = apply_with_stats(
                    values,
                    method,
                    self._stats.take(indices),
                    warn=self.config.warn_on_zero_scale,
                )
            except ValidationError as e:
                raise NormalizationError(
                    f"Failed to normalize {columns}: {e}",
                    method=method.value,
                    feature=", ".join(map(str, columns)),
                ) from e

            result[columns] = normalized
            logger.debug(f"Applied {method.value} to {columns}")

        return result

    def fit_transform(self, frame: pd.DataFrame) -> pd.DataFrame:
        """Fit on a frame and normalize it in one step."""
        return self.fit(frame).transform(frame)

    def _group_by_method(self) -> dict[NormalizationMethod, list[int]]:
        """Map each configured method to the indices of its columns."""
        groups: dict[NormalizationMethod, list[int]] = {}
        for i, column in enumerate(self._columns):
            groups.setdefault(self.get_method(column), []).append(i)
        return groups

    def get_normalization_summary(self) -> dict[str, Any]:
        """
        Get summary of normalization state.

        Returns:
            Dictionary with normalization status per column
        """
        summary: dict[str, Any] = {
            "fitted": self.is_fitted,
            "default_method": self.config.default_method,
            "row_count": self._stats.count if self._stats is not None else 0,
            "feature_status": {},
        }

        for i, column in enumerate(self._columns):
            status: dict[str, Any] = {"method": self.get_method(column).value}
            if self._stats is not None:
                stats = self._stats.take([i])
                status.update({
                    "mean": float(stats.mean[0]),
                    "std": float(stats.std[0]),
                    "min": float(stats.min[0]),
                    "max": float(stats.max[0]),
                    "median": float(stats.median[0]),
                    "iqr": float(stats.iqr[0]),
                })
            summary["feature_status"][str(column)] = status

        return summary
