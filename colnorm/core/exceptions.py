"""
Custom exceptions for colnorm.

All exceptions inherit from ColnormError for easy catching.
Numeric edge cases (zero scale, log of non-positive values) are not
exceptions: they surface as NaN/Inf in the output.
"""


class ColnormError(Exception):
    """Base exception for all colnorm errors."""

    pass


class ConfigurationError(ColnormError):
    """Raised when configuration is invalid or missing."""

    pass


class ValidationError(ColnormError):
    """Raised when an input matrix or statistic vector has the wrong shape."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: object = None,
    ):
        super().__init__(message)
        self.field = field
        self.value = value

    def __str__(self) -> str:
        parts = [self.args[0]]
        if self.field:
            parts.append(f"field={self.field}")
        if self.value is not None:
            parts.append(f"value={self.value!r}")
        return " | ".join(parts)


class NormalizationError(ColnormError):
    """Raised when normalization cannot be carried out."""

    def __init__(
        self,
        message: str,
        method: str | None = None,
        feature: str | None = None,
    ):
        super().__init__(message)
        self.method = method
        self.feature = feature

    def __str__(self) -> str:
        parts = [self.args[0]]
        if self.method:
            parts.append(f"method={self.method}")
        if self.feature:
            parts.append(f"feature={self.feature}")
        return " | ".join(parts)
