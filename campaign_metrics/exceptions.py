"""Custom exceptions for the campaign metrics package."""

from pathlib import Path


class MetricsError(Exception):
    """Base exception for campaign metrics errors."""

    pass


class SchemaLoadError(MetricsError):
    """Failed to load the field registry or metrics configuration."""

    pass


class PayloadLoadError(MetricsError):
    """Failed to read a campaigns payload file."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load campaigns payload from {path}: {reason}")


class MetricsValidationError(MetricsError):
    """Normalized metrics violate one or more logical invariants.

    All violated rules are collected, not just the first one.
    """

    kind = "InvariantViolation"

    def __init__(self, violations: list[str]):
        self.violations = list(violations)
        super().__init__(f"Validation failed: {', '.join(self.violations)}")


ValidationError = MetricsValidationError
