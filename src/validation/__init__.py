"""Invariant validation for pharmacy updates."""

from .benefit_validator import (
    BenefitInvariantValidator,
    InvariantViolationError,
    ValidationIssue,
    ValidationSeverity,
    has_blocking_issues,
)

__all__ = [
    "BenefitInvariantValidator",
    "InvariantViolationError",
    "ValidationIssue",
    "ValidationSeverity",
    "has_blocking_issues",
]
