"""Benefit invariant validation for pharmacy updates.

This module checks drug states before and after daily updates to catch
rule violations: benefit out of bounds, validity not decreasing by one
day per tick, and Magic Pill drugs changing state.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Union
import logging

import pandas as pd

from src.benefit import BenefitRules, DrugCategory, DrugState
from src.pharmacy import Pharmacy

logger = logging.getLogger(__name__)


class ValidationSeverity(Enum):
    """Severity levels for validation issues."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


BLOCKING_SEVERITIES = (ValidationSeverity.ERROR, ValidationSeverity.CRITICAL)


@dataclass
class ValidationIssue:
    """Represents a single validation issue.

    Attributes:
        id: Unique identifier for the issue type
        check: Check that raised the issue (e.g., "Bounds", "Validity")
        severity: Severity level (INFO, WARNING, ERROR, CRITICAL)
        title: Short title describing the issue
        description: Detailed description of the issue
        affected_data: Optional DataFrame showing affected drugs
        metadata: Additional metadata about the issue
    """
    id: str
    check: str
    severity: ValidationSeverity
    title: str
    description: str
    affected_data: Optional[pd.DataFrame] = None
    metadata: Optional[Dict[str, Any]] = None

    @property
    def is_blocking(self) -> bool:
        return self.severity in BLOCKING_SEVERITIES


class InvariantViolationError(Exception):
    """Raised when a daily update breaks a benefit invariant.

    Attributes:
        day: Simulation day on which the update was applied
        issues: Blocking issues found for that day
    """

    def __init__(self, day: int, issues: List[ValidationIssue]):
        self.day = day
        self.issues = issues
        super().__init__(self._describe())

    @property
    def positions(self) -> List[int]:
        """Positions of the drugs that broke an invariant, in pharmacy order."""
        return sorted({(issue.metadata or {}).get("position", -1) for issue in self.issues})

    def _describe(self) -> str:
        lines = [f"{len(self.issues)} blocking issue(s) on day {self.day}"]
        for issue in self.issues:
            position = (issue.metadata or {}).get("position", "?")
            lines.append(f"  drug {position} [{issue.severity.value}] {issue.title}: {issue.description}")
        return "\n".join(lines)


def has_blocking_issues(issues: List[ValidationIssue]) -> bool:
    """Check if any issue is ERROR or CRITICAL."""
    return any(issue.is_blocking for issue in issues)


class BenefitInvariantValidator:
    """Validates drug states against the benefit invariants.

    Validates:
    - Bounds: benefit within [MIN_BENEFIT, MAX_BENEFIT] after a tick
      (Magic Pill excluded, it keeps whatever benefit it was given)
    - Validity: decreases by exactly one per tick (Magic Pill: unchanged)
    - Magic Pill: benefit unchanged
    - Expiry: reports drugs that expire on this tick
    """

    def validate_transition(
        self,
        position: int,
        before: DrugState,
        after: DrugState,
        category: Union[DrugCategory, str],
        ticks: int = 1,
    ) -> List[ValidationIssue]:
        """
        Validate one drug's update.

        Args:
            position: Position of the drug in the pharmacy
            before: State before the update
            after: State after the update
            category: Drug category
            ticks: Number of ticks applied (a drug listed twice is ticked twice)

        Returns:
            List of issues found (empty if the update is valid)
        """
        category = DrugCategory.resolve(category)
        issues: List[ValidationIssue] = []
        metadata = {
            "position": position,
            "category": category.value,
            "before": str(before),
            "after": str(after),
        }

        is_magic_pill = category == DrugCategory.MAGIC_PILL
        in_bounds = BenefitRules.MIN_BENEFIT <= after.benefit <= BenefitRules.MAX_BENEFIT

        if not is_magic_pill and not in_bounds:
            issues.append(ValidationIssue(
                id="BENEFIT_OUT_OF_BOUNDS",
                check="Bounds",
                severity=ValidationSeverity.CRITICAL,
                title="Benefit out of bounds",
                description=(
                    f"Drug {position} ({category}) has benefit {after.benefit} after update, "
                    f"outside [{BenefitRules.MIN_BENEFIT}, {BenefitRules.MAX_BENEFIT}]"
                ),
                metadata=metadata,
            ))

        expected_validity = before.remaining_validity
        if BenefitRules.ages(category):
            expected_validity -= ticks

        if after.remaining_validity != expected_validity:
            issues.append(ValidationIssue(
                id="VALIDITY_DRIFT",
                check="Validity",
                severity=ValidationSeverity.ERROR,
                title="Unexpected validity change",
                description=(
                    f"Drug {position} ({category}) validity went from {before.remaining_validity} "
                    f"to {after.remaining_validity}, expected {expected_validity}"
                ),
                metadata=metadata,
            ))

        if is_magic_pill and after.benefit != before.benefit:
            issues.append(ValidationIssue(
                id="MAGIC_PILL_CHANGED",
                check="Magic Pill",
                severity=ValidationSeverity.ERROR,
                title="Magic Pill benefit changed",
                description=(
                    f"Drug {position} benefit went from {before.benefit} to {after.benefit}; "
                    f"Magic Pill benefit never changes"
                ),
                metadata=metadata,
            ))

        if not before.is_expired and after.is_expired:
            issues.append(ValidationIssue(
                id="DRUG_EXPIRED",
                check="Expiry",
                severity=ValidationSeverity.INFO,
                title="Drug expired",
                description=f"Drug {position} ({category}) reached its expiry",
                metadata=metadata,
            ))

        return issues

    def validate_pharmacy(self, pharmacy: Pharmacy) -> List[ValidationIssue]:
        """
        Validate the current state of every drug.

        Constructor values are accepted as given, so an out-of-range benefit
        is possible before the first tick. It is reported as a warning since
        the next tick clamps it; a Magic Pill keeps its value but is never
        checked against the bounds after a tick.

        Args:
            pharmacy: Pharmacy to check

        Returns:
            List of issues found
        """
        out_of_range = [
            {"position": position, **drug.to_record().model_dump()}
            for position, drug in enumerate(pharmacy)
            if not BenefitRules.MIN_BENEFIT <= drug.benefit <= BenefitRules.MAX_BENEFIT
        ]

        if not out_of_range:
            return []

        logger.warning(f"{len(out_of_range)} drug(s) start with benefit out of bounds")
        return [ValidationIssue(
            id="INITIAL_BENEFIT_OUT_OF_BOUNDS",
            check="Bounds",
            severity=ValidationSeverity.WARNING,
            title="Initial benefit out of bounds",
            description=(
                f"{len(out_of_range)} drug(s) have benefit outside "
                f"[{BenefitRules.MIN_BENEFIT}, {BenefitRules.MAX_BENEFIT}]; "
                f"values are clamped on the next update, Magic Pill values are kept"
            ),
            affected_data=pd.DataFrame(out_of_range),
            metadata={"count": len(out_of_range)},
        )]
