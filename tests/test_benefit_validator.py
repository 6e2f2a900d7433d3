"""Tests for benefit invariant validation."""

import pytest

from src.benefit import DrugCategory, DrugState
from src.models import Drug
from src.pharmacy import Pharmacy
from src.validation import (
    BenefitInvariantValidator,
    InvariantViolationError,
    ValidationSeverity,
    has_blocking_issues,
)


@pytest.fixture
def validator():
    """Fixture for invariant validator."""
    return BenefitInvariantValidator()


class TestValidateTransition:
    """Tests for single-drug transition checks."""

    def test_valid_transition(self, validator):
        """Test that a correct update raises no issues."""
        issues = validator.validate_transition(
            0, DrugState(5, 10), DrugState(4, 9), DrugCategory.NORMAL
        )
        assert issues == []

    def test_benefit_out_of_bounds(self, validator):
        """Test that a benefit above the cap is critical."""
        issues = validator.validate_transition(
            2, DrugState(5, 49), DrugState(4, 52), "HerbalTea"
        )
        assert [issue.id for issue in issues] == ["BENEFIT_OUT_OF_BOUNDS"]
        assert issues[0].severity == ValidationSeverity.CRITICAL
        assert issues[0].metadata["position"] == 2
        assert has_blocking_issues(issues)

    def test_validity_drift(self, validator):
        """Test that a validity change other than -1 is an error."""
        issues = validator.validate_transition(
            0, DrugState(5, 10), DrugState(3, 9), "Normal"
        )
        assert [issue.id for issue in issues] == ["VALIDITY_DRIFT"]
        assert issues[0].severity == ValidationSeverity.ERROR

    def test_multiple_ticks(self, validator):
        """Test expected validity when a drug is ticked more than once."""
        issues = validator.validate_transition(
            0, DrugState(5, 10), DrugState(3, 8), "Normal", ticks=2
        )
        assert issues == []

    def test_magic_pill_validity_change(self, validator):
        """Test that an aging Magic Pill is an error."""
        issues = validator.validate_transition(
            0, DrugState(5, 40), DrugState(4, 40), "MagicPill"
        )
        assert [issue.id for issue in issues] == ["VALIDITY_DRIFT"]

    def test_magic_pill_benefit_change(self, validator):
        """Test that a Magic Pill benefit change is an error."""
        issues = validator.validate_transition(
            0, DrugState(5, 40), DrugState(5, 41), "Magic Pill"
        )
        assert [issue.id for issue in issues] == ["MAGIC_PILL_CHANGED"]

    def test_magic_pill_out_of_range_is_allowed(self, validator):
        """Test that an untouched out-of-range Magic Pill is not flagged."""
        issues = validator.validate_transition(
            0, DrugState(5, 70), DrugState(5, 70), "MagicPill"
        )
        assert issues == []

    def test_magic_pill_clamp_is_flagged(self, validator):
        """Test that clamping a Magic Pill counts as a benefit change."""
        issues = validator.validate_transition(
            0, DrugState(5, 70), DrugState(5, 50), "MagicPill"
        )
        assert [issue.id for issue in issues] == ["MAGIC_PILL_CHANGED"]

    def test_expiry_reported_as_info(self, validator):
        """Test that reaching expiry is informational only."""
        issues = validator.validate_transition(
            1, DrugState(1, 10), DrugState(0, 9), "Normal"
        )
        assert [issue.id for issue in issues] == ["DRUG_EXPIRED"]
        assert issues[0].severity == ValidationSeverity.INFO
        assert not has_blocking_issues(issues)

    def test_already_expired_not_reported_again(self, validator):
        """Test that expiry is only reported on the day it happens."""
        issues = validator.validate_transition(
            0, DrugState(0, 10), DrugState(-1, 8), "Normal"
        )
        assert issues == []


class TestValidatePharmacy:
    """Tests for static pharmacy checks."""

    def test_in_range_pharmacy(self, validator, mixed_pharmacy):
        """Test that an in-range pharmacy has no issues."""
        assert validator.validate_pharmacy(mixed_pharmacy) == []

    def test_out_of_range_initial_benefit(self, validator):
        """Test that out-of-range constructor values are a warning."""
        pharmacy = Pharmacy([
            Drug(category="Normal", remaining_validity=5, benefit=10),
            Drug(category="Fervex", remaining_validity=5, benefit=60),
            Drug(category="Dafalgan", remaining_validity=5, benefit=-1),
        ])

        issues = validator.validate_pharmacy(pharmacy)

        assert len(issues) == 1
        issue = issues[0]
        assert issue.severity == ValidationSeverity.WARNING
        assert not issue.is_blocking
        assert issue.metadata == {"count": 2}
        assert list(issue.affected_data["position"]) == [1, 2]
        assert list(issue.affected_data["benefit"]) == [60, -1]

    def test_empty_pharmacy(self, validator):
        """Test that an empty pharmacy has no issues."""
        assert validator.validate_pharmacy(Pharmacy()) == []


class TestInvariantViolationError:
    """Tests for InvariantViolationError formatting."""

    def test_message_lists_day_and_drugs(self, validator):
        """Test that the message names the day and each offending drug."""
        issues = validator.validate_transition(
            3, DrugState(5, 49), DrugState(2, 52), "HerbalTea"
        )
        error = InvariantViolationError(7, issues)

        lines = str(error).splitlines()
        assert lines[0] == "2 blocking issue(s) on day 7"
        assert lines[1].startswith("  drug 3 [critical] Benefit out of bounds:")
        assert lines[2].startswith("  drug 3 [error] Unexpected validity change:")
        assert error.day == 7
        assert error.issues == issues
        assert error.positions == [3]

    def test_positions_sorted_and_distinct(self, validator):
        """Test positions across several drugs."""
        issues = (
            validator.validate_transition(4, DrugState(5, 10), DrugState(5, 9), "Normal")
            + validator.validate_transition(1, DrugState(5, 40), DrugState(5, 41), "MagicPill")
        )
        assert InvariantViolationError(2, issues).positions == [1, 4]
