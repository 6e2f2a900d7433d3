"""Multi-day pharmacy simulation.

This module drives a Pharmacy through a number of days, recording a
snapshot of every drug after each daily update and optionally checking
the benefit invariants on every transition.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional
import logging

import pandas as pd

from ..benefit.state import DrugState
from ..models.drug import DrugRecord
from ..pharmacy.registry import Pharmacy
from ..validation.benefit_validator import (
    BenefitInvariantValidator,
    InvariantViolationError,
    ValidationIssue,
    has_blocking_issues,
)

logger = logging.getLogger(__name__)

SNAPSHOT_COLUMNS = ["day", "position", "category", "remaining_validity", "benefit"]


@dataclass
class SimulationConfig:
    """Configuration for a simulation run.

    Attributes:
        days: Number of daily updates to apply
        validate_invariants: Check every transition and fail on violations
        record_initial_state: Include the state before any update as day 0
    """
    days: int = 30
    validate_invariants: bool = True
    record_initial_state: bool = False

    def __post_init__(self):
        """Validate configuration."""
        if isinstance(self.days, bool) or not isinstance(self.days, int):
            raise ValueError(f"days must be an integer, got {self.days!r}")
        if self.days < 0:
            raise ValueError(f"days cannot be negative: {self.days}")


@dataclass
class DailySnapshot:
    """State of every drug at the end of a day.

    Attributes:
        day: Day number (0 is the initial state, 1 the state after the first update)
        records: Drug records in catalogue order
    """
    day: int
    records: List[DrugRecord] = field(default_factory=list)


@dataclass
class SimulationResult:
    """Result of a simulation run.

    Attributes:
        config: Configuration the run used
        snapshots: Daily snapshots in day order
        issues: Non-blocking validation issues found during the run
    """
    config: SimulationConfig
    snapshots: List[DailySnapshot] = field(default_factory=list)
    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def final_records(self) -> List[DrugRecord]:
        """Records from the last snapshot (empty if nothing was recorded)."""
        if not self.snapshots:
            return []
        return self.snapshots[-1].records

    def benefit_history(self, position: int) -> List[int]:
        """
        Get the benefit of one drug across all snapshots.

        Args:
            position: Position of the drug in the pharmacy

        Returns:
            Benefit values in day order
        """
        return [snapshot.records[position].benefit for snapshot in self.snapshots]

    def to_dataframe(self) -> pd.DataFrame:
        """
        Convert snapshots to a DataFrame with one row per drug per day.

        Returns:
            DataFrame with columns day, position, category,
            remaining_validity and benefit
        """
        rows = [
            {"day": snapshot.day, "position": position, **record.model_dump()}
            for snapshot in self.snapshots
            for position, record in enumerate(snapshot.records)
        ]
        return pd.DataFrame(rows, columns=SNAPSHOT_COLUMNS)


def _check_day(
    validator: BenefitInvariantValidator,
    pharmacy: Pharmacy,
    before: Dict[int, DrugState],
    tick_counts: Counter,
    day: int,
) -> List[ValidationIssue]:
    """Validate every distinct drug's transition for one day."""
    issues: List[ValidationIssue] = []
    seen = set()
    for position, drug in enumerate(pharmacy):
        if id(drug) in seen:
            continue
        seen.add(id(drug))
        for issue in validator.validate_transition(
            position, before[id(drug)], drug.state, drug.kind, ticks=tick_counts[id(drug)]
        ):
            issue.metadata = {**(issue.metadata or {}), "day": day}
            issues.append(issue)
    return issues


def run_simulation(pharmacy: Pharmacy, config: Optional[SimulationConfig] = None) -> SimulationResult:
    """
    Advance a pharmacy day by day and record its state.

    Args:
        pharmacy: Pharmacy to advance (its drugs are mutated in place)
        config: Simulation configuration (defaults to SimulationConfig())

    Returns:
        SimulationResult with one snapshot per day

    Raises:
        InvariantViolationError: If invariant checks are enabled and an
            update produces an ERROR or CRITICAL issue
    """
    config = config or SimulationConfig()
    validator = BenefitInvariantValidator()
    result = SimulationResult(config=config)

    logger.info(f"Simulating {len(pharmacy)} drug(s) over {config.days} day(s)")

    if config.validate_invariants:
        result.issues.extend(validator.validate_pharmacy(pharmacy))

    if config.record_initial_state:
        result.snapshots.append(DailySnapshot(day=0, records=pharmacy.records()))

    for day in range(1, config.days + 1):
        before = {id(drug): drug.state for drug in pharmacy}
        tick_counts = Counter(id(drug) for drug in pharmacy)

        pharmacy.advance_all()

        if config.validate_invariants:
            day_issues = _check_day(validator, pharmacy, before, tick_counts, day)
            if has_blocking_issues(day_issues):
                blocking = [issue for issue in day_issues if issue.is_blocking]
                raise InvariantViolationError(day, blocking)
            result.issues.extend(day_issues)

        result.snapshots.append(DailySnapshot(day=day, records=pharmacy.records()))

    logger.info(
        f"Simulation finished after {config.days} day(s) "
        f"({len(result.issues)} non-blocking issue(s))"
    )
    return result
