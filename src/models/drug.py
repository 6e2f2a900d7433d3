"""Drug data model with daily benefit updates."""

import logging

from pydantic import BaseModel, Field

from src.benefit import BenefitRules, DrugCategory, DrugState

logger = logging.getLogger(__name__)


class DrugRecord(BaseModel):
    """
    Structured snapshot of a drug for display or export.

    Attributes:
        category: Category name as supplied at construction
        remaining_validity: Days until expiry (negative once past expiry)
        benefit: Benefit score
    """
    category: str = Field(..., description="Category name")
    remaining_validity: int = Field(..., description="Days until expiry")
    benefit: int = Field(..., description="Benefit score")


class Drug(BaseModel):
    """
    Represents a drug in the pharmacy catalogue.

    Business Rules:
    - Category selects the benefit rule (unknown names use the normal rule)
    - Benefit stays within [0, 50] after every tick
    - Remaining validity decreases by 1 per tick, except for Magic Pill
    - Constructor values are stored as given; clamping happens on tick

    Attributes:
        category: Category name, fixed after construction
        remaining_validity: Days until expiry (negative once past expiry)
        benefit: Benefit score
    """
    category: str = Field(..., description="Category name", frozen=True)
    remaining_validity: int = Field(..., description="Days until expiry")
    benefit: int = Field(..., description="Benefit score")

    @property
    def kind(self) -> DrugCategory:
        """Resolved category used for rule dispatch."""
        return DrugCategory.resolve(self.category)

    @property
    def state(self) -> DrugState:
        """Current benefit state."""
        return DrugState(remaining_validity=self.remaining_validity, benefit=self.benefit)

    @property
    def is_expired(self) -> bool:
        """Check if the drug has reached or passed its expiry."""
        return self.state.is_expired

    def tick(self) -> None:
        """Advance this drug by one day according to its category rule."""
        next_state = BenefitRules.advance(self.kind, self.state)
        logger.debug(
            f"{self.category}: validity {self.remaining_validity} -> {next_state.remaining_validity}, "
            f"benefit {self.benefit} -> {next_state.benefit}"
        )
        self.remaining_validity = next_state.remaining_validity
        self.benefit = next_state.benefit

    def to_record(self) -> DrugRecord:
        """
        Get a structured record of the current state.

        Returns:
            DrugRecord with category, remaining_validity and benefit
        """
        return DrugRecord(
            category=self.category,
            remaining_validity=self.remaining_validity,
            benefit=self.benefit,
        )

    def __str__(self) -> str:
        """String representation."""
        return f"{self.category} (validity={self.remaining_validity}d, benefit={self.benefit})"
