"""
Drug category definitions and benefit state data structures.

This module defines the closed set of drug categories (NORMAL, HERBAL_TEA,
MAGIC_PILL, FERVEX, DAFALGAN) and the state value exchanged with the
benefit rule engine on every tick.
"""

from dataclasses import dataclass
from enum import Enum


class DrugCategory(str, Enum):
    """
    Drug categories with distinct benefit rules.

    - NORMAL: Default rule, also used for any unrecognized category name
    - HERBAL_TEA: Benefit increases with age, twice as fast once expired
    - MAGIC_PILL: Never expires and never changes benefit
    - FERVEX: Benefit increases as expiry approaches, drops to 0 once expired
    - DAFALGAN: Degrades twice as fast as a normal drug
    """
    NORMAL = "Normal"
    HERBAL_TEA = "HerbalTea"
    MAGIC_PILL = "MagicPill"
    FERVEX = "Fervex"
    DAFALGAN = "Dafalgan"

    @classmethod
    def resolve(cls, name: str) -> 'DrugCategory':
        """
        Resolve a category name to its DrugCategory.

        Matching is exact and case-sensitive. The catalogue display names
        ("Herbal Tea", "Magic Pill") are accepted alongside the identifiers.

        Args:
            name: Raw category name as supplied by the caller

        Returns:
            The matching category, or NORMAL when the name is not recognized
        """
        if isinstance(name, DrugCategory):
            return name
        try:
            return cls(name)
        except ValueError:
            return _DISPLAY_NAMES.get(name, cls.NORMAL)

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"DrugCategory.{self.name}"


_DISPLAY_NAMES = {
    "Herbal Tea": DrugCategory.HERBAL_TEA,
    "Magic Pill": DrugCategory.MAGIC_PILL,
}


@dataclass
class DrugState:
    """
    Benefit state of a drug at the start or end of a tick.

    Attributes:
        remaining_validity: Days until expiry (negative once past expiry)
        benefit: Benefit score (kept within bounds after every tick)
    """
    remaining_validity: int
    benefit: int

    @property
    def is_expired(self) -> bool:
        """Check if the drug has reached or passed its expiry."""
        return self.remaining_validity <= 0

    def __str__(self) -> str:
        return f"DrugState(validity={self.remaining_validity}d, benefit={self.benefit})"
