"""
Pharmacy registry for daily catalogue updates.

The pharmacy owns an ordered list of drugs and advances every drug by one
day per call, in stored order.
"""

import logging
from typing import Iterator, List, Optional

from src.models.drug import Drug, DrugRecord

logger = logging.getLogger(__name__)


class Pharmacy:
    """
    Ordered collection of drugs advanced together.

    Drugs are held by reference: the list passed in is the list that is
    mutated and returned. Duplicates are allowed; a drug listed twice is
    ticked twice per update.
    """

    def __init__(self, drugs: Optional[List[Drug]] = None):
        """
        Initialize pharmacy.

        Args:
            drugs: Drugs in catalogue order (empty if None)
        """
        self.drugs = drugs if drugs is not None else []

    def advance_all(self) -> List[Drug]:
        """
        Advance every drug by one day.

        Returns:
            The same drug list, after mutation
        """
        for drug in self.drugs:
            drug.tick()

        logger.debug(f"Advanced {len(self.drugs)} drug(s)")
        return self.drugs

    def records(self) -> List[DrugRecord]:
        """Get a record of every drug, in catalogue order."""
        return [drug.to_record() for drug in self.drugs]

    def __len__(self) -> int:
        return len(self.drugs)

    def __iter__(self) -> Iterator[Drug]:
        return iter(self.drugs)

    def __str__(self) -> str:
        return f"Pharmacy(drugs={len(self.drugs)})"
