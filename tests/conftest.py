"""Pytest configuration and shared fixtures."""

import pytest

from src.models import Drug
from src.pharmacy import Pharmacy


@pytest.fixture
def normal_drug():
    """Fixture for a normal drug well before expiry."""
    return Drug(category="Normal", remaining_validity=5, benefit=10)


@pytest.fixture
def herbal_tea():
    """Fixture for herbal tea close to the benefit cap."""
    return Drug(category="HerbalTea", remaining_validity=0, benefit=49)


@pytest.fixture
def magic_pill():
    """Fixture for a magic pill."""
    return Drug(category="MagicPill", remaining_validity=5, benefit=40)


@pytest.fixture
def fervex():
    """Fixture for Fervex more than 10 days from expiry."""
    return Drug(category="Fervex", remaining_validity=12, benefit=35)


@pytest.fixture
def dafalgan():
    """Fixture for Dafalgan."""
    return Drug(category="Dafalgan", remaining_validity=10, benefit=20)


@pytest.fixture
def mixed_pharmacy():
    """
    Fixture for a pharmacy with one drug of each behaviour.

    Order: unknown name (normal rule), Herbal Tea, Fervex, Magic Pill.
    """
    return Pharmacy([
        Drug(category="Doliprane", remaining_validity=20, benefit=30),
        Drug(category="Herbal Tea", remaining_validity=10, benefit=5),
        Drug(category="Fervex", remaining_validity=5, benefit=40),
        Drug(category="Magic Pill", remaining_validity=15, benefit=40),
    ])
