"""
Benefit rule engine for perishable drugs.

This module handles drug category resolution, the per-day benefit state,
and the category-specific benefit business rules.
"""

from .state import DrugCategory, DrugState
from .rules import BenefitRules

__all__ = [
    'DrugCategory',
    'DrugState',
    'BenefitRules',
]
