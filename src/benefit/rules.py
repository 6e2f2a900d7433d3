"""
Benefit business rules for drug categories.

This module contains the per-category rules that advance a drug's
remaining validity and benefit by one day, including the benefit bounds
and the post-expiry behaviour change.
"""

from typing import Union

from .state import DrugCategory, DrugState


class BenefitRules:
    """
    Business rules for daily benefit updates.

    Rules (evaluated against validity at the start of the day):
    - Normal: -1 benefit, -2 once expired
    - Herbal Tea: +1 benefit, +2 once expired
    - Magic Pill: no change, validity does not decrease
    - Fervex: +1, +2 at 10 days or less, +3 at 5 days or less, 0 once expired
    - Dafalgan: twice the normal degradation (-2, -4 once expired)

    Benefit is clamped to [MIN_BENEFIT, MAX_BENEFIT] after every update,
    except for Magic Pill, which keeps its state exactly as given.
    """

    MIN_BENEFIT = 0
    MAX_BENEFIT = 50

    NORMAL_MALUS = 1
    EXPIRED_NORMAL_MALUS = 2 * NORMAL_MALUS

    HERBAL_TEA_BONUS = 1
    EXPIRED_HERBAL_TEA_BONUS = 2 * HERBAL_TEA_BONUS

    DAFALGAN_MALUS = 2 * NORMAL_MALUS
    EXPIRED_DAFALGAN_MALUS = 2 * EXPIRED_NORMAL_MALUS

    FERVEX_BONUS = 1
    FERVEX_BONUS_10_DAYS = 2
    FERVEX_BONUS_5_DAYS = 3
    FERVEX_10_DAYS_THRESHOLD = 10
    FERVEX_5_DAYS_THRESHOLD = 5
    EXPIRED_FERVEX_BENEFIT = 0

    @staticmethod
    def clamp_benefit(value: int) -> int:
        """Clamp a benefit value into [MIN_BENEFIT, MAX_BENEFIT]."""
        return min(BenefitRules.MAX_BENEFIT, max(BenefitRules.MIN_BENEFIT, value))

    @staticmethod
    def fervex_bonus(remaining_validity: int) -> int:
        """
        Get the daily Fervex bonus for a non-expired drug.

        Thresholds are inclusive: exactly 10 days gives the 10-day bonus,
        exactly 5 days gives the 5-day bonus.

        Args:
            remaining_validity: Validity at the start of the day

        Returns:
            Benefit increase for the day
        """
        if remaining_validity <= BenefitRules.FERVEX_5_DAYS_THRESHOLD:
            return BenefitRules.FERVEX_BONUS_5_DAYS
        if remaining_validity <= BenefitRules.FERVEX_10_DAYS_THRESHOLD:
            return BenefitRules.FERVEX_BONUS_10_DAYS
        return BenefitRules.FERVEX_BONUS

    @staticmethod
    def advance(category: Union[DrugCategory, str], state: DrugState) -> DrugState:
        """
        Advance a drug state by one day.

        Args:
            category: Drug category (unrecognized names use the normal rule)
            state: State at the start of the day

        Returns:
            New DrugState at the end of the day
        """
        category = DrugCategory.resolve(category)

        # Magic Pill never ages and is never clamped
        if category == DrugCategory.MAGIC_PILL:
            return DrugState(remaining_validity=state.remaining_validity, benefit=state.benefit)

        expired = state.is_expired

        if category == DrugCategory.HERBAL_TEA:
            bonus = BenefitRules.EXPIRED_HERBAL_TEA_BONUS if expired else BenefitRules.HERBAL_TEA_BONUS
            benefit = state.benefit + bonus
        elif category == DrugCategory.FERVEX:
            if expired:
                benefit = BenefitRules.EXPIRED_FERVEX_BENEFIT
            else:
                benefit = state.benefit + BenefitRules.fervex_bonus(state.remaining_validity)
        elif category == DrugCategory.DAFALGAN:
            malus = BenefitRules.EXPIRED_DAFALGAN_MALUS if expired else BenefitRules.DAFALGAN_MALUS
            benefit = state.benefit - malus
        else:
            malus = BenefitRules.EXPIRED_NORMAL_MALUS if expired else BenefitRules.NORMAL_MALUS
            benefit = state.benefit - malus

        return DrugState(
            remaining_validity=state.remaining_validity - 1,
            benefit=BenefitRules.clamp_benefit(benefit),
        )

    @staticmethod
    def ages(category: Union[DrugCategory, str]) -> bool:
        """Check if drugs of this category lose validity each day."""
        return DrugCategory.resolve(category) != DrugCategory.MAGIC_PILL

    @staticmethod
    def describe(category: Union[DrugCategory, str]) -> str:
        """Get a human-readable description of a category's benefit rule."""
        descriptions = {
            DrugCategory.NORMAL: "Benefit -1 per day, -2 once expired",
            DrugCategory.HERBAL_TEA: "Benefit +1 per day, +2 once expired",
            DrugCategory.MAGIC_PILL: "Never expires, benefit never changes",
            DrugCategory.FERVEX: (
                "Benefit +1 per day, +2 at 10 days or less, +3 at 5 days or less, "
                "drops to 0 once expired"
            ),
            DrugCategory.DAFALGAN: "Benefit -2 per day, -4 once expired",
        }
        return descriptions[DrugCategory.resolve(category)]
