"""Nutrient totals derived from consumed foods."""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from functools import lru_cache

from calorie_tracker.domain.meals import ConsumedFood


@dataclass(frozen=True)
class NutrientTotals:
    """Rounded totals shown on a meal screen."""

    calories: int
    proteins: int
    fats: int
    carbs: int


def nutrient_totals(consumed_foods: Iterable[ConsumedFood]) -> NutrientTotals:
    """Sum the per-item rounded nutrients of ``consumed_foods``.

    Results are memoized on the exact items, so repeated renders of the
    same state do not recompute.
    """
    return _nutrient_totals(tuple(consumed_foods))


@lru_cache(maxsize=64)
def _nutrient_totals(consumed_foods: tuple[ConsumedFood, ...]) -> NutrientTotals:
    return NutrientTotals(
        calories=sum(
            portion_amount(item.grams, item.food.calories_in_100_grams)
            for item in consumed_foods
        ),
        proteins=sum(
            portion_amount(item.grams, item.food.proteins_in_100_grams)
            for item in consumed_foods
        ),
        fats=sum(
            portion_amount(item.grams, item.food.fats_in_100_grams)
            for item in consumed_foods
        ),
        carbs=sum(
            portion_amount(item.grams, item.food.carbs_in_100_grams)
            for item in consumed_foods
        ),
    )


def portion_amount(grams: int, amount_in_100_grams: float) -> int:
    """Scale a per-100 g value to ``grams``, rounding half up."""
    return math.floor(grams / 100 * amount_in_100_grams + 0.5)
