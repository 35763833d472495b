"""Tests for nutrient totals."""

import pytest

from calorie_tracker.domain.meals import ConsumedFood, Food
from calorie_tracker.presentation.nutrients import (
    NutrientTotals,
    nutrient_totals,
    portion_amount,
)
from tests.conftest import BANANA, CHICKEN, OATMEAL, make_meal


def _food(calories: int, proteins: float = 0.0) -> Food:
    return Food(
        id=99,
        name="Test food",
        calories_in_100_grams=calories,
        proteins_in_100_grams=proteins,
        fats_in_100_grams=0.0,
        carbs_in_100_grams=0.0,
    )


@pytest.mark.parametrize(
    ("grams", "amount", "expected"),
    [
        (250, 1, 3),
        (150, 1, 2),
        (149, 1, 1),
        (100, 0.0, 0),
        (200, 165, 330),
    ],
)
def test_portion_amount_rounds_half_up(grams, amount, expected) -> None:
    assert portion_amount(grams, amount) == expected


def test_totals_of_empty_meal_are_zero() -> None:
    assert nutrient_totals(()) == NutrientTotals(0, 0, 0, 0)


def test_totals_sum_rounded_items() -> None:
    totals = nutrient_totals(make_meal().consumed_foods)

    assert totals == NutrientTotals(calories=209, proteins=5, fats=2, carbs=45)


def test_each_item_is_rounded_before_summing() -> None:
    food = _food(calories=1)
    items = [ConsumedFood(food=food, grams=150), ConsumedFood(food=food, grams=150)]

    assert nutrient_totals(items).calories == 4


def test_totals_are_deterministic() -> None:
    items = (
        ConsumedFood(food=OATMEAL, grams=80),
        ConsumedFood(food=BANANA, grams=33),
        ConsumedFood(food=CHICKEN, grams=210),
    )

    assert nutrient_totals(items) == nutrient_totals(list(items))
    assert nutrient_totals(items) is nutrient_totals(items)
