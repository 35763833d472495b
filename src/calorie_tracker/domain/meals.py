"""Domain models for meals and consumed foods."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Food:
    """A food with its nutrient values per 100 grams."""

    id: int
    name: str
    calories_in_100_grams: int
    proteins_in_100_grams: float
    fats_in_100_grams: float
    carbs_in_100_grams: float
    image_url: str = ""


@dataclass(frozen=True)
class ConsumedFood:
    """A portion of a food eaten as part of a meal."""

    food: Food
    grams: int


@dataclass(frozen=True)
class Meal:
    """A logged meal with its consumed foods."""

    id: int
    name: str
    consumed_foods: tuple[ConsumedFood, ...] = ()
    logged_at: datetime | None = None


@dataclass(frozen=True)
class CreateConsumedFood:
    """Request payload for one consumed food."""

    food_id: int
    grams: int


@dataclass(frozen=True)
class UpdateMeal:
    """Request payload for updating an existing meal."""

    name: str
    consumed_foods: tuple[CreateConsumedFood, ...]


@dataclass(frozen=True)
class CreateMeal:
    """Request payload for creating a meal."""

    name: str
    consumed_foods: tuple[CreateConsumedFood, ...]
    logged_at: datetime


def to_create_consumed_foods(
    consumed_foods: tuple[ConsumedFood, ...] | list[ConsumedFood],
) -> tuple[CreateConsumedFood, ...]:
    """Convert consumed foods to their request form."""
    return tuple(
        CreateConsumedFood(food_id=consumed_food.food.id, grams=consumed_food.grams)
        for consumed_food in consumed_foods
    )
