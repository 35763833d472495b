"""Pydantic models for calorie tracker API payloads."""

from datetime import datetime

from pydantic import BaseModel, Field

from calorie_tracker.domain.meals import (
    ConsumedFood,
    CreateConsumedFood,
    CreateMeal,
    Food,
    Meal,
    UpdateMeal,
)


class FoodResponse(BaseModel):
    """Food payload."""

    id: int
    name: str
    image_url: str = ""
    calories_in_100_grams: int
    proteins_in_100_grams: float
    fats_in_100_grams: float
    carbs_in_100_grams: float

    def to_domain(self) -> Food:
        return Food(
            id=self.id,
            name=self.name,
            image_url=self.image_url,
            calories_in_100_grams=self.calories_in_100_grams,
            proteins_in_100_grams=self.proteins_in_100_grams,
            fats_in_100_grams=self.fats_in_100_grams,
            carbs_in_100_grams=self.carbs_in_100_grams,
        )


class ConsumedFoodResponse(BaseModel):
    """Consumed food payload."""

    food: FoodResponse
    grams: int

    def to_domain(self) -> ConsumedFood:
        return ConsumedFood(food=self.food.to_domain(), grams=self.grams)


class MealResponse(BaseModel):
    """Meal payload."""

    id: int
    name: str
    logged_at: datetime | None = None
    consumed_foods: list[ConsumedFoodResponse] = Field(default_factory=list)

    def to_domain(self) -> Meal:
        return Meal(
            id=self.id,
            name=self.name,
            consumed_foods=tuple(item.to_domain() for item in self.consumed_foods),
            logged_at=self.logged_at,
        )


class ErrorResponse(BaseModel):
    """Error body returned by the API."""

    message: str | None = None


class CreateConsumedFoodRequest(BaseModel):
    """Consumed food entry in a write request."""

    food_id: int
    grams: int

    @classmethod
    def from_domain(cls, item: CreateConsumedFood) -> "CreateConsumedFoodRequest":
        return cls(food_id=item.food_id, grams=item.grams)


class UpdateMealRequest(BaseModel):
    """Body for ``PUT /meals/{id}``."""

    name: str
    consumed_foods: list[CreateConsumedFoodRequest]

    @classmethod
    def from_domain(cls, update_meal: UpdateMeal) -> "UpdateMealRequest":
        return cls(
            name=update_meal.name,
            consumed_foods=[
                CreateConsumedFoodRequest.from_domain(item)
                for item in update_meal.consumed_foods
            ],
        )


class CreateMealRequest(BaseModel):
    """Body for ``POST /meals``."""

    name: str
    logged_at: datetime
    consumed_foods: list[CreateConsumedFoodRequest]

    @classmethod
    def from_domain(cls, create_meal: CreateMeal) -> "CreateMealRequest":
        return cls(
            name=create_meal.name,
            logged_at=create_meal.logged_at,
            consumed_foods=[
                CreateConsumedFoodRequest.from_domain(item)
                for item in create_meal.consumed_foods
            ],
        )
