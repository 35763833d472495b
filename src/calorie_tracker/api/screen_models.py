"""Pydantic models for screen actions and their JSON views."""

from dataclasses import asdict
from typing import Annotated, Literal

from pydantic import BaseModel, Field, TypeAdapter

from calorie_tracker.domain.meals import ConsumedFood, Food
from calorie_tracker.presentation import meal
from calorie_tracker.presentation.nutrients import nutrient_totals


class FoodPayload(BaseModel):
    """Food payload."""

    id: int
    name: str
    image_url: str = ""
    calories_in_100_grams: int
    proteins_in_100_grams: float
    fats_in_100_grams: float
    carbs_in_100_grams: float

    def to_domain(self) -> Food:
        return Food(**self.model_dump())


class ConsumedFoodPayload(BaseModel):
    """Consumed food payload."""

    food: FoodPayload
    grams: int = Field(gt=0)

    def to_domain(self) -> ConsumedFood:
        return ConsumedFood(food=self.food.to_domain(), grams=self.grams)


class AddConsumedFoodPayload(BaseModel):
    type: Literal["add_consumed_food"]
    consumed_food: ConsumedFoodPayload


class MealNameChangePayload(BaseModel):
    type: Literal["meal_name_change"]
    new_value: str

    def to_action(self) -> meal.MealNameChange:
        return meal.MealNameChange(self.new_value)


class SaveMealClickPayload(BaseModel):
    type: Literal["save_meal_click"]

    def to_action(self) -> meal.SaveMealClick:
        return meal.SaveMealClick()


class DeleteConsumedFoodPayload(BaseModel):
    type: Literal["delete_consumed_food"]
    index: int

    def to_action(self) -> meal.DeleteConsumedFood:
        return meal.DeleteConsumedFood(self.index)


class UpdateConsumedFoodPayload(BaseModel):
    type: Literal["update_consumed_food"]
    index: int
    weight_grams: int = Field(gt=0)

    def to_action(self) -> meal.UpdateConsumedFood:
        return meal.UpdateConsumedFood(self.index, self.weight_grams)


class SelectConsumedFoodPayload(BaseModel):
    type: Literal["select_consumed_food"]
    index: int | None = None

    def to_action(self) -> meal.SelectConsumedFood:
        return meal.SelectConsumedFood(self.index)


class AddFoodIconClickPayload(BaseModel):
    type: Literal["add_food_icon_click"]

    def to_action(self) -> meal.AddFoodIconClick:
        return meal.AddFoodIconClick()


class NavigateBackClickPayload(BaseModel):
    type: Literal["navigate_back_click"]

    def to_action(self) -> meal.NavigateBackClick:
        return meal.NavigateBackClick()


class NavigateBackConfirmClickPayload(BaseModel):
    type: Literal["navigate_back_confirm_click"]

    def to_action(self) -> meal.NavigateBackConfirmClick:
        return meal.NavigateBackConfirmClick()


class NavigateBackDenyClickPayload(BaseModel):
    type: Literal["navigate_back_deny_click"]

    def to_action(self) -> meal.NavigateBackDenyClick:
        return meal.NavigateBackDenyClick()


ActionPayload = Annotated[
    AddConsumedFoodPayload
    | MealNameChangePayload
    | SaveMealClickPayload
    | DeleteConsumedFoodPayload
    | UpdateConsumedFoodPayload
    | SelectConsumedFoodPayload
    | AddFoodIconClickPayload
    | NavigateBackClickPayload
    | NavigateBackConfirmClickPayload
    | NavigateBackDenyClickPayload,
    Field(discriminator="type"),
]

action_payload_adapter: TypeAdapter[ActionPayload] = TypeAdapter(ActionPayload)

_EVENT_TYPES: dict[type, str] = {
    meal.MealSaved: "meal_saved",
    meal.NavigateBack: "navigate_back",
    meal.NavigateToSearchFood: "navigate_to_search_food",
    meal.ShowSnackbar: "show_snackbar",
}


def event_to_json(event: meal.MealUiEvent) -> dict[str, object]:
    """Render a UI event as ``{"type": ..., **fields}``."""
    return {"type": _EVENT_TYPES[type(event)], **asdict(event)}


def state_to_json(state: object) -> dict[str, object]:
    """Render a screen state together with its derived nutrient totals."""
    payload = asdict(state)  # type: ignore[call-overload]
    totals = nutrient_totals(state.consumed_foods)  # type: ignore[attr-defined]
    return {"state": payload, "totals": asdict(totals)}
