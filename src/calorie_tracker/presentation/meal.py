"""Meal screen: edit an existing meal."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import assert_never

from calorie_tracker.domain.exceptions import UnknownException
from calorie_tracker.domain.meals import (
    ConsumedFood,
    UpdateMeal,
    to_create_consumed_foods,
)
from calorie_tracker.domain.responses import AppResponse, Failed, Success
from calorie_tracker.presentation.consumed_foods import (
    add_consumed_food,
    check_consumed_food_index,
    delete_consumed_food,
    update_consumed_food_grams,
)
from calorie_tracker.presentation.navigation import MEAL_ID_ARG, require_int_argument
from calorie_tracker.presentation.strings import StringResolver, error_message
from calorie_tracker.presentation.view_model import ViewModel
from calorie_tracker.services.meals import GetMealByIdUseCase, UpdateMealUseCase

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MealState:
    """Everything the meal screen renders."""

    meal_name: str = ""
    consumed_foods: tuple[ConsumedFood, ...] = ()
    selected_consumed_food_index: int | None = None
    show_exit_dialog: bool = False
    is_loading: bool = False


@dataclass(frozen=True)
class AddConsumedFood:
    consumed_food: ConsumedFood


@dataclass(frozen=True)
class MealNameChange:
    new_value: str


@dataclass(frozen=True)
class SaveMealClick:
    pass


@dataclass(frozen=True)
class DeleteConsumedFood:
    index: int


@dataclass(frozen=True)
class UpdateConsumedFood:
    index: int
    weight_grams: int


@dataclass(frozen=True)
class SelectConsumedFood:
    index: int | None


@dataclass(frozen=True)
class AddFoodIconClick:
    pass


@dataclass(frozen=True)
class NavigateBackClick:
    pass


@dataclass(frozen=True)
class NavigateBackConfirmClick:
    pass


@dataclass(frozen=True)
class NavigateBackDenyClick:
    pass


MealAction = (
    AddConsumedFood
    | MealNameChange
    | SaveMealClick
    | DeleteConsumedFood
    | UpdateConsumedFood
    | SelectConsumedFood
    | AddFoodIconClick
    | NavigateBackClick
    | NavigateBackConfirmClick
    | NavigateBackDenyClick
)


@dataclass(frozen=True)
class MealSaved:
    pass


@dataclass(frozen=True)
class NavigateBack:
    pass


@dataclass(frozen=True)
class NavigateToSearchFood:
    pass


@dataclass(frozen=True)
class ShowSnackbar:
    message: str


MealUiEvent = MealSaved | NavigateBack | NavigateToSearchFood | ShowSnackbar


class MealViewModel(ViewModel[MealState, MealAction, MealUiEvent]):
    """State holder for the meal screen.

    The meal id is read from the navigation arguments on construction and
    the meal is then followed for as long as the screen is attached.
    """

    def __init__(
        self,
        get_meal_by_id: GetMealByIdUseCase,
        update_meal: UpdateMealUseCase,
        arguments: Mapping[str, object],
        strings: StringResolver,
    ) -> None:
        meal_id = require_int_argument(arguments, MEAL_ID_ARG)
        super().__init__(MealState())
        self._get_meal_by_id = get_meal_by_id
        self._update_meal = update_meal
        self._strings = strings
        self._meal_id = meal_id
        self._pending_saves = 0
        self._launch(self._collect_meal())

    @property
    def meal_id(self) -> int:
        return self._meal_id

    def on_action(self, action: MealAction) -> None:  # noqa: PLR0912
        if isinstance(action, AddConsumedFood):
            self._update_state(
                consumed_foods=add_consumed_food(
                    self.state.consumed_foods, action.consumed_food
                )
            )
        elif isinstance(action, MealNameChange):
            self._update_state(meal_name=action.new_value)
        elif isinstance(action, SaveMealClick):
            self._save_meal()
        elif isinstance(action, DeleteConsumedFood):
            self._update_state(
                consumed_foods=delete_consumed_food(
                    self.state.consumed_foods, action.index
                )
            )
        elif isinstance(action, UpdateConsumedFood):
            self._update_state(
                consumed_foods=update_consumed_food_grams(
                    self.state.consumed_foods, action.index, action.weight_grams
                ),
                selected_consumed_food_index=None,
            )
        elif isinstance(action, SelectConsumedFood):
            if action.index is not None:
                check_consumed_food_index(self.state.consumed_foods, action.index)
            self._update_state(selected_consumed_food_index=action.index)
        elif isinstance(action, AddFoodIconClick):
            self._send_ui_event(NavigateToSearchFood())
        elif isinstance(action, NavigateBackClick):
            self._update_state(show_exit_dialog=True)
        elif isinstance(action, NavigateBackConfirmClick):
            self._update_state(show_exit_dialog=False)
            self._send_ui_event(NavigateBack())
        elif isinstance(action, NavigateBackDenyClick):
            self._update_state(show_exit_dialog=False)
        else:
            assert_never(action)

    def _save_meal(self) -> None:
        update_meal = UpdateMeal(
            name=self.state.meal_name,
            consumed_foods=to_create_consumed_foods(self.state.consumed_foods),
        )
        self._pending_saves += 1
        self._update_state(is_loading=True)
        self._launch(self._run_save(update_meal))

    async def _run_save(self, update_meal: UpdateMeal) -> None:
        result: AppResponse[None]
        try:
            result = await self._update_meal(
                meal_id=self._meal_id, update_meal=update_meal
            )
        except Exception:
            _logger.exception("Saving meal %s failed", self._meal_id)
            result = Failed(UnknownException())
        self._pending_saves -= 1
        if isinstance(result, Success):
            self._send_ui_event(MealSaved())
        else:
            self._send_ui_event(
                ShowSnackbar(
                    error_message(self._strings, result.app_exception, result.message)
                )
            )
        self._update_state(is_loading=self._pending_saves > 0)

    async def _collect_meal(self) -> None:
        async for meal in self._get_meal_by_id(self._meal_id):
            if meal is not None:
                self._update_state(
                    meal_name=meal.name,
                    consumed_foods=meal.consumed_foods,
                )
