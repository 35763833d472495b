"""New meal screen: compose and create a meal."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import assert_never

from calorie_tracker.domain.exceptions import UnknownException
from calorie_tracker.domain.meals import (
    ConsumedFood,
    CreateMeal,
    to_create_consumed_foods,
)
from calorie_tracker.domain.responses import AppResponse, Failed, Success
from calorie_tracker.presentation.consumed_foods import (
    add_consumed_food,
    check_consumed_food_index,
    delete_consumed_food,
    update_consumed_food_grams,
)
from calorie_tracker.presentation.meal import (
    AddFoodIconClick,
    DeleteConsumedFood,
    MealNameChange,
    MealSaved,
    MealUiEvent,
    NavigateBack,
    NavigateBackClick,
    NavigateBackConfirmClick,
    NavigateBackDenyClick,
    NavigateToSearchFood,
    SaveMealClick,
    SelectConsumedFood,
    ShowSnackbar,
    UpdateConsumedFood,
)
from calorie_tracker.presentation.strings import StringResolver, error_message
from calorie_tracker.presentation.view_model import ViewModel
from calorie_tracker.services.meals import CreateMealUseCase

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NewMealState:
    """Everything the new meal screen renders."""

    meal_name: str = ""
    consumed_foods: tuple[ConsumedFood, ...] = ()
    selected_consumed_food_index: int | None = None
    show_exit_dialog: bool = False
    is_loading: bool = False


@dataclass(frozen=True)
class AddConsumedFoodRequest:
    """A food picked on the search screen and handed back as a result."""

    consumed_food: ConsumedFood


NewMealAction = (
    AddConsumedFoodRequest
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

NewMealUiEvent = MealUiEvent


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


class NewMealViewModel(ViewModel[NewMealState, NewMealAction, NewMealUiEvent]):
    """State holder for the new meal screen."""

    def __init__(
        self,
        create_meal: CreateMealUseCase,
        strings: StringResolver,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        super().__init__(NewMealState())
        self._create_meal = create_meal
        self._strings = strings
        self._clock = clock
        self._pending_saves = 0

    def on_action(self, action: NewMealAction) -> None:  # noqa: PLR0912
        if isinstance(action, AddConsumedFoodRequest):
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
        create_meal = CreateMeal(
            name=self.state.meal_name,
            consumed_foods=to_create_consumed_foods(self.state.consumed_foods),
            logged_at=self._clock(),
        )
        self._pending_saves += 1
        self._update_state(is_loading=True)
        self._launch(self._run_save(create_meal))

    async def _run_save(self, create_meal: CreateMeal) -> None:
        result: AppResponse[None]
        try:
            result = await self._create_meal(create_meal)
        except Exception:
            _logger.exception("Creating meal %r failed", create_meal.name)
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
