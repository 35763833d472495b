"""Meal use-cases."""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass
from typing import Protocol

from calorie_tracker.domain.exceptions import (
    AppException,
    EmptyMealNameException,
    UnknownException,
)
from calorie_tracker.domain.meals import CreateMeal, Meal, UpdateMeal
from calorie_tracker.domain.responses import AppResponse, Failed, Success

_logger = logging.getLogger(__name__)


class MealRepository(Protocol):
    """Access to meals across the remote API and the local store."""

    def observe_meal(self, meal_id: int) -> AsyncIterator[Meal | None]:
        """Yield the meal now and again on every change."""

    async def update_meal(self, meal_id: int, update_meal: UpdateMeal) -> Meal:
        """Update a meal and return the stored result."""

    async def create_meal(self, create_meal: CreateMeal) -> Meal:
        """Create a meal and return the stored result."""


@dataclass
class GetMealByIdUseCase:
    """Subscribe to a meal by id."""

    repository: MealRepository

    def __call__(self, meal_id: int) -> AsyncIterator[Meal | None]:
        return self.repository.observe_meal(meal_id)


@dataclass
class UpdateMealUseCase:
    """Validate and save changes to an existing meal."""

    repository: MealRepository

    async def __call__(self, meal_id: int, update_meal: UpdateMeal) -> AppResponse[None]:
        if not update_meal.name.strip():
            return Failed(EmptyMealNameException())
        return await _run(
            lambda: self.repository.update_meal(meal_id, update_meal),
            action=f"update_meal:{meal_id}",
        )


@dataclass
class CreateMealUseCase:
    """Validate and create a new meal."""

    repository: MealRepository

    async def __call__(self, create_meal: CreateMeal) -> AppResponse[None]:
        if not create_meal.name.strip():
            return Failed(EmptyMealNameException())
        return await _run(
            lambda: self.repository.create_meal(create_meal),
            action="create_meal",
        )


async def _run(
    func: Callable[[], Awaitable[Meal]], *, action: str
) -> AppResponse[None]:
    """Await a repository write and fold failures into a ``Failed`` result."""
    try:
        await func()
    except AppException as exc:
        _logger.warning("Meal %s failed: %r", action, exc)
        return Failed(exc, message=_server_message(exc))
    except Exception:
        _logger.exception("Meal %s failed unexpectedly", action)
        return Failed(UnknownException())
    return Success(None)


def _server_message(exc: AppException) -> str | None:
    """Return the backend-supplied message carried by ``exc``, if any."""
    if exc.args and isinstance(exc.args[0], str) and exc.args[0].strip():
        return exc.args[0]
    return None
