"""Meal repository backed by the remote API and a local store."""

import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass

from calorie_tracker.adapters.in_memory_meal_store import InMemoryMealStore
from calorie_tracker.adapters.meal_api_client import MealApiClient
from calorie_tracker.domain.exceptions import AppException, MealNotFoundException
from calorie_tracker.domain.meals import CreateMeal, Meal, UpdateMeal
from calorie_tracker.services.meals import MealRepository

_logger = logging.getLogger(__name__)


@dataclass
class CachedMealRepository(MealRepository):
    """Reads from the local store, refreshing it from the API first."""

    api_client: MealApiClient
    store: InMemoryMealStore

    async def observe_meal(self, meal_id: int) -> AsyncIterator[Meal | None]:
        """Refresh the meal from the API, then stream the stored copy."""
        await self._refresh(meal_id)
        async for meal in self.store.observe(meal_id):
            yield meal

    async def update_meal(self, meal_id: int, update_meal: UpdateMeal) -> Meal:
        """Update the meal remotely and store the result."""
        meal = await self.api_client.update_meal(meal_id, update_meal)
        self.store.put(meal)
        return meal

    async def create_meal(self, create_meal: CreateMeal) -> Meal:
        """Create the meal remotely and store the result."""
        meal = await self.api_client.create_meal(create_meal)
        self.store.put(meal)
        return meal

    async def _refresh(self, meal_id: int) -> None:
        try:
            meal = await self.api_client.get_meal(meal_id)
        except MealNotFoundException:
            _logger.info("Meal %s no longer exists remotely", meal_id)
            self.store.delete(meal_id)
            return
        except AppException as exc:
            _logger.warning("Meal %s refresh failed, using local copy: %r", meal_id, exc)
            return
        self.store.put(meal)
