"""Shared test fixtures."""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime

import pytest

from calorie_tracker.adapters.cached_meal_repository import CachedMealRepository
from calorie_tracker.adapters.in_memory_meal_store import InMemoryMealStore
from calorie_tracker.adapters.meal_api_client import MealApiClient
from calorie_tracker.config import Settings
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.exceptions import AppException, MealNotFoundException
from calorie_tracker.domain.meals import (
    ConsumedFood,
    CreateConsumedFood,
    CreateMeal,
    Food,
    Meal,
    UpdateMeal,
)
from calorie_tracker.presentation.strings import DictStringResolver
from calorie_tracker.services.meals import (
    CreateMealUseCase,
    GetMealByIdUseCase,
    UpdateMealUseCase,
)

OATMEAL = Food(
    id=1,
    name="Oatmeal",
    calories_in_100_grams=68,
    proteins_in_100_grams=2.4,
    fats_in_100_grams=1.4,
    carbs_in_100_grams=12.0,
)
BANANA = Food(
    id=2,
    name="Banana",
    calories_in_100_grams=89,
    proteins_in_100_grams=1.1,
    fats_in_100_grams=0.3,
    carbs_in_100_grams=22.8,
)
CHICKEN = Food(
    id=3,
    name="Chicken breast",
    calories_in_100_grams=165,
    proteins_in_100_grams=31.0,
    fats_in_100_grams=3.6,
    carbs_in_100_grams=0.0,
)


def make_meal(meal_id: int = 1, name: str = "Breakfast") -> Meal:
    return Meal(
        id=meal_id,
        name=name,
        consumed_foods=(
            ConsumedFood(food=OATMEAL, grams=150),
            ConsumedFood(food=BANANA, grams=120),
        ),
        logged_at=datetime(2024, 5, 1, 8, 30, tzinfo=UTC),
    )


@dataclass
class FakeMealApiClient(MealApiClient):
    """In-memory stand-in for the meal backend.

    ``error`` is raised by every call while set. ``gate`` holds writes until
    it is set.
    """

    meals: dict[int, Meal] = field(default_factory=dict)
    foods: dict[int, Food] = field(
        default_factory=lambda: {food.id: food for food in (OATMEAL, BANANA, CHICKEN)}
    )
    error: AppException | None = None
    gate: asyncio.Event | None = None
    updates: list[tuple[int, UpdateMeal]] = field(default_factory=list)
    creates: list[CreateMeal] = field(default_factory=list)
    next_id: int = 100

    async def get_meal(self, meal_id: int) -> Meal:
        if self.error is not None:
            raise self.error
        meal = self.meals.get(meal_id)
        if meal is None:
            raise MealNotFoundException()
        return meal

    async def update_meal(self, meal_id: int, update_meal: UpdateMeal) -> Meal:
        await self._wait_for_gate()
        if self.error is not None:
            raise self.error
        self.updates.append((meal_id, update_meal))
        current = self.meals[meal_id]
        meal = Meal(
            id=meal_id,
            name=update_meal.name,
            consumed_foods=self._consumed_foods(update_meal.consumed_foods),
            logged_at=current.logged_at,
        )
        self.meals[meal_id] = meal
        return meal

    async def create_meal(self, create_meal: CreateMeal) -> Meal:
        await self._wait_for_gate()
        if self.error is not None:
            raise self.error
        self.creates.append(create_meal)
        meal = Meal(
            id=self.next_id,
            name=create_meal.name,
            consumed_foods=self._consumed_foods(create_meal.consumed_foods),
            logged_at=create_meal.logged_at,
        )
        self.meals[meal.id] = meal
        self.next_id += 1
        return meal

    async def _wait_for_gate(self) -> None:
        if self.gate is not None:
            await self.gate.wait()

    def _consumed_foods(
        self, items: tuple[CreateConsumedFood, ...]
    ) -> tuple[ConsumedFood, ...]:
        return tuple(
            ConsumedFood(food=self.foods[item.food_id], grams=item.grams)
            for item in items
        )


async def wait_until(predicate: Callable[[], bool], timeout: float = 1.0) -> None:
    """Yield to the loop until ``predicate`` holds."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition was not met in time")
        await asyncio.sleep(0.001)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        api_base_url="https://api.example.test",
        api_token="test-token",
    )


@pytest.fixture
def meal_api_client() -> FakeMealApiClient:
    return FakeMealApiClient(meals={1: make_meal()})


@pytest.fixture
def meal_store() -> InMemoryMealStore:
    return InMemoryMealStore()


@pytest.fixture
def meal_repository(
    meal_api_client: FakeMealApiClient, meal_store: InMemoryMealStore
) -> CachedMealRepository:
    return CachedMealRepository(api_client=meal_api_client, store=meal_store)


@pytest.fixture
def container(
    settings: Settings,
    meal_store: InMemoryMealStore,
    meal_repository: CachedMealRepository,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        meal_store=meal_store,
        get_meal_by_id=GetMealByIdUseCase(meal_repository),
        update_meal=UpdateMealUseCase(meal_repository),
        create_meal=CreateMealUseCase(meal_repository),
        strings=DictStringResolver(),
        close_resources=close_resources,
    )
