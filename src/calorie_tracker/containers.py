"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass

from calorie_tracker.adapters.cached_meal_repository import CachedMealRepository
from calorie_tracker.adapters.in_memory_meal_store import InMemoryMealStore
from calorie_tracker.adapters.meal_api_client import HttpxMealApiClient
from calorie_tracker.config import Settings
from calorie_tracker.presentation.meal import MealViewModel
from calorie_tracker.presentation.new_meal import NewMealViewModel
from calorie_tracker.presentation.strings import DictStringResolver, StringResolver
from calorie_tracker.services.meals import (
    CreateMealUseCase,
    GetMealByIdUseCase,
    UpdateMealUseCase,
)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    meal_store: InMemoryMealStore
    get_meal_by_id: GetMealByIdUseCase
    update_meal: UpdateMealUseCase
    create_meal: CreateMealUseCase
    strings: StringResolver
    close_resources: Callable[[], Awaitable[None]]

    def meal_view_model(self, arguments: Mapping[str, object]) -> MealViewModel:
        """Build the view-model of a meal screen from its navigation arguments."""
        return MealViewModel(
            get_meal_by_id=self.get_meal_by_id,
            update_meal=self.update_meal,
            arguments=arguments,
            strings=self.strings,
        )

    def new_meal_view_model(self) -> NewMealViewModel:
        """Build the view-model of a new meal screen."""
        return NewMealViewModel(create_meal=self.create_meal, strings=self.strings)


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    meal_api_client = HttpxMealApiClient.create(
        base_url=resolved_settings.api_base_url,
        token=resolved_settings.api_token,
        timeout=resolved_settings.api_timeout_seconds,
    )
    meal_store = InMemoryMealStore()
    meal_repository = CachedMealRepository(
        api_client=meal_api_client,
        store=meal_store,
    )

    async def close_resources() -> None:
        await meal_api_client.close()

    return AppContainer(
        settings=resolved_settings,
        meal_store=meal_store,
        get_meal_by_id=GetMealByIdUseCase(meal_repository),
        update_meal=UpdateMealUseCase(meal_repository),
        create_meal=CreateMealUseCase(meal_repository),
        strings=DictStringResolver(),
        close_resources=close_resources,
    )
