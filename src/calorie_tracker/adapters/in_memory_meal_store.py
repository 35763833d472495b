"""Reactive in-memory store for meals."""

import asyncio
from collections.abc import AsyncIterator
from dataclasses import dataclass, field

from calorie_tracker.domain.meals import Meal


@dataclass
class InMemoryMealStore:
    """Keeps the latest known copy of each meal and pushes changes to observers."""

    _meals: dict[int, Meal] = field(default_factory=dict)
    _observers: dict[int, list[asyncio.Queue[Meal | None]]] = field(
        default_factory=dict
    )

    def get(self, meal_id: int) -> Meal | None:
        """Return the stored meal, if present."""
        return self._meals.get(meal_id)

    def put(self, meal: Meal) -> None:
        """Store a meal and notify its observers."""
        self._meals[meal.id] = meal
        self._notify(meal.id, meal)

    def delete(self, meal_id: int) -> None:
        """Remove a meal and notify its observers."""
        if self._meals.pop(meal_id, None) is not None:
            self._notify(meal_id, None)

    async def observe(self, meal_id: int) -> AsyncIterator[Meal | None]:
        """Yield the current meal, then every later change to it."""
        queue: asyncio.Queue[Meal | None] = asyncio.Queue()
        observers = self._observers.setdefault(meal_id, [])
        observers.append(queue)
        queue.put_nowait(self._meals.get(meal_id))
        try:
            while True:
                yield await queue.get()
        finally:
            observers.remove(queue)
            if not observers:
                self._observers.pop(meal_id, None)

    def observer_count(self, meal_id: int) -> int:
        return len(self._observers.get(meal_id, []))

    def _notify(self, meal_id: int, meal: Meal | None) -> None:
        for queue in self._observers.get(meal_id, []):
            queue.put_nowait(meal)
