"""FastAPI application factory.

The app hosts screens for headless clients: each attached screen owns a
view-model, actions are posted as JSON and one-shot UI events are drained
by polling.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, Request, status
from pydantic import ValidationError

from calorie_tracker.api.screen_models import (
    AddConsumedFoodPayload,
    action_payload_adapter,
    event_to_json,
    state_to_json,
)
from calorie_tracker.api.screens import ScreenRegistry
from calorie_tracker.app_logging import configure_logging
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.meals import ConsumedFood
from calorie_tracker.presentation.events import EventConsumerError
from calorie_tracker.presentation.meal import AddConsumedFood
from calorie_tracker.presentation.navigation import (
    MEAL_ID_ARG,
    NavResultCallback,
    forward_result,
)
from calorie_tracker.presentation.new_meal import (
    AddConsumedFoodRequest,
    NewMealViewModel,
)
from calorie_tracker.presentation.view_model import ViewModel


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        app.state.screens.detach_all()
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    app.state.screens = ScreenRegistry(
        max_screens=container.settings.max_attached_screens
    )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/screens/meals/{meal_id}", status_code=status.HTTP_201_CREATED)
    async def attach_meal_screen(meal_id: int, request: Request) -> dict[str, object]:
        """Open the meal screen for an existing meal."""
        state_container: AppContainer = request.app.state.container
        view_model = state_container.meal_view_model({MEAL_ID_ARG: meal_id})
        screen_id = request.app.state.screens.attach(view_model)
        return {"screen_id": screen_id, **state_to_json(view_model.state)}

    @app.post("/screens/new-meal", status_code=status.HTTP_201_CREATED)
    async def attach_new_meal_screen(request: Request) -> dict[str, object]:
        """Open the new meal screen."""
        state_container: AppContainer = request.app.state.container
        view_model = state_container.new_meal_view_model()
        screen_id = request.app.state.screens.attach(view_model)
        return {"screen_id": screen_id, **state_to_json(view_model.state)}

    @app.get("/screens/{screen_id}")
    async def screen_state(screen_id: str, request: Request) -> dict[str, object]:
        """Return the current state of a screen."""
        view_model = _get_screen(request, screen_id)
        return {"screen_id": screen_id, **state_to_json(view_model.state)}

    @app.post("/screens/{screen_id}/actions")
    async def dispatch_action(screen_id: str, request: Request) -> dict[str, object]:
        """Feed one action to a screen and return its new state."""
        view_model = _get_screen(request, screen_id)
        try:
            payload = action_payload_adapter.validate_python(await request.json())
        except (ValueError, ValidationError) as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        try:
            if isinstance(payload, AddConsumedFoodPayload):
                _food_result_callback(view_model)(payload.consumed_food.to_domain())
            else:
                view_model.on_action(payload.to_action())
        except IndexError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc
        logger.debug("Screen %s handled %s", screen_id, payload.type)
        return {"screen_id": screen_id, **state_to_json(view_model.state)}

    @app.get("/screens/{screen_id}/events")
    async def drain_events(screen_id: str, request: Request) -> dict[str, object]:
        """Return and consume the UI events queued for a screen."""
        view_model = _get_screen(request, screen_id)
        try:
            events = view_model.ui_event.drain()
        except EventConsumerError as exc:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT, detail=str(exc)
            ) from exc
        return {"events": [event_to_json(event) for event in events]}

    @app.delete("/screens/{screen_id}")
    async def detach_screen(screen_id: str, request: Request) -> dict[str, str]:
        """Close a screen and cancel its pending work."""
        if not request.app.state.screens.detach(screen_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"status": "detached"}

    return app


def _get_screen(request: Request, screen_id: str) -> ViewModel[Any, Any, Any]:
    screens: ScreenRegistry = request.app.state.screens
    view_model = screens.get(screen_id)
    if view_model is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return view_model


def _food_result_callback(
    view_model: ViewModel[Any, Any, Any],
) -> NavResultCallback[ConsumedFood]:
    """Deliver a food picked on the search screen to the screen that opened it."""
    if isinstance(view_model, NewMealViewModel):
        return forward_result(view_model.on_action, AddConsumedFoodRequest)
    return forward_result(view_model.on_action, AddConsumedFood)
