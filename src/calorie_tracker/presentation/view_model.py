"""Base state holder shared by every screen."""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Coroutine
from dataclasses import replace
from typing import Any, Generic, TypeVar

from calorie_tracker.presentation.events import EventChannel

StateT = TypeVar("StateT")
ActionT = TypeVar("ActionT")
EventT = TypeVar("EventT")

StateListener = Callable[[StateT], None]

_logger = logging.getLogger(__name__)


class ViewModelScope:
    """Owns the asyncio tasks started on behalf of one screen."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._tasks: set[asyncio.Task[Any]] = set()
        self._cancelled = False

    def __len__(self) -> int:
        return len(self._tasks)

    @property
    def is_active(self) -> bool:
        return not self._cancelled

    def launch(self, coro: Coroutine[Any, Any, Any]) -> "asyncio.Task[Any] | None":
        """Run ``coro`` as a task tied to this scope."""
        if self._cancelled:
            coro.close()
            return None
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def cancel(self) -> None:
        """Cancel every outstanding task and refuse new ones."""
        self._cancelled = True
        for task in list(self._tasks):
            task.cancel()

    def _on_task_done(self, task: "asyncio.Task[Any]") -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            _logger.error("Task in %s crashed", self.name, exc_info=exc)


class ViewModel(ABC, Generic[StateT, ActionT, EventT]):
    """Holds a screen's immutable state and its one-shot UI events.

    ``state`` is always readable and is replaced whole on every change.
    ``ui_event`` delivers navigation and message effects exactly once.
    Subclasses handle intents in ``on_action`` and publish through
    ``_set_state``/``_update_state`` and ``_send_ui_event``. After
    ``clear`` nothing is published any more.
    """

    def __init__(self, initial_state: StateT) -> None:
        self._state = initial_state
        self._state_listeners: list[StateListener[StateT]] = []
        self._ui_event: EventChannel[EventT] = EventChannel()
        self.scope = ViewModelScope(type(self).__name__)
        self._cleared = False

    @property
    def state(self) -> StateT:
        return self._state

    @property
    def ui_event(self) -> EventChannel[EventT]:
        return self._ui_event

    @property
    def is_cleared(self) -> bool:
        return self._cleared

    @abstractmethod
    def on_action(self, action: ActionT) -> None:
        """Handle one intent from the rendering layer."""

    def add_state_listener(self, listener: StateListener[StateT]) -> Callable[[], None]:
        """Call ``listener`` with the current state and on every change.

        Returns a callable that unregisters the listener.
        """
        self._state_listeners.append(listener)
        listener(self._state)

        def remove() -> None:
            if listener in self._state_listeners:
                self._state_listeners.remove(listener)

        return remove

    def clear(self) -> None:
        """Detach the screen: cancel pending work and stop publishing."""
        if self._cleared:
            return
        self._cleared = True
        self.scope.cancel()
        self._ui_event.close()
        self._state_listeners.clear()
        _logger.debug("%s cleared", type(self).__name__)

    def _set_state(self, state: StateT) -> None:
        if self._cleared:
            return
        self._state = state
        for listener in list(self._state_listeners):
            listener(state)

    def _update_state(self, **changes: Any) -> None:
        self._set_state(replace(self._state, **changes))  # type: ignore[type-var]

    def _send_ui_event(self, event: EventT) -> None:
        if self._cleared:
            return
        self._ui_event.send(event)

    def _launch(self, coro: Coroutine[Any, Any, Any]) -> "asyncio.Task[Any] | None":
        return self.scope.launch(coro)
