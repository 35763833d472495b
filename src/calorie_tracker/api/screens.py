"""Registry of screens attached through the HTTP host."""

import logging
from dataclasses import dataclass, field
from typing import Any
from uuid import uuid4

from calorie_tracker.presentation.view_model import ViewModel

_logger = logging.getLogger(__name__)


@dataclass
class ScreenRegistry:
    """Keeps attached view-models by screen id.

    At most ``max_screens`` screens stay attached; attaching one more detaches
    the oldest.
    """

    screens: dict[str, ViewModel[Any, Any, Any]] = field(default_factory=dict)
    max_screens: int = 100

    def attach(self, view_model: ViewModel[Any, Any, Any]) -> str:
        """Register a view-model and return its screen id."""
        while self.screens and len(self.screens) >= self.max_screens:
            oldest = next(iter(self.screens))
            _logger.warning("Screen limit reached, detaching %s", oldest)
            self.detach(oldest)
        screen_id = uuid4().hex
        self.screens[screen_id] = view_model
        _logger.info("Attached %s as %s", type(view_model).__name__, screen_id)
        return screen_id

    def get(self, screen_id: str) -> ViewModel[Any, Any, Any] | None:
        return self.screens.get(screen_id)

    def detach(self, screen_id: str) -> bool:
        """Clear and forget a screen; returns False if it is unknown."""
        view_model = self.screens.pop(screen_id, None)
        if view_model is None:
            return False
        view_model.clear()
        _logger.info("Detached %s", screen_id)
        return True

    def detach_all(self) -> None:
        for screen_id in list(self.screens):
            self.detach(screen_id)
