"""Navigation arguments and result callbacks."""

from collections.abc import Callable, Mapping
from typing import TypeVar

T = TypeVar("T")

MEAL_ID_ARG = "meal_id"

NavResultCallback = Callable[[T | None], None]


class MissingNavigationArgumentError(LookupError):
    """A screen was opened without an argument it cannot work without."""

    def __init__(self, name: str) -> None:
        super().__init__(f"{name} argument was not passed.")
        self.name = name


def require_int_argument(arguments: Mapping[str, object], name: str) -> int:
    """Read a required integer navigation argument."""
    value = arguments.get(name)
    if value is None:
        raise MissingNavigationArgumentError(name)
    if isinstance(value, bool) or not isinstance(value, int | str):
        raise TypeError(f"{name} argument must be an integer, got {value!r}")
    return int(value)


def forward_result(
    on_action: Callable[[object], None], to_action: Callable[[T], object]
) -> NavResultCallback[T]:
    """Turn a screen result into an action for the screen that asked for it.

    A ``None`` result means the user dismissed the destination and is dropped.
    """

    def callback(result: T | None) -> None:
        if result is not None:
            on_action(to_action(result))

    return callback
