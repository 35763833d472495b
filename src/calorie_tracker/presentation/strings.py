"""User-facing string resources."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from calorie_tracker.domain.exceptions import (
    AppException,
    EmptyMealNameException,
    NetworkException,
)


class StringResource(Enum):
    """Keys of user-facing messages."""

    ERROR_NETWORK = "error_network"
    ERROR_EMPTY_MEAL_NAME = "error_empty_meal_name"
    ERROR_UNKNOWN = "error_unknown"


class StringResolver(Protocol):
    """Looks up the localized text for a string resource."""

    def get_string(self, resource: StringResource) -> str:
        """Return the text for ``resource``."""


_ENGLISH = {
    StringResource.ERROR_NETWORK: "Check your internet connection and try again.",
    StringResource.ERROR_EMPTY_MEAL_NAME: "Meal name must not be empty.",
    StringResource.ERROR_UNKNOWN: "Something went wrong. Please try again.",
}


@dataclass
class DictStringResolver(StringResolver):
    """Resolver over a resource-to-text table, falling back to English."""

    strings: dict[StringResource, str] = field(default_factory=dict)

    def get_string(self, resource: StringResource) -> str:
        return self.strings.get(resource) or _ENGLISH[resource]


def error_message(
    strings: StringResolver, app_exception: AppException, message: str | None
) -> str:
    """Pick the user-facing text for a failed use-case."""
    if isinstance(app_exception, NetworkException):
        return strings.get_string(StringResource.ERROR_NETWORK)
    if isinstance(app_exception, EmptyMealNameException):
        return strings.get_string(StringResource.ERROR_EMPTY_MEAL_NAME)
    return message or strings.get_string(StringResource.ERROR_UNKNOWN)
