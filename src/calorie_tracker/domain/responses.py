"""Discriminated results returned by use-cases."""

from dataclasses import dataclass
from typing import Generic, TypeVar

from calorie_tracker.domain.exceptions import AppException

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """The use-case completed and produced ``data``."""

    data: T


@dataclass(frozen=True)
class Failed:
    """The use-case failed for a typed reason.

    ``message`` is a user-facing text supplied by the backend, if any.
    """

    app_exception: AppException
    message: str | None = None


AppResponse = Success[T] | Failed
