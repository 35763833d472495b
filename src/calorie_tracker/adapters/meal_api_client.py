"""Calorie tracker REST API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx
from pydantic import ValidationError

from calorie_tracker.adapters.meal_api_models import (
    CreateMealRequest,
    ErrorResponse,
    MealResponse,
    UpdateMealRequest,
)
from calorie_tracker.domain.exceptions import (
    AppException,
    MealException,
    MealNotFoundException,
    NetworkException,
    UnauthorizedException,
    UnknownException,
)
from calorie_tracker.domain.meals import CreateMeal, Meal, UpdateMeal

_HTTP_UNAUTHORIZED = 401
_HTTP_NOT_FOUND = 404
_HTTP_VALIDATION_ERRORS = (400, 422)


class MealApiClient(Protocol):
    """Interface for meal endpoints of the backend."""

    async def get_meal(self, meal_id: int) -> Meal:
        """Fetch a meal by id."""

    async def update_meal(self, meal_id: int, update_meal: UpdateMeal) -> Meal:
        """Replace a meal's name and consumed foods."""

    async def create_meal(self, create_meal: CreateMeal) -> Meal:
        """Create a meal."""


@dataclass
class HttpxMealApiClient(MealApiClient):
    """HTTPX-backed meal API client."""

    base_url: str
    http_client: httpx.AsyncClient
    token: str | None = None
    timeout: float = 15

    @classmethod
    def create(
        cls, base_url: str, token: str | None = None, timeout: float = 15
    ) -> "HttpxMealApiClient":
        """Create a meal API client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
            token=token,
            timeout=timeout,
        )

    async def get_meal(self, meal_id: int) -> Meal:
        """Fetch a meal by id."""
        payload = await self._request("GET", f"/api/v1/meals/{meal_id}")
        return _parse_meal(payload)

    async def update_meal(self, meal_id: int, update_meal: UpdateMeal) -> Meal:
        """Replace a meal's name and consumed foods."""
        body = UpdateMealRequest.from_domain(update_meal).model_dump(mode="json")
        payload = await self._request("PUT", f"/api/v1/meals/{meal_id}", json=body)
        return _parse_meal(payload)

    async def create_meal(self, create_meal: CreateMeal) -> Meal:
        """Create a meal."""
        body = CreateMealRequest.from_domain(create_meal).model_dump(mode="json")
        payload = await self._request("POST", "/api/v1/meals", json=body)
        return _parse_meal(payload)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _request(
        self, method: str, path: str, json: dict[str, object] | None = None
    ) -> object:
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else None
        try:
            response = await self.http_client.request(
                method,
                f"{self.base_url}{path}",
                json=json,
                headers=headers,
                timeout=self.timeout,
            )
        except httpx.TransportError as exc:
            raise NetworkException() from exc
        if response.is_error:
            raise _exception_for_response(response)
        try:
            return response.json()
        except ValueError as exc:
            raise UnknownException() from exc


def _parse_meal(payload: object) -> Meal:
    try:
        return MealResponse.model_validate(payload).to_domain()
    except ValidationError as exc:
        raise UnknownException() from exc


def _exception_for_response(response: httpx.Response) -> AppException:
    """Map an error response to a typed failure reason."""
    message = _error_message(response)
    status_code = response.status_code
    if status_code == _HTTP_UNAUTHORIZED:
        return UnauthorizedException()
    if status_code == _HTTP_NOT_FOUND:
        return MealNotFoundException(message) if message else MealNotFoundException()
    if status_code in _HTTP_VALIDATION_ERRORS:
        return MealException(message) if message else MealException()
    return UnknownException()


def _error_message(response: httpx.Response) -> str | None:
    try:
        return ErrorResponse.model_validate(response.json()).message
    except (ValueError, ValidationError):
        return None
