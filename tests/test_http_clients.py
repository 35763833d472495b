"""Tests for the HTTP meal API client."""

import asyncio
import json
from datetime import UTC, datetime

import httpx
import pytest

from calorie_tracker.adapters.meal_api_client import HttpxMealApiClient
from calorie_tracker.domain.exceptions import (
    MealException,
    MealNotFoundException,
    NetworkException,
    UnauthorizedException,
    UnknownException,
)
from calorie_tracker.domain.meals import CreateConsumedFood, CreateMeal, UpdateMeal

_MEAL_PAYLOAD = {
    "id": 7,
    "name": "Lunch",
    "logged_at": "2024-05-01T12:15:00Z",
    "consumed_foods": [
        {
            "food": {
                "id": 3,
                "name": "Chicken breast",
                "image_url": "https://img.example.test/chicken.png",
                "calories_in_100_grams": 165,
                "proteins_in_100_grams": 31.0,
                "fats_in_100_grams": 3.6,
                "carbs_in_100_grams": 0.0,
            },
            "grams": 200,
        }
    ],
}


def _client(handler, token: str | None = "token") -> HttpxMealApiClient:
    transport = httpx.MockTransport(handler)
    return HttpxMealApiClient(
        base_url="https://api.example.test",
        http_client=httpx.AsyncClient(transport=transport),
        token=token,
    )


def test_get_meal_parses_payload_and_sends_token() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "GET"
        assert request.url.path == "/api/v1/meals/7"
        assert request.headers["Authorization"] == "Bearer token"
        return httpx.Response(200, json=_MEAL_PAYLOAD)

    meal = asyncio.run(_client(handler).get_meal(7))

    assert meal.id == 7
    assert meal.name == "Lunch"
    assert meal.logged_at == datetime(2024, 5, 1, 12, 15, tzinfo=UTC)
    assert meal.consumed_foods[0].grams == 200
    assert meal.consumed_foods[0].food.calories_in_100_grams == 165
    assert meal.consumed_foods[0].food.image_url.endswith("chicken.png")


def test_requests_without_token_omit_authorization() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert "Authorization" not in request.headers
        return httpx.Response(200, json=_MEAL_PAYLOAD)

    asyncio.run(_client(handler, token=None).get_meal(7))


def test_update_meal_sends_name_and_food_ids() -> None:
    seen: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content.decode())
        return httpx.Response(200, json=_MEAL_PAYLOAD)

    asyncio.run(
        _client(handler).update_meal(
            7,
            UpdateMeal(
                name="Lunch",
                consumed_foods=(CreateConsumedFood(food_id=3, grams=200),),
            ),
        )
    )

    assert seen["method"] == "PUT"
    assert seen["path"] == "/api/v1/meals/7"
    assert seen["body"] == {
        "name": "Lunch",
        "consumed_foods": [{"food_id": 3, "grams": 200}],
    }


def test_create_meal_posts_logged_at() -> None:
    seen: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content.decode())
        return httpx.Response(201, json=_MEAL_PAYLOAD)

    meal = asyncio.run(
        _client(handler).create_meal(
            CreateMeal(
                name="Lunch",
                consumed_foods=(CreateConsumedFood(food_id=3, grams=200),),
                logged_at=datetime(2024, 5, 1, 12, 15, tzinfo=UTC),
            )
        )
    )

    assert meal.id == 7
    assert seen["method"] == "POST"
    assert seen["path"] == "/api/v1/meals"
    body = seen["body"]
    assert isinstance(body, dict)
    assert body["name"] == "Lunch"
    assert body["logged_at"].startswith("2024-05-01T12:15:00")
    assert body["consumed_foods"] == [{"food_id": 3, "grams": 200}]


@pytest.mark.parametrize(
    ("status_code", "body", "expected"),
    [
        (401, {"message": "Token expired"}, UnauthorizedException),
        (404, {"message": "Meal not found"}, MealNotFoundException),
        (422, {"message": "Name is too long"}, MealException),
        (400, {}, MealException),
        (500, {"message": "Internal error"}, UnknownException),
    ],
)
def test_error_statuses_map_to_failure_reasons(status_code, body, expected) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=body)

    with pytest.raises(expected):
        asyncio.run(_client(handler).get_meal(7))


def test_validation_error_carries_server_message() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(422, json={"message": "Name is too long"})

    with pytest.raises(MealException) as exc_info:
        asyncio.run(_client(handler).get_meal(7))

    assert exc_info.value.args == ("Name is too long",)


def test_transport_failure_is_network_exception() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(NetworkException) as exc_info:
        asyncio.run(_client(handler).get_meal(7))

    assert exc_info.value.args == ()


def test_malformed_payload_is_unknown_exception() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"id": "not-a-number"})

    with pytest.raises(UnknownException):
        asyncio.run(_client(handler).get_meal(7))


def test_non_json_success_body_is_unknown_exception() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>Bad gateway</html>")

    with pytest.raises(UnknownException):
        asyncio.run(_client(handler).get_meal(7))


def test_create_strips_trailing_slash() -> None:
    client = HttpxMealApiClient.create(base_url="https://api.example.test/", timeout=5)

    assert client.base_url == "https://api.example.test"
    assert client.timeout == 5
    asyncio.run(client.close())
