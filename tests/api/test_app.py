"""
🧪 test_app.py - інтеграційні тести HTTP-шару (FastAPI TestClient)

Перевіряє:
- POST /convert: аліаси `from` / `to`, верхній регістр, 4 знаки
- Мапінг доменних помилок на статуси 400 / 404 / 503 / статус провайдера
- Circuit breaker відсікає запити без звернення до провайдера
- GET /currencies та DELETE /cache
"""

import json

import httpx
import pytest
from fastapi import Request
from fastapi.testclient import TestClient

from rate_service.api.app import _user_visible_error_handler, create_app
from rate_service.config.settings import ConverterSettings
from rate_service.config.setup.container import Container
from rate_service.errors.custom_errors import IncompleteRateDataError
from rate_service.infrastructure.cache.memory_cache import InMemoryCacheStore
from rate_service.infrastructure.currency.monobank_client import MonobankClient
from rate_service.infrastructure.resilience.backoff_retrier import BackoffRetrier


class _Upstream:
    """Сценарій відповіді Monobank для MockTransport."""

    def __init__(self, payload):
        self.payload = payload
        self.status = 200
        self.calls = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls += 1
        if self.status != 200:
            return httpx.Response(self.status)
        return httpx.Response(200, json=self.payload)


@pytest.fixture
def upstream(monobank_payload):
    return _Upstream(monobank_payload)


@pytest.fixture
def client(upstream, sleep_recorder):
    settings = ConverterSettings(breaker_threshold=2, retry_max_attempts=2)
    container = Container(
        settings,
        cache=InMemoryCacheStore(),
        monobank_client=MonobankClient(settings.api_url, transport=httpx.MockTransport(upstream)),
        retrier=BackoffRetrier(max_attempts=2, base_delay=1.0, sleep=sleep_recorder),
    )
    with TestClient(create_app(container)) as test_client:
        yield test_client


def test_convert_returns_wire_names(client, upstream):
    response = client.post("/convert", json={"from": "usd", "to": "uah", "amount": 100})

    assert response.status_code == 200
    assert response.json() == {"from": "USD", "to": "UAH", "amount": 100.0, "result": 3750.0}
    assert upstream.calls == 1


def test_repeated_convert_hits_cache(client, upstream):
    body = {"from": "USD", "to": "EUR", "amount": 50}
    first = client.post("/convert", json=body).json()
    second = client.post("/convert", json=body).json()

    assert first == second
    assert upstream.calls == 1


@pytest.mark.parametrize("amount", [0, -10])
def test_non_positive_amount_is_bad_request(client, upstream, amount):
    response = client.post("/convert", json={"from": "USD", "to": "UAH", "amount": amount})

    assert response.status_code == 400
    assert "Invalid amount" in response.json()["detail"]
    assert upstream.calls == 0


def test_unknown_currency_is_bad_request(client):
    response = client.post("/convert", json={"from": "USD", "to": "XYZ", "amount": 1})
    assert response.status_code == 400
    assert response.json() == {"detail": "Unsupported currency: XYZ."}


def test_missing_field_is_unprocessable(client):
    response = client.post("/convert", json={"from": "USD", "amount": 1})
    assert response.status_code == 422


def test_missing_rate_is_not_found(client):
    response = client.post("/convert", json={"from": "GBP", "to": "UAH", "amount": 1})
    assert response.status_code == 404
    assert response.json() == {"detail": "Exchange rate not found for GBP to UAH"}


def test_upstream_client_error_status_is_propagated(client, upstream, sleep_recorder):
    upstream.status = 429

    response = client.post("/convert", json={"from": "USD", "to": "UAH", "amount": 1})

    assert response.status_code == 429
    assert upstream.calls == 1
    assert sleep_recorder.delays == []


def test_breaker_opens_and_rejects_without_upstream_call(client, upstream, sleep_recorder):
    upstream.status = 503
    body = {"from": "USD", "to": "UAH", "amount": 1}

    for _ in range(2):
        response = client.post("/convert", json=body)
        assert response.status_code == 503
        assert response.json()["detail"] == "Failed to fetch exchange rates after multiple attempts"
    assert upstream.calls == 4
    assert sleep_recorder.delays == [1.0, 1.0]

    response = client.post("/convert", json=body)
    assert response.status_code == 503
    assert response.json() == {"detail": "Service temporarily unavailable. Please try again later."}
    assert upstream.calls == 4


def test_currencies_lists_symbols(client):
    response = client.get("/currencies")
    assert response.status_code == 200
    assert response.json()["currencies"][:3] == ["UAH", "USD", "EUR"]


def test_delete_cache_forces_refetch(client, upstream):
    body = {"from": "USD", "to": "UAH", "amount": 100}
    client.post("/convert", json=body)

    response = client.delete("/cache")
    assert response.status_code == 204

    client.post("/convert", json=body)
    assert upstream.calls == 2


def test_base_currency_to_itself_is_not_found(client, upstream):
    response = client.post("/convert", json={"from": "UAH", "to": "uah", "amount": 100})

    assert response.status_code == 404
    assert response.json() == {"detail": "Exchange rate not found for UAH to UAH"}
    assert upstream.calls == 1


@pytest.mark.asyncio
async def test_error_handler_renders_detail_with_error_status():
    request = Request({"type": "http", "method": "POST", "path": "/convert", "headers": []})

    response = await _user_visible_error_handler(request, IncompleteRateDataError("sell"))

    assert response.status_code == 503
    assert json.loads(response.body) == {"detail": "Incomplete exchange rate data."}
