"""Shared fixtures for stockmonitor tests."""

from __future__ import annotations

from typing import Callable, Dict, List

import httpx
import pytest
from fastapi.testclient import TestClient

from stockmonitor.config import Settings
from stockmonitor.main import create_app

Handler = Callable[[httpx.Request], httpx.Response]


def provider_quote(symbol: str, close: str, open_: str, percent_change: str, name: str = "") -> dict:
    """Raw Twelve Data quote object (numbers arrive as strings)."""
    return {
        "symbol": symbol,
        "name": name or f"{symbol} Inc",
        "exchange": "NASDAQ",
        "currency": "USD",
        "datetime": "2024-01-19",
        "open": open_,
        "high": close,
        "low": open_,
        "close": close,
        "volume": "1000000",
        "previous_close": open_,
        "change": "0",
        "percent_change": percent_change,
        "is_market_open": False,
    }


def timeline_values(count: int) -> List[dict]:
    """``count`` daily points, newest first, closes 100.5, 101.5, ... oldest first."""
    values = []
    for day in range(count, 0, -1):
        values.append({
            "datetime": f"2024-01-{day:02d}",
            "open": "100.0",
            "high": "110.0",
            "low": "90.0",
            "close": f"{99.5 + day:.5f}",
            "volume": "1000",
        })
    return values


class FakeProvider:
    """Stands in for the Twelve Data API behind an ``httpx.MockTransport``."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.routes: Dict[str, Handler] = {}

    def route(self, path: str, handler: Handler) -> None:
        self.routes[path] = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get(request.url.path)
        if handler is None:
            return httpx.Response(404, json={"status": "error", "code": 404, "message": "not routed"})
        return handler(request)

    def symbols_requested(self, path: str) -> List[str]:
        return [r.url.params.get("symbol") for r in self.requests if r.url.path == path]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        TWELVE_DATA_API_KEY="test-key",
        TWELVE_DATA_BASE_URL="https://api.twelvedata.test",
        STOCK_SYMBOLS=["AAPL", "MSFT", "GOOGL", "AMZN", "TSLA"],
    )


@pytest.fixture
def provider() -> FakeProvider:
    fake = FakeProvider()

    def quote(request: httpx.Request) -> httpx.Response:
        symbol = request.url.params["symbol"]
        return httpx.Response(200, json=provider_quote(symbol, "101.50", "100.00", "1.5"))

    def time_series(request: httpx.Request) -> httpx.Response:
        symbol = request.url.params["symbol"]
        return httpx.Response(200, json={
            "meta": {"symbol": symbol, "interval": "1day", "currency": "USD"},
            "values": timeline_values(7),
            "status": "ok",
        })

    fake.route("/quote", quote)
    fake.route("/time_series", time_series)
    return fake


@pytest.fixture
def make_client(provider):
    """Build a TestClient for the given settings, upstream faked by ``provider``."""
    clients = []

    def _make(app_settings: Settings) -> TestClient:
        app = create_app(app_settings, transport=httpx.MockTransport(provider))
        test_client = TestClient(app)
        test_client.__enter__()
        clients.append(test_client)
        return test_client

    yield _make
    for test_client in clients:
        test_client.__exit__(None, None, None)


@pytest.fixture
def client(make_client, settings) -> TestClient:
    return make_client(settings)
