from __future__ import annotations

import copy
from typing import Any

import pytest

from request_mcp.errors import TransportError
from request_mcp.resolver import ResolvedRequest
from request_mcp.store import TemplateStore
from request_mcp.tools import ApiTools

CRYPTO_PRICE: dict[str, Any] = {
    "id": "crypto_price",
    "name": "Cryptocurrency Price Query",
    "description": "Query current cryptocurrency prices from CoinGecko API",
    "params": {
        "ids": {"type": "string", "description": "Comma-separated cryptocurrency IDs", "example": "bitcoin"},
        "vs_currencies": {"type": "string", "description": "Currency codes", "example": "usd"},
    },
    "api": {
        "url": "https://api.coingecko.com/api/v3/simple/price",
        "method": "GET",
        "headers": {},
        "params": {"include_24hr_change": True},
    },
}

IP_LOCATION: dict[str, Any] = {
    "id": "getIpLocation",
    "name": "get IP's location",
    "description": "get IP's location",
    "params": {"ip": {"type": "string", "description": "IP address", "example": "8.8.8.8"}},
    "api": {"url": "https://ipinfo.io/{ip}/json", "method": "GET"},
}


class MemoryBackend:
    """Test-only persistence double that records every save."""

    def __init__(self, saved: dict[str, Any] | None = None, load_error: Exception | None = None) -> None:
        self.saved = copy.deepcopy(saved)
        self.load_error = load_error
        self.save_error: Exception | None = None
        self.saves: list[dict[str, Any]] = []

    def load(self) -> dict[str, Any] | None:
        if self.load_error is not None:
            raise self.load_error
        return copy.deepcopy(self.saved)

    def save(self, templates: dict[str, Any]) -> None:
        if self.save_error is not None:
            raise self.save_error
        self.saves.append(copy.deepcopy(templates))
        self.saved = copy.deepcopy(templates)


class FakeClient:
    """Records dispatched requests and returns a canned response."""

    def __init__(self, response: Any = None, error: Exception | None = None) -> None:
        self.response = {"ok": True} if response is None else response
        self.error = error
        self.sent: list[ResolvedRequest] = []

    def send(self, request: ResolvedRequest) -> Any:
        self.sent.append(request)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def builtins() -> dict[str, Any]:
    return {
        CRYPTO_PRICE["id"]: copy.deepcopy(CRYPTO_PRICE),
        IP_LOCATION["id"]: copy.deepcopy(IP_LOCATION),
    }


@pytest.fixture
def backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def store(backend: MemoryBackend, builtins: dict[str, Any]) -> TemplateStore:
    template_store = TemplateStore(backend, builtins=builtins)
    template_store.initialize()
    return template_store


@pytest.fixture
def client() -> FakeClient:
    return FakeClient()


@pytest.fixture
def tools(store: TemplateStore, client: FakeClient) -> ApiTools:
    return ApiTools(store, client)


@pytest.fixture
def failing_client() -> FakeClient:
    return FakeClient(error=TransportError("HTTP 503: upstream unavailable"))
