"""Fixtures for API tests: real SQLite stores behind the app, no lifespan."""

from collections.abc import AsyncGenerator
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from stockflow.api.main import app
from stockflow.application.services import StockServices, build_stock_services
from stockflow.config.settings import AlertSettings, Settings
from stockflow.core.interfaces import IBroadcaster
from stockflow.infrastructure.realtime import SessionRegistry


class RecordingBroadcaster(IBroadcaster):
    """Keeps every published message instead of sending it."""

    def __init__(self) -> None:
        self.published: list[tuple[str, dict[str, Any]]] = []

    async def publish(self, topic: str, message: dict[str, Any]) -> int:
        self.published.append((topic, message))
        return 1

    def events(self, topic: str | None = None) -> list[str]:
        return [m["event"] for t, m in self.published if topic is None or t == topic]


@pytest.fixture
def broadcaster() -> RecordingBroadcaster:
    return RecordingBroadcaster()


@pytest.fixture
def registry() -> SessionRegistry:
    return SessionRegistry()


@pytest.fixture
async def services(sqlite_pool, broadcaster) -> AsyncGenerator[StockServices, None]:
    settings = Settings(alerts=AlertSettings(recipient_user_ids=[1, 2], sweep_enabled=False))
    services = await build_stock_services(broadcaster=broadcaster, settings=settings)
    yield services
    await services.dispatcher.drain()


@pytest.fixture
async def client(services, registry) -> AsyncGenerator[AsyncClient, None]:
    app.state.services = services
    app.state.registry = registry
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def widget(client) -> dict:
    """Widget with 100 on hand and a minimum of 20."""
    response = await client.post(
        "/api/products",
        json={"sku": "WID-001", "name": "Widget", "quantity": 100, "min_stock_level": 20},
    )
    assert response.status_code == 201
    return response.json()
