"""Pytest fixtures for store, service and API tests."""

import pytest
from fastapi.testclient import TestClient

from topup_store.api import dependencies
from topup_store.api.main import app
from topup_store.database.memory import InMemoryTopUpStore
from topup_store.integrations.clients.mocks.gateway import MockGatewayClient
from topup_store.utils.config_loader import AppConfig, GatewayConfig


class SleepRecorder:
    """Stands in for asyncio.sleep and records requested delays."""

    def __init__(self):
        self.calls = []

    async def __call__(self, seconds):
        self.calls.append(seconds)


@pytest.fixture
def db():
    """In-memory store for tests."""
    return InMemoryTopUpStore()


@pytest.fixture
def sleeps():
    return SleepRecorder()


@pytest.fixture
def app_config():
    return AppConfig()


@pytest.fixture
def gateway(app_config, sleeps):
    """Gateway with the real prefix rules and delays, but no real waiting."""
    return MockGatewayClient(app_config.gateway, sleep=sleeps)


@pytest.fixture
def fast_gateway_config():
    return GatewayConfig(slow_delay_ms=200, default_delay_ms=20)


@pytest.fixture
def client(db, gateway, app_config):
    app.dependency_overrides[dependencies.get_store] = lambda: db
    app.dependency_overrides[dependencies.get_gateway] = lambda: gateway
    app.dependency_overrides[dependencies.get_config] = lambda: app_config
    yield TestClient(app)
    app.dependency_overrides.clear()
