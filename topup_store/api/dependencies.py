"""
Process-wide wiring: config, store and gateway client.

The store is chosen here: a SQL store when a database URL is configured,
otherwise the in-memory store. Tests swap any of these through
``app.dependency_overrides``.
"""

import logging

from dotenv import load_dotenv
from fastapi import Depends

from topup_store.database.base import TopUpStore
from topup_store.database.memory import InMemoryTopUpStore
from topup_store.integrations.clients.mocks.gateway import MockGatewayClient
from topup_store.services.auth_service import AuthService
from topup_store.services.topup_service import TopUpService
from topup_store.utils.config_loader import AppConfig, load_app_config

load_dotenv()

logger = logging.getLogger(__name__)


def build_store(config: AppConfig) -> TopUpStore:
    if config.storage.database_url:
        from topup_store.database.postgres import PostgresTopUpStore

        return PostgresTopUpStore(
            connection_string=config.storage.database_url,
            pool_size=config.storage.pool_size,
            max_overflow=config.storage.max_overflow,
        )
    return InMemoryTopUpStore()


app_config = load_app_config()
store = build_store(app_config)
gateway_client = MockGatewayClient(app_config.gateway)


def get_config() -> AppConfig:
    return app_config


def get_store() -> TopUpStore:
    return store


def get_gateway() -> MockGatewayClient:
    return gateway_client


def get_auth_service(
    store: TopUpStore = Depends(get_store),
    config: AppConfig = Depends(get_config),
) -> AuthService:
    return AuthService(store, config.auth)


def get_topup_service(
    store: TopUpStore = Depends(get_store),
    gateway: MockGatewayClient = Depends(get_gateway),
    config: AppConfig = Depends(get_config),
) -> TopUpService:
    return TopUpService(store, gateway, timezone=config.server.timezone)
