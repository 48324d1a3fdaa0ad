"""
Configuration loader for the TopUp Store API (server, gateway, auth, storage).
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "app_config.yml"


class ServerConfig(BaseModel):
    title: str = "Mobile TopUp Store API"
    version: str = "3.1.0"
    port: int = Field(default=3000, ge=1, le=65535)
    log_level: str = "INFO"
    timezone: str = "Asia/Bangkok"


class GatewayConfig(BaseModel):
    """Phone-prefix rules of the mock payment gateway."""

    error_prefix: str = "099"
    slow_prefix: str = "088"
    slow_delay_ms: int = Field(default=5000, ge=0)
    default_delay_ms: int = Field(default=1500, ge=0)


class AuthConfig(BaseModel):
    static_token: str = "mock-token"
    otp_code: str = "1234"
    conflict_status_code: Literal[400, 409] = 409


class StorageConfig(BaseModel):
    database_url: str = ""
    pool_size: int = Field(default=5, ge=1, le=100)
    max_overflow: int = Field(default=10, ge=0, le=100)


class AppConfig(BaseModel):
    server: ServerConfig = Field(default_factory=ServerConfig)
    gateway: GatewayConfig = Field(default_factory=GatewayConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)


def load_app_config(config_path: Optional[Path] = None) -> AppConfig:
    """
    Load and validate the application configuration.

    Args:
        config_path: Path to a YAML config file. Defaults to TOPUP_CONFIG_PATH,
            then config/app_config.yml. A missing default file falls back to
            the built-in defaults.

    Returns:
        Validated AppConfig with environment overrides applied.

    Raises:
        FileNotFoundError: If an explicitly requested config file doesn't exist
        ValidationError: If config doesn't match schema
    """
    explicit = config_path is not None or bool(os.getenv("TOPUP_CONFIG_PATH"))
    if config_path is None:
        config_path = Path(os.getenv("TOPUP_CONFIG_PATH") or DEFAULT_CONFIG_PATH)

    data = {}
    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    elif explicit:
        raise FileNotFoundError(f"Config file not found: {config_path}")
    else:
        logger.warning("Config file %s not found; using defaults", config_path)

    try:
        cfg = AppConfig(**data)
    except ValidationError as e:
        logger.error("App config validation failed: %s", e)
        raise

    _apply_env_overrides(cfg)
    logger.info("Loaded app config from %s", config_path)
    return cfg


def _apply_env_overrides(cfg: AppConfig) -> None:
    if os.getenv("DATABASE_URL"):
        cfg.storage.database_url = os.environ["DATABASE_URL"]
    if os.getenv("PORT"):
        cfg.server.port = int(os.environ["PORT"])
    if os.getenv("LOG_LEVEL"):
        cfg.server.log_level = os.environ["LOG_LEVEL"].upper()
