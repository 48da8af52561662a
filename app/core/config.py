"""Configuration module for the invoice dashboard."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from urllib.parse import urlparse

from dotenv import load_dotenv

from app.core.exceptions import ConfigurationError

load_dotenv()


def _as_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Config:
    """Runtime configuration with validation."""

    APP_NAME: str
    APP_VERSION: str
    ENV: str
    DEBUG: bool
    DATABASE_URL: str
    DB_CONNECTIVITY_REQUIRED: bool
    SESSION_SECRET: str
    SESSION_TTL_MINUTES: int
    PASSWORD_PEPPER: str
    FLASH_MAX_AGE_SECONDS: int
    BANNER_DURATION_MS: int
    ITEMS_PER_PAGE: int
    LOG_LEVEL: str
    LOG_FILE: str

    @property
    def is_production(self) -> bool:
        return self.ENV == "production"


def _build_config(env: str | None = None) -> Config:
    resolved_env = (env or os.getenv("ENV", "development")).strip().lower()
    debug = _as_bool(os.getenv("DEBUG"), default=(resolved_env != "production"))

    config = Config(
        APP_NAME="Invoice Dashboard",
        APP_VERSION=os.getenv("APP_VERSION", "1.0.0"),
        ENV=resolved_env,
        DEBUG=debug if resolved_env != "production" else False,
        DATABASE_URL=os.getenv("DATABASE_URL", "sqlite:///./invoices.db"),
        DB_CONNECTIVITY_REQUIRED=_as_bool(
            os.getenv("DB_CONNECTIVITY_REQUIRED"), default=(resolved_env == "production")
        ),
        SESSION_SECRET=os.getenv("SESSION_SECRET", "change_me_session_secret"),
        SESSION_TTL_MINUTES=int(os.getenv("SESSION_TTL_MINUTES", "60")),
        PASSWORD_PEPPER=os.getenv("PASSWORD_PEPPER", ""),
        FLASH_MAX_AGE_SECONDS=int(os.getenv("FLASH_MAX_AGE_SECONDS", "1")),
        BANNER_DURATION_MS=int(os.getenv("BANNER_DURATION_MS", "3000")),
        ITEMS_PER_PAGE=int(os.getenv("ITEMS_PER_PAGE", "6")),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),
        LOG_FILE=os.getenv("LOG_FILE", ""),
    )
    _validate_config(config)
    return config


def _validate_database_url(database_url: str) -> None:
    parsed = urlparse(database_url)
    if parsed.scheme not in {"sqlite", "postgresql", "postgresql+psycopg2"}:
        raise ConfigurationError(
            "DATABASE_URL must use sqlite:// or postgresql:// style URL."
        )
    if parsed.scheme.startswith("postgresql") and not parsed.hostname:
        raise ConfigurationError("PostgreSQL DATABASE_URL is missing hostname.")


def _validate_config(config: Config) -> None:
    _validate_database_url(config.DATABASE_URL)

    if config.SESSION_TTL_MINUTES < 1:
        raise ConfigurationError("SESSION_TTL_MINUTES must be >= 1.")
    if config.FLASH_MAX_AGE_SECONDS < 1:
        raise ConfigurationError("FLASH_MAX_AGE_SECONDS must be >= 1.")
    if config.BANNER_DURATION_MS < 0:
        raise ConfigurationError("BANNER_DURATION_MS must be >= 0.")
    if config.ITEMS_PER_PAGE < 1:
        raise ConfigurationError("ITEMS_PER_PAGE must be >= 1.")
    if config.LOG_LEVEL not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        raise ConfigurationError("LOG_LEVEL must be one of DEBUG/INFO/WARNING/ERROR/CRITICAL.")
    if config.is_production and "change_me" in config.SESSION_SECRET.lower():
        raise ConfigurationError("Production SESSION_SECRET uses a placeholder value.")


@lru_cache(maxsize=8)
def get_config(env: str | None = None) -> Config:
    """Get validated configuration for the requested environment."""
    return _build_config(env)
