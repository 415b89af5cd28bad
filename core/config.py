"""
Centralized configuration for the transactions service.

Configuration is loaded from environment variables (and an optional .env
file) with sensible defaults.

Usage:
    from core.config import config

    port = config.web.port
    db_path = config.store.path
"""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass(frozen=True)
class StoreConfig:
    """DuckDB record store configuration."""

    path: str = field(default_factory=lambda: os.getenv("DUCKDB_PATH", "data/transactions.duckdb"))
    table: str = "transactions"


@dataclass(frozen=True)
class SeedConfig:
    """Remote seed dataset configuration."""

    url: str = field(default_factory=lambda: os.getenv(
        "SEED_URL", "https://s3.amazonaws.com/roxiler.com/product_transaction.json"
    ))
    request_timeout: float = field(default_factory=lambda: float(os.getenv("SEED_TIMEOUT", "30")))

    # combined-data re-runs the seed step on every call unless disabled
    reseed_on_combined: bool = field(default_factory=lambda: _env_bool("COMBINED_RESEED", "true"))


@dataclass(frozen=True)
class WebConfig:
    """HTTP server configuration."""

    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "3000")))
    cors_origins: tuple = ("*",)


@dataclass(frozen=True)
class PaginationConfig:
    """Defaults and bounds for the transactions listing."""

    default_page: int = 1
    default_per_page: int = 10
    max_per_page: int = 100

    # (max_page - 1) * max_per_page must fit a DuckDB BIGINT offset
    max_page: int = 10 ** 15


@dataclass(frozen=True)
class LogConfig:
    """Logging configuration."""

    level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    format: str = field(default_factory=lambda: os.getenv("LOG_FORMAT", "text"))

    @property
    def json_format(self) -> bool:
        return self.format == "json"


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration."""

    version: str = "1.0.0"
    store: StoreConfig = field(default_factory=StoreConfig)
    seed: SeedConfig = field(default_factory=SeedConfig)
    web: WebConfig = field(default_factory=WebConfig)
    pagination: PaginationConfig = field(default_factory=PaginationConfig)
    logging: LogConfig = field(default_factory=LogConfig)


# Global config instance
config = AppConfig()


# ─── Convenience Exports ──────────────────────────────────────────────────────
VERSION = config.version
DUCKDB_PATH = config.store.path
SEED_URL = config.seed.url
SEED_TIMEOUT = config.seed.request_timeout


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


def validate_config() -> None:
    """
    Validate configuration values on startup.

    Raises:
        ConfigurationError: If a value is missing or out of range
    """
    errors = []

    if not config.seed.url.startswith(("http://", "https://")):
        errors.append(f"SEED_URL must be an http(s) URL, got {config.seed.url!r}")

    if config.seed.request_timeout <= 0:
        errors.append("SEED_TIMEOUT must be positive")

    if not 0 < config.web.port < 65536:
        errors.append(f"PORT out of range: {config.web.port}")

    if not config.store.path:
        errors.append("DUCKDB_PATH is required but not set")

    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ConfigurationError(error_msg)
