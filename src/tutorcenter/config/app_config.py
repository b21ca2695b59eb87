"""Application configuration loader.

Loads centralized configuration from data/config/app_config_v1.yaml,
falls back to built-in defaults, then applies environment overrides
(a local .env file is read first).

Usage:
    from tutorcenter.config.app_config import load_app_config

    config = load_app_config()
    config.database.url
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog
import yaml
from dotenv import load_dotenv

logger = structlog.get_logger(__name__)

# Config file path (relative to project root)
CONFIG_FILE = Path("data/config/app_config_v1.yaml")

DEFAULT_DATABASE_URL = "sqlite:///db/tutorcenter.db"

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class ServerConfig:
    """HTTP server settings."""

    host: str = "127.0.0.1"
    port: int = 3001
    frontend_url: str = "http://localhost:8080"


@dataclass
class DatabaseConfig:
    """Database connection settings."""

    url: str = DEFAULT_DATABASE_URL
    echo: bool = False


@dataclass
class AuthConfig:
    """Identity provider token verification settings.

    Either ``jwks_url`` (RS256 keys published by the provider) or
    ``jwt_secret`` (HS256, development) must be set for tokens to verify.
    """

    jwks_url: str | None = None
    jwt_secret: str | None = None
    issuer: str | None = None
    audience: str | None = None
    required: bool = False
    leeway_seconds: int = 5

    @property
    def enabled(self) -> bool:
        return bool(self.jwks_url or self.jwt_secret)


@dataclass
class AppConfig:
    """Application-wide configuration."""

    server: ServerConfig = field(default_factory=ServerConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    auth: AuthConfig = field(default_factory=AuthConfig)


# Module-level cache
_cached_config: AppConfig | None = None


def _get_defaults() -> dict[str, Any]:
    """Get default configuration values."""
    return {
        "server": {
            "host": "127.0.0.1",
            "port": 3001,
            "frontend_url": "http://localhost:8080",
        },
        "database": {
            "url": DEFAULT_DATABASE_URL,
            "echo": False,
        },
        "auth": {
            "jwks_url": None,
            "jwt_secret": None,
            "issuer": None,
            "audience": None,
            "required": False,
            "leeway_seconds": 5,
        },
    }


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay environment variables on top of file/default values."""
    server = data.setdefault("server", {})
    database = data.setdefault("database", {})
    auth = data.setdefault("auth", {})

    if url := os.environ.get("DATABASE_URL"):
        database["url"] = url
    if frontend := os.environ.get("FRONTEND_URL"):
        server["frontend_url"] = frontend
    if port := os.environ.get("PORT"):
        server["port"] = int(port)
    if secret := os.environ.get("AUTH_JWT_SECRET"):
        auth["jwt_secret"] = secret
    if jwks := os.environ.get("AUTH_JWKS_URL"):
        auth["jwks_url"] = jwks
    if issuer := os.environ.get("AUTH_ISSUER"):
        auth["issuer"] = issuer
    if required := os.environ.get("AUTH_REQUIRED"):
        auth["required"] = _as_bool(required)

    return data


def _parse_config(data: dict[str, Any]) -> AppConfig:
    """Parse configuration dictionary into AppConfig object."""
    server_data = data.get("server") or {}
    server = ServerConfig(
        host=server_data.get("host", "127.0.0.1"),
        port=int(server_data.get("port", 3001)),
        frontend_url=server_data.get("frontend_url", "http://localhost:8080"),
    )

    db_data = data.get("database") or {}
    database = DatabaseConfig(
        url=db_data.get("url") or DEFAULT_DATABASE_URL,
        echo=_as_bool(db_data.get("echo", False)),
    )

    auth_data = data.get("auth") or {}
    auth = AuthConfig(
        jwks_url=auth_data.get("jwks_url"),
        jwt_secret=auth_data.get("jwt_secret"),
        issuer=auth_data.get("issuer"),
        audience=auth_data.get("audience"),
        required=_as_bool(auth_data.get("required", False)),
        leeway_seconds=int(auth_data.get("leeway_seconds", 5)),
    )

    return AppConfig(server=server, database=database, auth=auth)


def load_app_config(force_reload: bool = False) -> AppConfig:
    """Load application config.

    Args:
        force_reload: If True, ignore cached config and reload from file.

    Returns:
        AppConfig object with all settings.
    """
    global _cached_config

    if _cached_config is not None and not force_reload:
        return _cached_config

    load_dotenv()

    data: dict[str, Any]

    if CONFIG_FILE.exists():
        logger.debug("loading_app_config", source=str(CONFIG_FILE))
        data = yaml.safe_load(CONFIG_FILE.read_text(encoding="utf-8")) or {}
    else:
        logger.info("using_default_config")
        data = _get_defaults()

    _cached_config = _parse_config(_apply_env_overrides(data))
    return _cached_config


def clear_config_cache() -> None:
    """Clear the configuration cache.

    Useful for testing or when config is modified at runtime.
    """
    global _cached_config
    _cached_config = None
