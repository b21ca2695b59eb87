"""Configuration package for the tutoring center API."""

from tutorcenter.config.app_config import (
    AppConfig,
    AuthConfig,
    DatabaseConfig,
    ServerConfig,
    clear_config_cache,
    load_app_config,
)

__all__ = [
    "AppConfig",
    "AuthConfig",
    "DatabaseConfig",
    "ServerConfig",
    "clear_config_cache",
    "load_app_config",
]
