"""Configuration management module."""

from pricechart.core.config.settings import (
    CacheConfig,
    ChartConfig,
    ConfigManager,
    LoggingConfig,
    RealtimeConfig,
    ServerConfig,
    get_default_config,
    load_config_from_env,
)

__all__ = [
    "ConfigManager",
    "ChartConfig",
    "ServerConfig",
    "CacheConfig",
    "RealtimeConfig",
    "LoggingConfig",
    "get_default_config",
    "load_config_from_env",
]
