"""
Config Module - Black Box Interface

Purpose: Runtime configuration for the deployment core
Interface: EnvConfigProvider, ConfigProvider, ExecutorConfig, HiveConfig, LoggingConfig
Hidden: Environment parsing and defaults

Can be replaced with different config sources as long as the provider protocol holds.
"""

from .provider import (
    DEFAULT_STREAM_LIMIT,
    ConfigProvider,
    EnvConfigProvider,
    ExecutorConfig,
    HiveConfig,
    LoggingConfig,
)

__all__ = [
    "DEFAULT_STREAM_LIMIT",
    "ConfigProvider",
    "EnvConfigProvider",
    "ExecutorConfig",
    "HiveConfig",
    "LoggingConfig",
]
