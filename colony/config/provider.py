"""Configuration provider following Black Box Design principles."""
import os
from dataclasses import dataclass
from typing import Protocol

# asyncio's default 64 KiB line limit is too small for nix build logs
DEFAULT_STREAM_LIMIT = 16 * 1024 * 1024


@dataclass
class ExecutorConfig:
    """Command execution configuration."""
    stream_limit: int


@dataclass
class HiveConfig:
    """Hive lookup and evaluation configuration."""
    nix_bin: str
    show_trace: bool


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_executor_config(self) -> ExecutorConfig:
        """Get command execution configuration."""
        ...

    def get_hive_config(self) -> HiveConfig:
        """Get hive configuration."""
        ...

    def get_logging_config(self) -> LoggingConfig:
        """Get logging configuration."""
        ...


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def get_executor_config(self) -> ExecutorConfig:
        """Get command execution configuration from environment variables."""
        stream_limit = _env_int("COLONY_STREAM_LIMIT", DEFAULT_STREAM_LIMIT)
        if stream_limit <= 0:
            raise ValueError("COLONY_STREAM_LIMIT must be positive")

        return ExecutorConfig(stream_limit=stream_limit)

    def get_hive_config(self) -> HiveConfig:
        """Get hive configuration from environment variables."""
        return HiveConfig(
            nix_bin=os.getenv("COLONY_NIX_BIN", "nix"),
            show_trace=_env_flag("COLONY_SHOW_TRACE"),
        )

    def get_logging_config(self) -> LoggingConfig:
        """Get logging configuration from environment variables."""
        return LoggingConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
