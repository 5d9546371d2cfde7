"""Configuration for mbox2eml."""

import os
from dataclasses import dataclass

FALLBACK_WORKERS = 2

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


class ConfigError(Exception):
    """Raised when a configuration value is invalid."""


def default_workers() -> int:
    """Number of CPUs, or FALLBACK_WORKERS when it cannot be determined."""
    return os.cpu_count() or FALLBACK_WORKERS


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigError(f"{name} must be a boolean, got {raw!r}")


def _env_workers(name: str) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default_workers()
    try:
        workers = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None
    if workers < 1:
        raise ConfigError(f"{name} must be at least 1, got {workers}")
    return workers


@dataclass
class Config:
    workers: int
    compress_messages: bool = False
    compress_attachments: bool = True

    @classmethod
    def from_env(cls) -> "Config":
        """
        Load configuration from MBOX2EML_* environment variables.

        Raises:
            ConfigError: If a variable is set to an invalid value.
        """
        return cls(
            workers=_env_workers("MBOX2EML_WORKERS"),
            compress_messages=_env_bool("MBOX2EML_COMPRESS_MESSAGES", False),
            compress_attachments=_env_bool("MBOX2EML_COMPRESS_ATTACHMENTS", True),
        )
