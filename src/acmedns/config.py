"""Configuration loading and validation from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass

from acmedns.client import DEFAULT_TIMEOUT
from acmedns.errors import ConfigurationError
from acmedns.storage.file import DEFAULT_MODE


@dataclass(frozen=True)
class AppConfig:
    """Settings for registering an ACME DNS account, loaded from environment variables."""

    api_url: str
    storage_path: str
    allow_from: tuple[str, ...] = ()
    timeout: float = DEFAULT_TIMEOUT
    storage_mode: int = DEFAULT_MODE


def _require_env(name: str) -> str:
    value = os.environ.get(name)
    if not value:
        raise ConfigurationError(f"Required environment variable {name} is not set")
    return value


def parse_allow_from(raw: str | None) -> tuple[str, ...]:
    """Split a comma separated CIDR list, dropping blank entries."""
    if not raw:
        return ()
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def parse_timeout(raw: str, name: str = "ACMEDNS_TIMEOUT") -> float:
    try:
        timeout = float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got: {raw!r}")
    if timeout <= 0:
        raise ConfigurationError(f"{name} must be a positive number, got: {timeout}")
    return timeout


def load_config(
    api_url: str | None = None,
    storage_path: str | None = None,
    allow_from: str | None = None,
    timeout: str | None = None,
) -> AppConfig:
    """Load and validate configuration from environment variables.

    Arguments that are not None take precedence over the matching variable,
    which lets the command line override the environment.
    """
    api_url = api_url or _require_env("ACMEDNS_API_URL")
    storage_path = storage_path or _require_env("ACMEDNS_STORAGE_PATH")
    if allow_from is None:
        allow_from = os.environ.get("ACMEDNS_ALLOW_FROM")
    if timeout is None:
        timeout = os.environ.get("ACMEDNS_TIMEOUT", str(DEFAULT_TIMEOUT))

    raw_mode = os.environ.get("ACMEDNS_STORAGE_MODE", oct(DEFAULT_MODE))
    try:
        storage_mode = int(raw_mode, 8)
    except ValueError:
        raise ConfigurationError(f"ACMEDNS_STORAGE_MODE must be an octal file mode, got: {raw_mode!r}")

    return AppConfig(
        api_url=api_url,
        storage_path=storage_path,
        allow_from=parse_allow_from(allow_from),
        timeout=parse_timeout(timeout),
        storage_mode=storage_mode,
    )
