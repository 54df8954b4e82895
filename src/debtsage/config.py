"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

from .errors import InvalidInputError
from .models.debt import Strategy

load_dotenv()

DEFAULT_MAX_MONTHS = 600  # 50 years


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int, *, minimum: int) -> int:
    """Read a positive integer setting, rejecting malformed values."""

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
    if value < minimum:
        raise ValueError(f"{name} must be at least {minimum}, got {value}")
    return value


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "DebtSage"
    LOG_FILENAME = "debtsage.log"

    def __init__(self) -> None:
        self.DEV_MODE = _env_bool("DEBTSAGE_DEV_MODE", default=True)
        self.MAX_MONTHS = _env_int("DEBTSAGE_MAX_MONTHS", DEFAULT_MAX_MONTHS, minimum=1)
        self.DEFAULT_STRATEGY = self._resolve_strategy()
        self.DATA_DIR = self._resolve_data_dir()

    def _resolve_strategy(self) -> str:
        """Return the configured default strategy name."""

        raw = os.getenv("DEBTSAGE_DEFAULT_STRATEGY", Strategy.AVALANCHE.value)
        try:
            return Strategy.parse(raw).value
        except InvalidInputError as exc:
            raise ValueError(f"DEBTSAGE_DEFAULT_STRATEGY: {exc}") from exc

    def _resolve_data_dir(self) -> Path:
        """Return the directory where log files live."""

        data_root = os.getenv("DEBTSAGE_DATA_DIR", "instance")
        return Path(data_root).expanduser().resolve()


class DevConfig(BaseConfig):
    """Development configuration."""

    DEBUG = True
    TESTING = False
