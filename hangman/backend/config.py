"""Configuration helpers for backend runtime."""

from __future__ import annotations

import os
from dataclasses import dataclass


class ConfigurationError(RuntimeError):
    """Raised at startup when a required input is missing or unusable."""


@dataclass(frozen=True)
class BackendSettings:
    host: str
    port: int
    max_highscores: int
    log_level: str


def _int_env(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc


def load_settings() -> BackendSettings:
    max_highscores = _int_env("HANGMAN_MAX_HIGHSCORES", "5")
    if max_highscores < 1:
        raise ConfigurationError("HANGMAN_MAX_HIGHSCORES must be at least 1")
    return BackendSettings(
        host=os.getenv("HANGMAN_HOST", "127.0.0.1"),
        port=_int_env("HANGMAN_PORT", "8000"),
        max_highscores=max_highscores,
        log_level=os.getenv("HANGMAN_LOG_LEVEL", "INFO").upper(),
    )
