import pytest

from hangman.backend.config import ConfigurationError, load_settings


def test_load_settings_reads_expected_env(monkeypatch) -> None:
    monkeypatch.setenv("HANGMAN_HOST", "0.0.0.0")
    monkeypatch.setenv("HANGMAN_PORT", "9000")
    monkeypatch.setenv("HANGMAN_MAX_HIGHSCORES", "10")
    monkeypatch.setenv("HANGMAN_LOG_LEVEL", "debug")

    settings = load_settings()

    assert settings.host == "0.0.0.0"
    assert settings.port == 9000
    assert settings.max_highscores == 10
    assert settings.log_level == "DEBUG"


def test_load_settings_applies_defaults(monkeypatch) -> None:
    monkeypatch.delenv("HANGMAN_HOST", raising=False)
    monkeypatch.delenv("HANGMAN_PORT", raising=False)
    monkeypatch.delenv("HANGMAN_MAX_HIGHSCORES", raising=False)
    monkeypatch.delenv("HANGMAN_LOG_LEVEL", raising=False)

    settings = load_settings()

    assert settings.host == "127.0.0.1"
    assert settings.port == 8000
    assert settings.max_highscores == 5
    assert settings.log_level == "INFO"


def test_load_settings_rejects_non_numeric_port(monkeypatch) -> None:
    monkeypatch.setenv("HANGMAN_PORT", "eighty")

    with pytest.raises(ConfigurationError):
        load_settings()


def test_load_settings_rejects_empty_leaderboard(monkeypatch) -> None:
    monkeypatch.setenv("HANGMAN_PORT", "8000")
    monkeypatch.setenv("HANGMAN_MAX_HIGHSCORES", "0")

    with pytest.raises(ConfigurationError):
        load_settings()
