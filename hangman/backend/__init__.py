"""Backend package for the hangman server."""

from .config import BackendSettings, ConfigurationError, load_settings
from .errors import GameAlreadyWon, GameNotWon, HangmanError, InvalidGuess, InvalidNick, InvalidToken
from .models import Game, HighscoreEntry
from .security import decode_game, encode_game, load_private_key
from .state import GameContext, build_context
from .store import Leaderboard, LeaderboardLoadError

__all__ = [
    "BackendSettings",
    "build_context",
    "ConfigurationError",
    "decode_game",
    "encode_game",
    "Game",
    "GameAlreadyWon",
    "GameContext",
    "GameNotWon",
    "HangmanError",
    "HighscoreEntry",
    "InvalidGuess",
    "InvalidNick",
    "InvalidToken",
    "Leaderboard",
    "LeaderboardLoadError",
    "load_private_key",
    "load_settings",
]
