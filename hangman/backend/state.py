"""Startup context shared by the request handlers."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from cryptography.hazmat.primitives.asymmetric import rsa

from .config import ConfigurationError
from .models import needed_chars
from .security import fits_in_token, load_private_key
from .store import DEFAULT_MAX_ENTRIES, Leaderboard

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameContext:
    private_key: rsa.RSAPrivateKey
    words: tuple[str, ...]
    leaderboard: Leaderboard

    @property
    def public_key(self) -> rsa.RSAPublicKey:
        return self.private_key.public_key()


def load_words(lines: Iterable[str], public_key: rsa.RSAPublicKey | None = None) -> tuple[str, ...]:
    """Collect the playable words from newline-delimited input.

    Blank lines are ignored. Words without a letter or digit to guess, and
    words too long to fit a session token under ``public_key``, are skipped
    with a warning.
    """
    words = []
    for line in lines:
        word = line.strip()
        if not word:
            continue
        if not needed_chars(word):
            logger.warning("Skipping word %r: it has no letter or digit to guess", word)
            continue
        if public_key is not None and not fits_in_token(word, public_key):
            logger.warning("Skipping word %r: too long for a %d bit key", word, public_key.key_size)
            continue
        words.append(word)
    if not words:
        raise ConfigurationError("The word list is empty or has no playable words")
    return tuple(words)


def read_key_file(path: str | os.PathLike[str]) -> rsa.RSAPrivateKey:
    try:
        pem = Path(path).read_bytes()
    except OSError as exc:
        raise ConfigurationError(f"Could not read key file {path}: {exc}") from exc
    return load_private_key(pem)


def build_context(
    key_file: str | os.PathLike[str],
    highscore_file: str | os.PathLike[str],
    word_stream: TextIO,
    max_highscores: int = DEFAULT_MAX_ENTRIES,
) -> GameContext:
    private_key = read_key_file(key_file)
    return GameContext(
        private_key=private_key,
        words=load_words(word_stream, private_key.public_key()),
        leaderboard=Leaderboard(highscore_file, max_entries=max_highscores),
    )
