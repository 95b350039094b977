"""Game rules applied to a single hangman game."""

from __future__ import annotations

import dataclasses
import re
import secrets
from collections.abc import Sequence
from typing import Any

from .errors import GameAlreadyWon, InvalidGuess, InvalidNick
from .models import GUESSABLE_CHARS, Game

NICK_MAX_LENGTH = 16
_NICK_START = re.compile(r"\w", re.ASCII)


def new_game(word: str) -> Game:
    return Game(word=word)


def choose_word(words: Sequence[str]) -> str:
    """Pick the word for a new game using the system CSPRNG."""
    return secrets.choice(words)


def is_won(game: Game) -> bool:
    return len(game.chars_guessed) == len(game.chars_needed)


def obfuscated_word(game: Game) -> str:
    """Render the word with every unguessed letter or digit replaced by ``_``.

    Guessable characters are shown lower-cased once guessed; everything else
    (spaces, punctuation, non-ASCII letters) is shown as is.
    """
    rendered = []
    for char in game.word:
        lowered = char.lower()
        if lowered in GUESSABLE_CHARS:
            rendered.append(lowered if lowered in game.chars_guessed else "_")
        else:
            rendered.append(char)
    return "".join(rendered)


def apply_guess(game: Game, guess: Any) -> Game:
    """Return the game after one more guess; ``game`` itself is left untouched."""
    if is_won(game):
        raise GameAlreadyWon()
    if not isinstance(guess, str) or len(guess) != 1 or guess.lower() not in GUESSABLE_CHARS:
        raise InvalidGuess()

    char = guess.lower()
    chars_guessed = game.chars_guessed
    if char in game.chars_needed:
        chars_guessed = chars_guessed | {char}
    return dataclasses.replace(game, chars_guessed=chars_guessed, turns=game.turns + 1)


def validate_nick(nick: Any) -> str:
    if not isinstance(nick, str) or not 1 <= len(nick) <= NICK_MAX_LENGTH:
        raise InvalidNick()
    if _NICK_START.match(nick) is None:
        raise InvalidNick()
    return nick
