"""Domain models for game sessions and the leaderboard."""

from __future__ import annotations

import string
from dataclasses import dataclass, field
from typing import Any

GUESSABLE_CHARS = frozenset(string.ascii_lowercase + string.digits)


def needed_chars(word: str) -> frozenset[str]:
    """Distinct lower-case letters and digits the player has to find in ``word``."""
    return frozenset(c for c in word.lower() if c in GUESSABLE_CHARS)


@dataclass(frozen=True)
class Game:
    word: str
    chars_guessed: frozenset[str] = frozenset()
    turns: int = 0
    chars_needed: frozenset[str] = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "chars_guessed", frozenset(self.chars_guessed))
        object.__setattr__(self, "chars_needed", needed_chars(self.word))


@dataclass(frozen=True)
class HighscoreEntry:
    nick: str
    score: int

    def to_dict(self) -> dict[str, Any]:
        return {"score": self.score, "nick": self.nick}

    @classmethod
    def from_dict(cls, raw: Any) -> HighscoreEntry:
        if not isinstance(raw, dict):
            raise ValueError(f"highscore entry must be an object, got {type(raw).__name__}")
        nick = raw.get("nick")
        score = raw.get("score")
        if not isinstance(nick, str):
            raise ValueError("highscore entry needs a string nick")
        if isinstance(score, bool) or not isinstance(score, int):
            raise ValueError("highscore entry needs an integer score")
        return cls(nick=nick, score=score)
