"""Score computation for hangman games.

The score rewards words that are hard to brute force, words made of rare
letters and games without wrong guesses. It only depends on the game state,
so the same game always yields the same score.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from .models import Game

ALPHABET_SIZE = 26
SCORE_SCALE = 0.0001

# Inverse of the probability of drawing exactly the k needed characters in k
# attempts from 26 letters without repetition, i.e. C(26, k). Peaks at k=13:
# excluding k wrong letters is as likely as picking 26-k right ones.
CHARNUM_DIFFICULTY: tuple[int, ...] = tuple(
    math.comb(ALPHABET_SIZE, k) for k in range(ALPHABET_SIZE + 1)
)

# Inverse relative frequency of each letter in English text.
LETTER_DIFFICULTY: dict[str, float] = {
    "a": 12.2444,
    "b": 67.0241,
    "c": 35.9454,
    "d": 23.5128,
    "e": 7.87278,
    "f": 44.8833,
    "g": 49.6278,
    "h": 16.4096,
    "i": 14.3554,
    "j": 653.595,
    "k": 129.534,
    "l": 24.8447,
    "m": 41.5628,
    "n": 14.817,
    "o": 13.3209,
    "p": 51.8403,
    "q": 1052.63,
    "r": 16.7029,
    "s": 15.8053,
    "t": 11.0424,
    "u": 36.2582,
    "v": 102.249,
    "w": 42.3729,
    "x": 666.667,
    "y": 50.6586,
    "z": 1351.35,
}


def bruteforce_difficulty(char_count: int) -> int | None:
    if 0 <= char_count < len(CHARNUM_DIFFICULTY):
        return CHARNUM_DIFFICULTY[char_count]
    return None


def average_letter_difficulty(chars_needed: Iterable[str]) -> float:
    """Product of the letter difficulties divided by the number of letters.

    Dividing keeps long words from being rewarded a second time; length is
    already covered by the brute force difficulty. Digits weigh 1.
    """
    # Sorted so the float product does not depend on set iteration order.
    chars = sorted(chars_needed)
    if not chars:
        return math.nan
    product = 1.0
    for char in chars:
        product *= LETTER_DIFFICULTY.get(char, 1.0)
    return product / len(chars)


def turn_coefficient(game: Game) -> float:
    return len(game.chars_guessed) / max(1, len(game.chars_needed))


def bad_guess_penalty(game: Game) -> float:
    """Halve the score for every wrong guess."""
    return 0.5 ** (game.turns - len(game.chars_guessed))


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def score(game: Game) -> int:
    difficulty = bruteforce_difficulty(len(game.chars_needed))
    if difficulty is None:
        return 0
    raw = (
        difficulty
        * average_letter_difficulty(game.chars_needed)
        * turn_coefficient(game)
        * bad_guess_penalty(game)
        * SCORE_SCALE
    )
    if not math.isfinite(raw):
        return 0
    return max(0, _round_half_up(raw))
