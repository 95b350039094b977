"""Domain errors that are reported to API clients."""

from __future__ import annotations


class HangmanError(Exception):
    """Base class for errors with a client-facing status and message."""

    status_code = 400
    message = "Bad Request"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def payload(self) -> dict[str, str]:
        return {"error": self.message}


class InvalidToken(HangmanError):
    message = "Invalid Game!"


class InvalidGuess(HangmanError):
    message = "Your guess must be a single letter or digit!"


class GameAlreadyWon(HangmanError):
    status_code = 410
    message = "The game is already won!"


class GameNotWon(HangmanError):
    message = "The game is not yet won!"


class InvalidNick(HangmanError):
    message = "Nick must be a string between 1 and 16 chars and contain no special chars."
