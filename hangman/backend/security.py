"""Session token codec: the whole game state travels encrypted with the client."""

from __future__ import annotations

import base64
import binascii
import json
import logging
from typing import Any

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from .config import ConfigurationError
from .errors import InvalidToken
from .models import Game, needed_chars

logger = logging.getLogger(__name__)

KEY_BITS = 4096
PUBLIC_EXPONENT = 65537
# Upper bound on turns assumed when sizing a word's largest possible token.
WORST_CASE_TURNS = 10**9

_OAEP = padding.OAEP(
    mgf=padding.MGF1(algorithm=hashes.SHA256()),
    algorithm=hashes.SHA256(),
    label=None,
)


def generate_private_key(bits: int = KEY_BITS) -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=PUBLIC_EXPONENT, key_size=bits)


def private_key_to_pem(private_key: rsa.RSAPrivateKey) -> bytes:
    return private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )


def load_private_key(pem: bytes) -> rsa.RSAPrivateKey:
    """Parse an unencrypted PEM private key; only RSA keys are usable."""
    try:
        key = serialization.load_pem_private_key(pem, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise ConfigurationError(f"Could not parse private key: {exc}") from exc
    if not isinstance(key, rsa.RSAPrivateKey):
        raise ConfigurationError("Private key must be an RSA key")
    return key


def max_plaintext_size(public_key: rsa.RSAPublicKey) -> int:
    """Largest payload RSA-OAEP with SHA256 can encrypt under ``public_key``."""
    return public_key.key_size // 8 - 2 * hashes.SHA256.digest_size - 2


def fits_in_token(word: str, public_key: rsa.RSAPublicKey) -> bool:
    """Whether every state a game of ``word`` can reach still encrypts under ``public_key``."""
    solved = Game(word=word, chars_guessed=needed_chars(word), turns=WORST_CASE_TURNS)
    return len(_serialize(solved)) <= max_plaintext_size(public_key)


def _serialize(game: Game) -> bytes:
    return json.dumps(
        {
            "word": game.word,
            "charsGuessed": sorted(game.chars_guessed),
            "turns": game.turns,
        },
        separators=(",", ":"),
    ).encode("utf-8")


def encode_game(game: Game, public_key: rsa.RSAPublicKey) -> str:
    """Encrypt the game state into an opaque token for the client."""
    ciphertext = public_key.encrypt(_serialize(game), _OAEP)
    return base64.b64encode(ciphertext).decode("ascii")


def decode_game(token: Any, private_key: rsa.RSAPrivateKey) -> Game:
    """Reconstruct a game from a token produced by :func:`encode_game`.

    Every failure collapses into :class:`InvalidToken` so nothing about the
    cause reaches the client.
    """
    try:
        if not isinstance(token, str):
            raise TypeError(f"token must be a string, got {type(token).__name__}")
        ciphertext = base64.b64decode(token.encode("ascii"), validate=True)
        plaintext = private_key.decrypt(ciphertext, _OAEP)
        return _game_from_payload(json.loads(plaintext))
    except (binascii.Error, UnicodeError, ValueError, TypeError) as exc:
        logger.debug("Rejected session token: %s", exc)
        raise InvalidToken() from None


def _game_from_payload(payload: Any) -> Game:
    if not isinstance(payload, dict):
        raise TypeError("payload must be an object")
    word = payload.get("word")
    guessed = payload.get("charsGuessed")
    turns = payload.get("turns")
    if not isinstance(word, str):
        raise TypeError("word must be a string")
    if not isinstance(guessed, list) or not all(isinstance(c, str) and len(c) == 1 for c in guessed):
        raise TypeError("charsGuessed must be a list of characters")
    if isinstance(turns, bool) or not isinstance(turns, int) or turns < 0:
        raise TypeError("turns must be a non-negative integer")

    game = Game(word=word, chars_guessed=frozenset(guessed), turns=turns)
    if not game.chars_guessed <= game.chars_needed:
        raise ValueError("charsGuessed contains characters the word does not need")
    if game.turns < len(game.chars_guessed):
        raise ValueError("turns is lower than the number of guessed characters")
    return game
