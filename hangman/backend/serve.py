"""Command line entry point running the hangman API with uvicorn."""

from __future__ import annotations

import argparse
import logging
import sys

from .config import BackendSettings, ConfigurationError, load_settings
from .state import GameContext, build_context

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger = logging.getLogger(__name__)


def parse_args(settings: BackendSettings, argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Hangman game server. Reads the playable words from stdin unless --words is given."
    )
    parser.add_argument("key_file", help="PEM file holding the server's RSA private key")
    parser.add_argument("highscore_file", help="JSON file the leaderboard is persisted to")
    parser.add_argument("--words", type=argparse.FileType("r", encoding="utf-8"), default=sys.stdin)
    parser.add_argument("--host", default=settings.host)
    parser.add_argument("--port", type=int, default=settings.port)
    parser.add_argument("--max-highscores", type=int, default=settings.max_highscores)
    args = parser.parse_args(argv)
    if args.max_highscores < 1:
        parser.error("--max-highscores must be at least 1")
    return args


def load_context(args: argparse.Namespace) -> GameContext:
    with args.words:
        return build_context(
            key_file=args.key_file,
            highscore_file=args.highscore_file,
            word_stream=args.words,
            max_highscores=args.max_highscores,
        )


def main(argv: list[str] | None = None) -> int:
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1

    args = parse_args(settings, argv)
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    try:
        context = load_context(args)
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1
    logger.info("Serving %d words on %s:%d", len(context.words), args.host, args.port)

    import uvicorn

    from .api import create_app

    uvicorn.run(create_app(context), host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
