"""FastAPI endpoints for playing games and submitting highscores."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from . import engine, scoring
from .errors import GameNotWon, HangmanError
from .models import Game, HighscoreEntry
from .security import decode_game, encode_game
from .state import GameContext

logger = logging.getLogger(__name__)


class GuessRequest(BaseModel):
    game: str
    guess: str


class HighscoreRequest(BaseModel):
    game: str
    nick: str


class GameStateResponse(BaseModel):
    game: str
    word: str
    won: bool
    score: int
    turns: int


class HighscoreResponse(BaseModel):
    score: int
    nick: str


def serialize_state(game: Game, context: GameContext) -> GameStateResponse:
    return GameStateResponse(
        game=encode_game(game, context.public_key),
        word=engine.obfuscated_word(game),
        won=engine.is_won(game),
        score=scoring.score(game),
        turns=game.turns,
    )


def create_app(context: GameContext) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await context.leaderboard.start()
        try:
            yield
        finally:
            await context.leaderboard.close()

    app = FastAPI(title="Hangman API", version="1.0.0", lifespan=lifespan)
    app.state.context = context

    @app.exception_handler(HangmanError)
    async def handle_domain_error(request: Request, exc: HangmanError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.payload())

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": "Malformed request"})

    @app.exception_handler(Exception)
    async def handle_internal_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Exception while processing %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal Server Error"})

    def get_context() -> GameContext:
        return context

    @app.put("/api/game", response_model=GameStateResponse)
    def start_game(local_context: GameContext = Depends(get_context)) -> GameStateResponse:
        game = engine.new_game(engine.choose_word(local_context.words))
        return serialize_state(game, local_context)

    @app.post("/api/game", response_model=GameStateResponse)
    def make_guess(
        payload: GuessRequest,
        local_context: GameContext = Depends(get_context),
    ) -> GameStateResponse:
        game = decode_game(payload.game, local_context.private_key)
        game = engine.apply_guess(game, payload.guess)
        return serialize_state(game, local_context)

    @app.get("/api/highscore", response_model=list[HighscoreResponse])
    async def list_highscores(local_context: GameContext = Depends(get_context)) -> list[HighscoreResponse]:
        return [
            HighscoreResponse(score=entry.score, nick=entry.nick)
            for entry in local_context.leaderboard.read()
        ]

    @app.post("/api/highscore")
    async def submit_highscore(
        payload: HighscoreRequest,
        local_context: GameContext = Depends(get_context),
    ) -> dict:
        game = await run_in_threadpool(decode_game, payload.game, local_context.private_key)
        if not engine.is_won(game):
            raise GameNotWon()
        nick = engine.validate_nick(payload.nick)
        await local_context.leaderboard.add(HighscoreEntry(nick=nick, score=scoring.score(game)))
        return {}

    return app
