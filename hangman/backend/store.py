"""Leaderboard store: bounded in-memory ranking persisted to a JSON file."""

from __future__ import annotations

import asyncio
import json
import logging
import os
from pathlib import Path

from .models import HighscoreEntry

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 5


class LeaderboardLoadError(RuntimeError):
    """Raised when an existing highscore file cannot be read or parsed."""


class Leaderboard:
    """Ranked highscores, best first, holding at most ``max_entries`` entries.

    Mutations only happen in memory; a single background task writes the
    whole ranking to ``path`` whenever it changed. The file is never written
    by two writers at once and ``add`` never waits on disk.
    """

    def __init__(self, path: str | os.PathLike[str], max_entries: int = DEFAULT_MAX_ENTRIES) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._path = Path(path)
        self._max = max_entries
        self._entries: list[HighscoreEntry] = []
        self._lock = asyncio.Lock()
        self._write_lock = asyncio.Lock()
        self._ready = asyncio.Event()
        self._dirty = asyncio.Event()
        self._sync_task: asyncio.Task[None] | None = None
        self._inflight: asyncio.Future[bool] | None = None

    @property
    def path(self) -> Path:
        return self._path

    @property
    def max_entries(self) -> int:
        return self._max

    @property
    def ready(self) -> bool:
        return self._ready.is_set()

    async def start(self) -> None:
        """Load the ranking from disk and start the background sync task."""
        entries = await asyncio.to_thread(self._read_file)
        # Stable sort keeps the file order among equal scores.
        entries.sort(key=lambda entry: entry.score, reverse=True)
        self._entries = entries[: self._max]
        self._ready.set()
        logger.info("Loaded %d highscores from %s", len(self._entries), self._path)
        self._sync_task = asyncio.create_task(self._sync_forever(), name="leaderboard-sync")

    async def close(self) -> None:
        """Stop the sync task and write out a change that is still pending."""
        if self._sync_task is not None:
            self._sync_task.cancel()
            try:
                await self._sync_task
            except asyncio.CancelledError:
                pass
            self._sync_task = None
        if self._inflight is not None:
            if not await self._inflight:
                self._dirty.set()
            self._inflight = None
        if self._dirty.is_set():
            self._dirty.clear()
            await self.flush()

    def read(self) -> list[HighscoreEntry]:
        return list(self._entries)

    async def add(self, entry: HighscoreEntry) -> int | None:
        """Insert ``entry`` and return its rank, or ``None`` if it did not make the cut."""
        await self._ready.wait()
        async with self._lock:
            idx = len(self._entries)
            while idx > 0 and self._entries[idx - 1].score < entry.score:
                idx -= 1
            if idx >= self._max:
                logger.debug("Highscore %s=%d below the top %d", entry.nick, entry.score, self._max)
                return None
            self._entries.insert(idx, entry)
            del self._entries[self._max :]
            self._dirty.set()
            return idx

    async def flush(self) -> bool:
        """Write the current ranking to disk; returns whether the write succeeded."""
        async with self._write_lock:
            payload = json.dumps([entry.to_dict() for entry in self._entries])
            try:
                await asyncio.to_thread(self._write_file, payload)
            except OSError:
                logger.exception("Failed to write highscores to %s", self._path)
                return False
            return True

    async def _sync_forever(self) -> None:
        while True:
            await self._dirty.wait()
            # Clear before writing so changes made during the write trigger another cycle.
            self._dirty.clear()
            # Shielded so that close() can wait for the write instead of abandoning it.
            self._inflight = asyncio.ensure_future(self.flush())
            await asyncio.shield(self._inflight)

    def _read_file(self) -> list[HighscoreEntry]:
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as exc:
            raise LeaderboardLoadError(f"Could not read {self._path}: {exc}") from exc
        try:
            raw = json.loads(text)
            if not isinstance(raw, list):
                raise ValueError("highscore file must contain a JSON array")
            return [HighscoreEntry.from_dict(item) for item in raw]
        except ValueError as exc:
            raise LeaderboardLoadError(f"Could not parse {self._path}: {exc}") from exc

    def _write_file(self, payload: str) -> None:
        tmp_path = self._path.with_name(f".{self._path.name}.tmp")
        try:
            tmp_path.write_text(payload, encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise
