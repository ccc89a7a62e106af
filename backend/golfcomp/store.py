from __future__ import annotations

from asyncio import Lock
from dataclasses import dataclass, field
import logging
from typing import Awaitable, Callable, Optional

from .exceptions import RoundNotFound
from .schemas import Course, Round

logger = logging.getLogger(__name__)

PersistCallback = Callable[[Round], Awaitable[None]]


@dataclass
class RoundRecord:
    """A round together with the course snapshots it was started with."""

    round: Round
    courses: list[Course] = field(default_factory=list)


class RoundStore:
    """In-memory round store with async-safe access.

    Writes are last-write-wins. An optional ``persist`` callback forwards
    each saved round to durable storage; its failures are reported back to
    the caller but never roll back the in-memory state.
    """

    def __init__(self, persist: Optional[PersistCallback] = None) -> None:
        self._lock = Lock()
        self._store: dict[str, RoundRecord] = {}
        self.persist = persist

    async def get(self, round_id: str) -> RoundRecord:
        async with self._lock:
            record = self._store.get(round_id)
        if record is None:
            raise RoundNotFound(round_id)
        return record

    async def add(self, round_: Round, courses: list[Course]) -> Optional[str]:
        async with self._lock:
            self._store[round_.id] = RoundRecord(round=round_, courses=list(courses))
        return await self._persist(round_)

    async def save(self, round_: Round) -> Optional[str]:
        """Replace the stored round; returns a warning if persisting failed."""
        async with self._lock:
            record = self._store.get(round_.id)
            if record is None:
                raise RoundNotFound(round_.id)
            record.round = round_
        return await self._persist(round_)

    async def _persist(self, round_: Round) -> Optional[str]:
        if self.persist is None:
            return None
        try:
            await self.persist(round_)
        except Exception as exc:
            logger.warning("Persisting round %s failed: %s", round_.id, exc)
            return f"round saved locally but not persisted: {exc}"
        return None

    async def clear(self) -> None:
        async with self._lock:
            self._store.clear()


round_store = RoundStore()
