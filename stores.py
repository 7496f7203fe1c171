from __future__ import annotations

import asyncio
import concurrent.futures
import logging
from typing import Callable

from errors import Result, TransportError
from models import Exercise, Session, WorkoutTemplate

logger = logging.getLogger(__name__)


class EntityStores:
    """In-memory mirrors of the exercise, workout and session collections.

    Every refresh replaces each collection wholesale; nothing is merged with
    previously held entries.
    """

    COLLECTIONS = ("exercises", "workouts", "sessions")

    def __init__(self, client) -> None:
        self.client = client
        self.exercises: tuple[Exercise, ...] = ()
        self.workouts: tuple[WorkoutTemplate, ...] = ()
        self.sessions: tuple[Session, ...] = ()

    def _readers(self) -> dict[str, Callable[[], list]]:
        return {
            "exercises": self.client.list_exercises,
            "workouts": self.client.list_workouts,
            "sessions": self.client.list_sessions,
        }

    @staticmethod
    def _read(name: str, fetch: Callable[[], list]) -> tuple[list, Exception | None]:
        try:
            return fetch(), None
        except (TransportError, ValueError) as e:
            logger.warning("reading %s failed, using empty collection: %s", name, e)
            return [], e

    async def refresh_all_async(self) -> dict[str, Exception]:
        """Read all three collections concurrently.

        A failing read degrades its own collection to empty and never aborts
        the others. Returns the faults keyed by collection name.
        """
        readers = self._readers()
        results = await asyncio.gather(
            *(asyncio.to_thread(self._read, name, readers[name]) for name in self.COLLECTIONS)
        )
        faults: dict[str, Exception] = {}
        for name, (rows, error) in zip(self.COLLECTIONS, results):
            setattr(self, name, tuple(rows))
            if error is not None:
                faults[name] = error
        return faults

    def refresh_all(self) -> dict[str, Exception]:
        """Blocking form of :meth:`refresh_all_async`, usable inside a running loop."""
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(self.refresh_all_async())
        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as executor:
            return executor.submit(asyncio.run, self.refresh_all_async()).result()

    def filter_sessions(self, date_str: str) -> Result[tuple[Session, ...]]:
        """Replace the sessions store with the sessions logged on ``date_str``."""
        try:
            rows = self.client.list_sessions(date_str)
        except (TransportError, ValueError) as e:
            return Result.failure(e)
        self.sessions = tuple(rows)
        return Result.success(self.sessions)
