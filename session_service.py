from __future__ import annotations

import asyncio
import datetime
import logging
from typing import Callable, Optional

from errors import Result, TransportError, ValidationError
from models import Session, SessionIn, SessionItem
from session_editor import add_performed_set, update_performed_set

logger = logging.getLogger(__name__)


class SessionDraft:
    """Client-only session being logged before it is submitted."""

    def __init__(
        self,
        workout_title: str = "",
        items: tuple[SessionItem, ...] = (),
        date_str: Optional[str] = None,
        notes: str = "",
    ) -> None:
        self.date_str = date_str or datetime.date.today().isoformat()
        self.workout_title = workout_title
        self.notes = notes
        self.items = tuple(items)

    def add_set(self, item_index: int) -> None:
        self.items = add_performed_set(self.items, item_index)

    def update_set(self, item_index: int, set_index: int, field: str, value) -> None:
        self.items = update_performed_set(
            self.items, item_index, set_index, field, value
        )

    def to_session(self) -> SessionIn:
        return SessionIn(
            date_str=self.date_str,
            workout_title=self.workout_title,
            notes=self.notes or None,
            items=[item.model_dump() for item in self.items],
        )


class SessionPersister:
    """Submits a finished draft as one session and reloads the stores."""

    def __init__(
        self,
        client,
        stores,
        on_commit: Optional[Callable[[Session], None]] = None,
    ) -> None:
        self.client = client
        self.stores = stores
        self.on_commit = on_commit

    def _submit(self, draft: SessionDraft) -> Result[Session]:
        if not draft.workout_title or not draft.workout_title.strip():
            logger.debug("session submission blocked: empty title")
            return Result.failure(ValidationError("workout title is required"))
        try:
            payload = draft.to_session()
        except ValueError as e:
            return Result.failure(ValidationError(str(e)))
        try:
            return Result.success(self.client.create_session(payload))
        except TransportError as e:
            return Result.failure(e)

    def _finish(self, draft: SessionDraft, session: Session) -> Result[Session]:
        draft.notes = ""
        draft.items = ()
        if self.on_commit is not None:
            self.on_commit(session)
        return Result.success(session)

    def commit(self, draft: SessionDraft) -> Result[Session]:
        """Submit ``draft``; on success reload the stores, then reset the draft."""
        result = self._submit(draft)
        if not result.ok:
            return result
        self.stores.refresh_all()
        return self._finish(draft, result.value)

    async def commit_async(self, draft: SessionDraft) -> Result[Session]:
        result = await asyncio.to_thread(self._submit, draft)
        if not result.ok:
            return result
        await self.stores.refresh_all_async()
        return self._finish(draft, result.value)
