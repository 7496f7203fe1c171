from __future__ import annotations

import logging
from typing import Optional

from client import WorkoutClient
from errors import Result, TransportError, ValidationError
from models import Exercise, ExerciseIn, Session, SessionItem, WorkoutTemplate
from planner_service import TemplateComposer, project_template
from session_service import SessionDraft, SessionPersister
from settings_schema import SettingsSchema
from stores import EntityStores

logger = logging.getLogger(__name__)

TABS = ("plan", "log", "history", "library")


def format_performed_sets(item: SessionItem) -> str:
    """Render performed sets as ``reps@weight`` pairs for the history view."""
    if not item.performed_sets:
        return "—"
    parts = []
    for s in item.performed_sets:
        weight = f"@{s.weight:g}" if s.weight else ""
        parts.append(f"{s.reps}{weight}")
    return ", ".join(parts)


class ExerciseForm:
    """Pending input of the exercise library form."""

    def __init__(self) -> None:
        self.clear()

    def clear(self) -> None:
        self.name = ""
        self.muscle_group = ""
        self.equipment = ""
        self.notes = ""


class WorkoutTracker:
    """Application state of the tracker UI and the operations that change it.

    The view layer holds one instance and calls its methods; every write
    returns a ``Result`` so the view decides how to surface failures.
    """

    def __init__(
        self,
        client: Optional[WorkoutClient] = None,
        settings: Optional[SettingsSchema] = None,
    ) -> None:
        self.settings = settings or SettingsSchema()
        self.client = client or WorkoutClient(
            self.settings.backend_url, timeout=self.settings.request_timeout
        )
        self.tab = "plan"
        self.stores = EntityStores(self.client)
        self.exercise_form = ExerciseForm()
        self.composer = TemplateComposer(
            self.client,
            self.settings.default_sets,
            self.settings.default_reps,
            self.settings.default_rest_seconds,
        )
        self.session = SessionDraft()
        self.persister = SessionPersister(
            self.client, self.stores, on_commit=self._session_committed
        )

    def set_tab(self, tab: str) -> None:
        if tab not in TABS:
            raise ValueError(f"unknown tab {tab!r}")
        self.tab = tab

    def refresh(self) -> dict[str, Exception]:
        return self.stores.refresh_all()

    def add_exercise(self) -> Result[Exercise]:
        form = self.exercise_form
        if not form.name.strip():
            logger.debug("exercise creation blocked: empty name")
            return Result.failure(ValidationError("name is required"))
        exercise = ExerciseIn(
            name=form.name,
            muscle_group=form.muscle_group,
            equipment=form.equipment,
            notes=form.notes,
        )
        try:
            created = self.client.create_exercise(exercise)
        except TransportError as e:
            return Result.failure(e)
        form.clear()
        self.refresh()
        return Result.success(created)

    def add_workout_item(self) -> bool:
        return self.composer.add_item()

    def remove_workout_item(self, index: int) -> None:
        self.composer.remove_item(index)

    def create_workout(self) -> Result[WorkoutTemplate]:
        result = self.composer.submit()
        if result.ok:
            self.refresh()
        return result

    def load_template(self, template: WorkoutTemplate) -> None:
        """Start logging ``template``, discarding any unsaved session draft."""
        self.session = project_template(template, date_str=self.session.date_str)
        self.tab = "log"

    def add_performed_set(self, item_index: int) -> None:
        self.session.add_set(item_index)

    def update_performed_set(
        self, item_index: int, set_index: int, field: str, value
    ) -> None:
        self.session.update_set(item_index, set_index, field, value)

    def log_session(self) -> Result[Session]:
        return self.persister.commit(self.session)

    def filter_history(self, date_str: Optional[str] = None) -> Result:
        return self.stores.filter_sessions(date_str or self.session.date_str)

    def _session_committed(self, session: Session) -> None:
        self.tab = "history"
