from __future__ import annotations

import logging
from typing import Optional, Sequence

from errors import Result, TransportError, ValidationError
from models import SessionItem, WorkoutItem, WorkoutTemplate, WorkoutTemplateIn
from session_service import SessionDraft

logger = logging.getLogger(__name__)


def add_workout_item(
    draft_items: Sequence[WorkoutItem],
    exercise_name: str,
    sets: int,
    reps: int,
    rest_seconds: int,
) -> tuple[WorkoutItem, ...]:
    """Return ``draft_items`` with a new item appended.

    A blank ``exercise_name`` or a non-positive or non-numeric count leaves
    the draft unchanged.
    """
    if not exercise_name or not exercise_name.strip():
        return tuple(draft_items)
    try:
        item = WorkoutItem(
            exercise_name=exercise_name,
            sets=int(sets),
            reps=int(reps),
            rest_seconds=int(rest_seconds),
        )
    except (TypeError, ValueError) as e:
        logger.debug("workout item blocked: %s", e)
        return tuple(draft_items)
    return (*draft_items, item)


def remove_workout_item(
    draft_items: Sequence[WorkoutItem], index: int
) -> tuple[WorkoutItem, ...]:
    if not 0 <= index < len(draft_items):
        return tuple(draft_items)
    return tuple(it for i, it in enumerate(draft_items) if i != index)


def submit_template(
    client,
    title: str,
    description: Optional[str],
    draft_items: Sequence[WorkoutItem],
) -> Result[WorkoutTemplate]:
    """Persist a template with its full item list in a single create call."""
    if not title or not title.strip():
        logger.debug("template submission blocked: empty title")
        return Result.failure(ValidationError("title is required"))
    if not draft_items:
        logger.debug("template submission blocked: no items")
        return Result.failure(ValidationError("at least one item is required"))
    template = WorkoutTemplateIn(
        title=title, description=description, items=tuple(draft_items)
    )
    try:
        return Result.success(client.create_workout(template))
    except TransportError as e:
        return Result.failure(e)


def project_template(
    template: WorkoutTemplate, date_str: Optional[str] = None
) -> SessionDraft:
    """Build a fresh loggable session from ``template``.

    Items map one to one in order; targets come from the template's sets and
    reps and no sets are performed yet. The template is not modified.
    """
    items = tuple(
        SessionItem(
            exercise_name=it.exercise_name,
            target_sets=it.sets,
            target_reps=it.reps,
            performed_sets=(),
        )
        for it in template.items
    )
    return SessionDraft(workout_title=template.title, items=items, date_str=date_str)


class TemplateComposer:
    """Holds the workout template being drafted in the planner."""

    def __init__(
        self,
        client,
        default_sets: int = 3,
        default_reps: int = 10,
        default_rest_seconds: int = 90,
    ) -> None:
        self.client = client
        self.title = ""
        self.description = ""
        self.items: tuple[WorkoutItem, ...] = ()
        self.exercise_name = ""
        self.sets = default_sets
        self.reps = default_reps
        self.rest_seconds = default_rest_seconds

    def add_item(self) -> bool:
        """Append the pending item; keeps sets, reps and rest for the next one."""
        items = add_workout_item(
            self.items, self.exercise_name, self.sets, self.reps, self.rest_seconds
        )
        if len(items) == len(self.items):
            return False
        self.items = items
        self.exercise_name = ""
        return True

    def remove_item(self, index: int) -> None:
        self.items = remove_workout_item(self.items, index)

    def clear(self) -> None:
        self.title = ""
        self.description = ""
        self.items = ()

    def submit(self) -> Result[WorkoutTemplate]:
        result = submit_template(self.client, self.title, self.description, self.items)
        if result.ok:
            self.clear()
        return result
