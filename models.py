"""Data model shared by the client, the editing flow and the reference backend.

All models are frozen and hold their collections as tuples, so an edit always
produces a new object and older references stay valid snapshots.
"""

from __future__ import annotations

import datetime
from typing import Annotated, Optional, Tuple

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    field_validator,
)


def _require_text(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be empty")
    return value


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


RequiredText = Annotated[str, AfterValidator(_require_text)]
OptionalText = Annotated[Optional[str], BeforeValidator(_blank_to_none)]


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    def to_payload(self) -> dict:
        """Return a JSON-ready dict with unset optional fields omitted."""
        return self.model_dump(mode="json", exclude_none=True)


class ExerciseIn(FrozenModel):
    name: RequiredText
    muscle_group: OptionalText = None
    equipment: OptionalText = None
    notes: OptionalText = None


class Exercise(ExerciseIn):
    id: int


class WorkoutItem(FrozenModel):
    exercise_name: RequiredText
    sets: int = Field(gt=0)
    reps: int = Field(gt=0)
    rest_seconds: int = Field(default=0, ge=0)


class WorkoutTemplateIn(FrozenModel):
    title: RequiredText
    description: OptionalText = None
    items: Tuple[WorkoutItem, ...] = ()


class WorkoutTemplate(WorkoutTemplateIn):
    id: int


class PerformedSet(FrozenModel):
    set_number: int = Field(gt=0)
    weight: float = Field(default=0, ge=0)
    reps: int = Field(gt=0)
    rpe: Optional[float] = Field(default=None, ge=1, le=10)


class SessionItem(FrozenModel):
    exercise_name: str
    target_sets: Optional[int] = None
    target_reps: Optional[int] = None
    performed_sets: Tuple[PerformedSet, ...] = ()

    @field_validator("performed_sets", mode="before")
    @classmethod
    def none_to_empty(cls, value):
        return () if value is None else value


class SessionIn(FrozenModel):
    date_str: str = Field(default_factory=lambda: datetime.date.today().isoformat())
    workout_title: RequiredText
    notes: OptionalText = None
    items: Tuple[SessionItem, ...] = ()

    @field_validator("date_str")
    @classmethod
    def check_date(cls, value: str) -> str:
        datetime.date.fromisoformat(value)
        return value


class Session(SessionIn):
    id: int
