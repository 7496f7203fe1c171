import logging
import os
from typing import List, Optional

from fastapi import APIRouter, FastAPI, HTTPException

from config import APP_VERSION
from db import ExerciseRepository, SessionRepository, WorkoutTemplateRepository
from models import (
    Exercise,
    ExerciseIn,
    PerformedSet,
    Session,
    SessionIn,
    SessionItem,
    WorkoutItem,
    WorkoutTemplate,
    WorkoutTemplateIn,
)

logger = logging.getLogger(__name__)


class WorkoutAPI:
    """Reference REST backend for the exercise, workout and session collections."""

    def __init__(self, db_path: str = "workout.db") -> None:
        self.db_path = db_path
        self.exercises = ExerciseRepository(db_path)
        self.workouts = WorkoutTemplateRepository(db_path)
        self.sessions = SessionRepository(db_path)
        self.app = FastAPI(
            title="Workout Tracker API",
            description="REST API for exercises, workout templates and logged sessions",
            version=APP_VERSION,
        )
        self._setup_routes()

    def _exercise(self, row: tuple) -> Exercise:
        eid, name, group, equipment, notes = row
        return Exercise(
            id=eid, name=name, muscle_group=group, equipment=equipment, notes=notes
        )

    def _workout(self, row: tuple) -> WorkoutTemplate:
        wid, title, description = row
        items = [
            WorkoutItem(exercise_name=n, sets=s, reps=r, rest_seconds=rest)
            for n, s, r, rest in self.workouts.fetch_items(wid)
        ]
        return WorkoutTemplate(
            id=wid, title=title, description=description, items=tuple(items)
        )

    def _session(self, row: tuple) -> Session:
        sid, date_str, title, notes = row
        items = []
        for item_id, name, target_sets, target_reps in self.sessions.fetch_items(sid):
            sets = tuple(
                PerformedSet(set_number=n, weight=w, reps=r, rpe=rpe)
                for n, w, r, rpe in self.sessions.fetch_sets(item_id)
            )
            items.append(
                SessionItem(
                    exercise_name=name,
                    target_sets=target_sets,
                    target_reps=target_reps,
                    performed_sets=sets,
                )
            )
        return Session(
            id=sid,
            date_str=date_str,
            workout_title=title,
            notes=notes,
            items=tuple(items),
        )

    def _setup_routes(self) -> None:
        router = APIRouter(prefix="/api")

        @self.app.get(
            "/health",
            summary="Health check",
            description="Verify API and database connectivity.",
        )
        def health():
            """Return API and database connection status."""
            try:
                self.exercises.fetch_all_exercises()
                return {"status": "ok"}
            except Exception as e:  # pragma: no cover - connectivity failure
                raise HTTPException(status_code=500, detail=str(e))

        @router.get("/exercises", response_model=List[Exercise])
        def list_exercises():
            return [self._exercise(r) for r in self.exercises.fetch_all_exercises()]

        @router.post("/exercises", response_model=Exercise)
        def create_exercise(body: ExerciseIn):
            eid = self.exercises.add(
                body.name, body.muscle_group, body.equipment, body.notes
            )
            logger.info("exercise %s stored", eid)
            return self._exercise(self.exercises.fetch_detail(eid))

        @router.get("/workouts", response_model=List[WorkoutTemplate])
        def list_workouts():
            return [self._workout(r) for r in self.workouts.fetch_all_workouts()]

        @router.post("/workouts", response_model=WorkoutTemplate)
        def create_workout(body: WorkoutTemplateIn):
            if not body.items:
                raise HTTPException(status_code=422, detail="items must not be empty")
            wid = self.workouts.create(
                body.title,
                body.description,
                [(i.exercise_name, i.sets, i.reps, i.rest_seconds) for i in body.items],
            )
            logger.info("workout %s stored", wid)
            return self._workout(self.workouts.fetch_detail(wid))

        @router.get("/sessions", response_model=List[Session])
        def list_sessions(date_str: Optional[str] = None):
            return [
                self._session(r) for r in self.sessions.fetch_all_sessions(date_str)
            ]

        @router.post("/sessions", response_model=Session)
        def create_session(body: SessionIn):
            items = [
                (
                    it.exercise_name,
                    it.target_sets,
                    it.target_reps,
                    [(s.set_number, s.weight, s.reps, s.rpe) for s in it.performed_sets],
                )
                for it in body.items
            ]
            sid = self.sessions.create(
                body.date_str, body.workout_title, body.notes, items
            )
            logger.info("session %s stored", sid)
            return self._session(self.sessions.fetch_detail(sid))

        self.app.include_router(router)


def create_app(db_path: Optional[str] = None) -> FastAPI:
    return WorkoutAPI(db_path or os.environ.get("DB_PATH", "workout.db")).app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(create_app())
