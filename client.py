import logging
from typing import Optional

import requests

from errors import TransportError
from models import (
    Exercise,
    ExerciseIn,
    Session,
    SessionIn,
    WorkoutTemplate,
    WorkoutTemplateIn,
)

logger = logging.getLogger(__name__)


class WorkoutClient:
    """REST client for the exercise, workout and session collections.

    ``session`` may be any object with a ``requests``-style ``request`` method,
    which lets tests plug in a FastAPI ``TestClient``.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 10.0,
        session=None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.http = session if session is not None else requests.Session()

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[dict] = None,
        body: Optional[dict] = None,
    ):
        try:
            resp = self.http.request(
                method,
                f"{self.base_url}{path}",
                params=params,
                json=body,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise TransportError(method, path) from e
        if not 200 <= resp.status_code < 300:
            logger.warning("%s %s returned %s", method, path, resp.status_code)
            raise TransportError(method, path, resp.status_code)
        return resp.json()

    def get(self, path: str, params: Optional[dict] = None):
        return self._request("GET", path, params=params)

    def post(self, path: str, body: dict):
        return self._request("POST", path, body=body)

    def _get_list(self, path: str, params: Optional[dict] = None) -> list:
        data = self.get(path, params)
        if not isinstance(data, list):
            logger.warning("GET %s returned %s, expected a list", path, type(data).__name__)
            raise TransportError("GET", path)
        return data

    def list_exercises(self) -> list[Exercise]:
        return [Exercise.model_validate(e) for e in self._get_list("/api/exercises")]

    def create_exercise(self, exercise: ExerciseIn) -> Exercise:
        data = self.post("/api/exercises", exercise.to_payload())
        logger.info("created exercise %s", data.get("id"))
        return Exercise.model_validate(data)

    def list_workouts(self) -> list[WorkoutTemplate]:
        return [WorkoutTemplate.model_validate(w) for w in self._get_list("/api/workouts")]

    def create_workout(self, template: WorkoutTemplateIn) -> WorkoutTemplate:
        data = self.post("/api/workouts", template.to_payload())
        logger.info("created workout template %s", data.get("id"))
        return WorkoutTemplate.model_validate(data)

    def list_sessions(self, date_str: Optional[str] = None) -> list[Session]:
        params = {"date_str": date_str} if date_str else None
        return [Session.model_validate(s) for s in self._get_list("/api/sessions", params)]

    def create_session(self, session: SessionIn) -> Session:
        data = self.post("/api/sessions", session.to_payload())
        logger.info("created session %s", data.get("id"))
        return Session.model_validate(data)
