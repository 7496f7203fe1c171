import os
import sys

import pytest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from client import WorkoutClient
from errors import TransportError
from models import Exercise, Session, WorkoutTemplate
from stores import EntityStores


class FakeClient:
    def __init__(self, failing=()) -> None:
        self.failing = set(failing)
        self.session_filter = None

    def _check(self, name: str, path: str) -> None:
        if name in self.failing:
            raise TransportError("GET", path, 500)

    def list_exercises(self):
        self._check("exercises", "/api/exercises")
        return [Exercise(id=1, name="Squat")]

    def list_workouts(self):
        self._check("workouts", "/api/workouts")
        return [WorkoutTemplate(id=1, title="Legs")]

    def list_sessions(self, date_str=None):
        self._check("sessions", "/api/sessions")
        self.session_filter = date_str
        return [Session(id=3, date_str="2024-01-02", workout_title="Legs")]


def test_refresh_populates_all_collections():
    stores = EntityStores(FakeClient())
    assert stores.refresh_all() == {}
    assert [e.name for e in stores.exercises] == ["Squat"]
    assert [w.title for w in stores.workouts] == ["Legs"]
    assert [s.id for s in stores.sessions] == [3]


def test_failing_read_degrades_only_its_collection():
    stores = EntityStores(FakeClient())
    stores.refresh_all()
    stores.client = FakeClient(failing={"sessions"})
    faults = stores.refresh_all()
    assert list(faults) == ["sessions"]
    assert isinstance(faults["sessions"], TransportError)
    assert stores.sessions == ()
    assert [e.name for e in stores.exercises] == ["Squat"]
    assert len(stores.workouts) == 1


def test_refresh_replaces_contents():
    stores = EntityStores(FakeClient())
    stores.exercises = (Exercise(id=99, name="Stale"),)
    stores.refresh_all()
    assert [e.id for e in stores.exercises] == [1]


@pytest.mark.asyncio
async def test_async_refresh_with_everything_failing():
    stores = EntityStores(FakeClient(failing={"exercises", "workouts", "sessions"}))
    faults = await stores.refresh_all_async()
    assert set(faults) == {"exercises", "workouts", "sessions"}
    assert stores.exercises == stores.workouts == stores.sessions == ()


def test_filter_sessions():
    client = FakeClient()
    stores = EntityStores(client)
    result = stores.filter_sessions("2024-01-02")
    assert result.ok
    assert client.session_filter == "2024-01-02"
    assert len(stores.sessions) == 1


def test_filter_sessions_failure_keeps_store():
    stores = EntityStores(FakeClient())
    stores.refresh_all()
    stores.client = FakeClient(failing={"sessions"})
    result = stores.filter_sessions("2024-01-02")
    assert not result.ok
    assert len(stores.sessions) == 1


class RoutedResponse:
    def __init__(self, data) -> None:
        self.status_code = 200
        self._data = data

    def json(self):
        return self._data


class RoutedSession:
    def __init__(self, bodies) -> None:
        self.bodies = bodies

    def request(self, method, url, params=None, json=None, timeout=None):
        return RoutedResponse(self.bodies[url.rsplit("/", 1)[-1]])


def test_null_body_degrades_only_its_collection():
    session = RoutedSession(
        {
            "exercises": None,
            "workouts": [{"id": 1, "title": "Legs", "items": []}],
            "sessions": [],
        }
    )
    stores = EntityStores(WorkoutClient("http://api.local", session=session))
    faults = stores.refresh_all()
    assert list(faults) == ["exercises"]
    assert isinstance(faults["exercises"], TransportError)
    assert stores.exercises == ()
    assert [w.title for w in stores.workouts] == ["Legs"]


@pytest.mark.asyncio
async def test_blocking_refresh_inside_running_loop():
    stores = EntityStores(FakeClient(failing={"workouts"}))
    faults = stores.refresh_all()
    assert list(faults) == ["workouts"]
    assert [e.name for e in stores.exercises] == ["Squat"]
    assert [s.id for s in stores.sessions] == [3]
