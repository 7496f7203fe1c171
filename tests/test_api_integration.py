import os
import sqlite3
import unittest

from fastapi.testclient import TestClient
import sys

sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from client import WorkoutClient
from errors import TransportError
from models import ExerciseIn, PerformedSet, SessionIn, SessionItem, WorkoutItem, WorkoutTemplateIn
from config import APP_VERSION
from rest_api import WorkoutAPI


class APIIntegrationDBTest(unittest.TestCase):
    def setUp(self) -> None:
        self.db_path = "test_integration.db"
        if os.path.exists(self.db_path):
            os.remove(self.db_path)
        self.api = WorkoutAPI(db_path=self.db_path)
        self.http = TestClient(self.api.app)
        self.client = WorkoutClient("http://testserver", session=self.http)

    def tearDown(self) -> None:
        if os.path.exists(self.db_path):
            os.remove(self.db_path)

    def _count_rows(self, table: str) -> int:
        conn = sqlite3.connect(self.db_path)
        cur = conn.cursor()
        cur.execute(f"SELECT COUNT(*) FROM {table};")
        count = cur.fetchone()[0]
        conn.close()
        return count

    def test_health(self) -> None:
        resp = self.http.get("/health")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"status": "ok"})
        self.assertEqual(self.api.app.version, APP_VERSION)

    def test_reopening_database_keeps_rows(self) -> None:
        self.client.create_exercise(ExerciseIn(name="Squat"))
        reopened = WorkoutAPI(db_path=self.db_path)
        client = WorkoutClient("http://testserver", session=TestClient(reopened.app))
        self.assertEqual([e.name for e in client.list_exercises()], ["Squat"])
        self.assertEqual(self._count_rows("exercises"), 1)

    def test_added_exercise_is_listed(self) -> None:
        self.client.create_exercise(ExerciseIn(name="Squat"))
        exercises = self.client.list_exercises()
        squat = [e for e in exercises if e.name == "Squat"]
        self.assertEqual(len(squat), 1)
        self.assertIsInstance(squat[0].id, int)
        self.assertIsNone(squat[0].equipment)

    def test_template_persists_items_in_order(self) -> None:
        created = self.client.create_workout(
            WorkoutTemplateIn(
                title="Push",
                items=(
                    WorkoutItem(exercise_name="Bench", sets=3, reps=10, rest_seconds=90),
                    WorkoutItem(exercise_name="Dips", sets=3, reps=12, rest_seconds=60),
                    WorkoutItem(exercise_name="Fly", sets=2, reps=15, rest_seconds=45),
                ),
            )
        )
        self.assertEqual(self._count_rows("workout_items"), 3)
        listed = self.client.list_workouts()
        self.assertEqual(listed, [created])
        self.assertEqual([i.exercise_name for i in listed[0].items], ["Bench", "Dips", "Fly"])

    def test_template_without_items_is_rejected(self) -> None:
        with self.assertRaises(TransportError) as ctx:
            self.client.create_workout(WorkoutTemplateIn(title="Empty"))
        self.assertEqual(ctx.exception.status_code, 422)
        self.assertEqual(self._count_rows("workouts"), 0)

    def test_session_round_trip_by_date(self) -> None:
        self.client.create_session(
            SessionIn(
                date_str="2024-06-01",
                workout_title="Push",
                items=(
                    SessionItem(
                        exercise_name="Bench",
                        target_sets=3,
                        target_reps=10,
                        performed_sets=(PerformedSet(set_number=1, weight=60, reps=10),),
                    ),
                ),
            )
        )
        self.client.create_session(SessionIn(date_str="2024-06-02", workout_title="Pull"))
        sessions = self.client.list_sessions("2024-06-01")
        self.assertEqual(len(sessions), 1)
        first = sessions[0].items[0].performed_sets[0]
        self.assertEqual((first.weight, first.reps), (60, 10))
        self.assertIsNone(first.rpe)
        self.assertEqual(len(self.client.list_sessions()), 2)

    def test_invalid_body_is_fault(self) -> None:
        resp = self.http.post("/api/exercises", json={"name": ""})
        self.assertEqual(resp.status_code, 422)
        resp = self.http.post(
            "/api/sessions", json={"date_str": "not-a-date", "workout_title": "x"}
        )
        self.assertEqual(resp.status_code, 422)


if __name__ == "__main__":
    unittest.main()
