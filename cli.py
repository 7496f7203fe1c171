import argparse
import datetime
import json
import logging
import time

import requests

from client import WorkoutClient
from config import load_settings
from models import ExerciseIn, SessionIn, WorkoutItem, WorkoutTemplateIn
from planner_service import project_template
from session_editor import add_performed_set, update_performed_set


def print_collection(rows) -> None:
    for row in rows:
        print(json.dumps(row.to_payload(), ensure_ascii=False))


def demo_data(client: WorkoutClient) -> None:
    """Populate the backend with a demo template and session if it is empty."""
    if client.list_workouts():
        print("Backend already contains workouts")
        return
    for name, group, equipment in (
        ("Bench Press", "Chest", "Barbell"),
        ("Overhead Press", "Shoulders", "Barbell"),
    ):
        client.create_exercise(
            ExerciseIn(name=name, muscle_group=group, equipment=equipment)
        )
    template = client.create_workout(
        WorkoutTemplateIn(
            title="Push Day",
            description="Chest and shoulders",
            items=(
                WorkoutItem(exercise_name="Bench Press", sets=3, reps=5, rest_seconds=180),
                WorkoutItem(exercise_name="Overhead Press", sets=3, reps=8, rest_seconds=120),
            ),
        )
    )
    draft = project_template(template)
    items = draft.items
    for weight in (100.0, 105.0):
        items = add_performed_set(items, 0)
        items = update_performed_set(items, 0, len(items[0].performed_sets) - 1, "weight", weight)
    client.create_session(
        SessionIn(
            date_str=datetime.date.today().isoformat(),
            workout_title=draft.workout_title,
            notes="Demo session",
            items=items,
        )
    )
    print("Demo data inserted")


def benchmark(url: str, runs: int = 10) -> None:
    times: list[float] = []
    for _ in range(runs):
        t0 = time.time()
        requests.get(f"{url}/health", timeout=5)
        times.append(time.time() - t0)
    avg = sum(times) / len(times)
    print(f"Average /health response time over {runs} runs: {avg:.4f}s")


def serve(db_path: str, host: str, port: int) -> None:
    import uvicorn

    from rest_api import create_app

    uvicorn.run(create_app(db_path), host=host, port=port)


def main() -> None:
    parser = argparse.ArgumentParser(description="Workout tracker utility commands")
    parser.add_argument("--url", default=None, help="backend base URL")
    parser.add_argument("--yaml", default=None, help="settings file")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="cmd", required=True)

    srv = sub.add_parser("serve")
    srv.add_argument("--db", default="workout.db")
    srv.add_argument("--host", default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)

    sub.add_parser("exercises")
    sub.add_parser("workouts")

    sess = sub.add_parser("sessions")
    sess.add_argument("--date", default=None)

    add = sub.add_parser("add-exercise")
    add.add_argument("name")
    add.add_argument("--muscle-group", default=None)
    add.add_argument("--equipment", default=None)
    add.add_argument("--notes", default=None)

    sub.add_parser("demo")

    bench = sub.add_parser("benchmark")
    bench.add_argument("--runs", type=int, default=10)

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = load_settings(args.yaml)
    url = (args.url or settings.backend_url).rstrip("/")
    client = WorkoutClient(url, timeout=settings.request_timeout)

    if args.cmd == "serve":
        serve(args.db, args.host, args.port)
    elif args.cmd == "exercises":
        print_collection(client.list_exercises())
    elif args.cmd == "workouts":
        print_collection(client.list_workouts())
    elif args.cmd == "sessions":
        print_collection(client.list_sessions(args.date))
    elif args.cmd == "add-exercise":
        created = client.create_exercise(
            ExerciseIn(
                name=args.name,
                muscle_group=args.muscle_group,
                equipment=args.equipment,
                notes=args.notes,
            )
        )
        print(f"Created exercise {created.id}")
    elif args.cmd == "demo":
        demo_data(client)
    elif args.cmd == "benchmark":
        benchmark(url, args.runs)


if __name__ == "__main__":
    main()
