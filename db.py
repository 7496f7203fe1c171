import sqlite3
from contextlib import contextmanager
from typing import Iterable, List, Optional, Tuple


class Database:
    """Provides SQLite connection management and schema initialization."""

    _TABLE_DEFINITIONS = {
        "exercises": """CREATE TABLE exercises (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                muscle_group TEXT,
                equipment TEXT,
                notes TEXT
            );""",
        "workouts": """CREATE TABLE workouts (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                title TEXT NOT NULL,
                description TEXT
            );""",
        "workout_items": """CREATE TABLE workout_items (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                workout_id INTEGER NOT NULL,
                position INTEGER NOT NULL,
                exercise_name TEXT NOT NULL,
                sets INTEGER NOT NULL,
                reps INTEGER NOT NULL,
                rest_seconds INTEGER NOT NULL DEFAULT 0,
                FOREIGN KEY(workout_id) REFERENCES workouts(id) ON DELETE CASCADE
            );""",
        "sessions": """CREATE TABLE sessions (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                date_str TEXT NOT NULL,
                workout_title TEXT NOT NULL,
                notes TEXT
            );""",
        "session_items": """CREATE TABLE session_items (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                session_id INTEGER NOT NULL,
                position INTEGER NOT NULL,
                exercise_name TEXT NOT NULL,
                target_sets INTEGER,
                target_reps INTEGER,
                FOREIGN KEY(session_id) REFERENCES sessions(id) ON DELETE CASCADE
            );""",
        "performed_sets": """CREATE TABLE performed_sets (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                session_item_id INTEGER NOT NULL,
                set_number INTEGER NOT NULL,
                weight REAL NOT NULL DEFAULT 0,
                reps INTEGER NOT NULL,
                rpe REAL,
                FOREIGN KEY(session_item_id) REFERENCES session_items(id) ON DELETE CASCADE
            );""",
    }

    def __init__(self, db_path: str = "workout.db") -> None:
        self._db_path = db_path
        self._ensure_schema()

    @contextmanager
    def _connection(self):
        connection = sqlite3.connect(self._db_path)
        try:
            yield connection
            connection.commit()
        finally:
            connection.close()

    def _ensure_schema(self) -> None:
        with self._connection() as conn:
            for table, sql in self._TABLE_DEFINITIONS.items():
                self._ensure_table(conn, table, sql)

    def _ensure_table(self, conn: sqlite3.Connection, table: str, sql: str) -> None:
        """Create ``table`` when it is missing; existing tables are left as they are."""
        cur = conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name=?;", (table,)
        )
        if cur.fetchone() is None:
            conn.execute(sql)


class BaseRepository(Database):
    """Base repository providing helper methods."""

    def execute(self, query: str, params: Tuple = ()) -> int:
        with self._connection() as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            return cursor.lastrowid

    def fetch_all(self, query: str, params: Tuple = ()) -> List[Tuple]:
        with self._connection() as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            return cursor.fetchall()


class ExerciseRepository(BaseRepository):
    """Repository for the exercise library."""

    def add(
        self,
        name: str,
        muscle_group: Optional[str] = None,
        equipment: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        return self.execute(
            "INSERT INTO exercises (name, muscle_group, equipment, notes) VALUES (?, ?, ?, ?);",
            (name, muscle_group, equipment, notes),
        )

    def fetch_all_exercises(self) -> list[tuple[int, str, str | None, str | None, str | None]]:
        return self.fetch_all(
            "SELECT id, name, muscle_group, equipment, notes FROM exercises ORDER BY id;"
        )

    def fetch_detail(self, exercise_id: int) -> tuple[int, str, str | None, str | None, str | None]:
        rows = self.fetch_all(
            "SELECT id, name, muscle_group, equipment, notes FROM exercises WHERE id = ?;",
            (exercise_id,),
        )
        if not rows:
            raise ValueError("exercise not found")
        return rows[0]


class WorkoutTemplateRepository(BaseRepository):
    """Repository for workout templates and their ordered items."""

    def create(
        self,
        title: str,
        description: Optional[str],
        items: Iterable[tuple[str, int, int, int]],
    ) -> int:
        """Insert a template and all of its items in one transaction."""
        with self._connection() as conn:
            cur = conn.execute(
                "INSERT INTO workouts (title, description) VALUES (?, ?);",
                (title, description),
            )
            workout_id = cur.lastrowid
            for position, (name, sets, reps, rest) in enumerate(items):
                conn.execute(
                    "INSERT INTO workout_items (workout_id, position, exercise_name, sets, reps, rest_seconds) "
                    "VALUES (?, ?, ?, ?, ?, ?);",
                    (workout_id, position, name, sets, reps, rest),
                )
        return workout_id

    def fetch_all_workouts(self) -> list[tuple[int, str, str | None]]:
        return self.fetch_all("SELECT id, title, description FROM workouts ORDER BY id;")

    def fetch_detail(self, workout_id: int) -> tuple[int, str, str | None]:
        rows = self.fetch_all(
            "SELECT id, title, description FROM workouts WHERE id = ?;",
            (workout_id,),
        )
        if not rows:
            raise ValueError("workout not found")
        return rows[0]

    def fetch_items(self, workout_id: int) -> list[tuple[str, int, int, int]]:
        return self.fetch_all(
            "SELECT exercise_name, sets, reps, rest_seconds FROM workout_items "
            "WHERE workout_id = ? ORDER BY position;",
            (workout_id,),
        )


class SessionRepository(BaseRepository):
    """Repository for logged sessions with their items and performed sets."""

    def create(
        self,
        date_str: str,
        workout_title: str,
        notes: Optional[str],
        items: Iterable[tuple[str, int | None, int | None, Iterable[tuple]]],
    ) -> int:
        """Insert a session with its whole item and set tree in one transaction.

        Each item is ``(exercise_name, target_sets, target_reps, sets)`` where
        ``sets`` holds ``(set_number, weight, reps, rpe)`` tuples.
        """
        with self._connection() as conn:
            cur = conn.execute(
                "INSERT INTO sessions (date_str, workout_title, notes) VALUES (?, ?, ?);",
                (date_str, workout_title, notes),
            )
            session_id = cur.lastrowid
            for position, (name, target_sets, target_reps, sets) in enumerate(items):
                cur = conn.execute(
                    "INSERT INTO session_items (session_id, position, exercise_name, target_sets, target_reps) "
                    "VALUES (?, ?, ?, ?, ?);",
                    (session_id, position, name, target_sets, target_reps),
                )
                item_id = cur.lastrowid
                for set_number, weight, reps, rpe in sets:
                    conn.execute(
                        "INSERT INTO performed_sets (session_item_id, set_number, weight, reps, rpe) "
                        "VALUES (?, ?, ?, ?, ?);",
                        (item_id, set_number, weight, reps, rpe),
                    )
        return session_id

    def fetch_all_sessions(
        self, date_str: Optional[str] = None
    ) -> list[tuple[int, str, str, str | None]]:
        query = "SELECT id, date_str, workout_title, notes FROM sessions"
        params: tuple = ()
        if date_str:
            query += " WHERE date_str = ?"
            params = (date_str,)
        query += " ORDER BY date_str DESC, id DESC;"
        return self.fetch_all(query, params)

    def fetch_detail(self, session_id: int) -> tuple[int, str, str, str | None]:
        rows = self.fetch_all(
            "SELECT id, date_str, workout_title, notes FROM sessions WHERE id = ?;",
            (session_id,),
        )
        if not rows:
            raise ValueError("session not found")
        return rows[0]

    def fetch_items(self, session_id: int) -> list[tuple[int, str, int | None, int | None]]:
        return self.fetch_all(
            "SELECT id, exercise_name, target_sets, target_reps FROM session_items "
            "WHERE session_id = ? ORDER BY position;",
            (session_id,),
        )

    def fetch_sets(self, session_item_id: int) -> list[tuple[int, float, int, float | None]]:
        return self.fetch_all(
            "SELECT set_number, weight, reps, rpe FROM performed_sets "
            "WHERE session_item_id = ? ORDER BY id;",
            (session_item_id,),
        )
