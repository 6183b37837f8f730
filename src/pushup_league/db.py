"""SQLite database layer for pushup-league."""

import json
import sqlite3
from datetime import datetime, timezone
from pathlib import Path

from pushup_league.models import UserState

DEFAULT_DB_PATH = Path.home() / ".pushup-league" / "data.db"


class Database:
    """SQLite database manager with WAL mode.

    Stores the serialized UserState and the set of locked days.
    """

    def __init__(self, db_path: Path | None = None) -> None:
        self.db_path = db_path or DEFAULT_DB_PATH
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(str(self.db_path))
        self.conn.row_factory = sqlite3.Row
        self.conn.execute("PRAGMA journal_mode=WAL")
        self.init_db()

    def init_db(self) -> None:
        """Create tables if they do not exist."""
        self.conn.executescript("""
            CREATE TABLE IF NOT EXISTS user_state (
                user_id TEXT PRIMARY KEY,
                data TEXT NOT NULL,
                updated_at TEXT NOT NULL
            );

            CREATE TABLE IF NOT EXISTS day_locks (
                date TEXT PRIMARY KEY,
                locked_at TEXT NOT NULL
            );
        """)
        self.conn.commit()

    def load_state(self) -> UserState | None:
        """Return the stored user, or None if nothing was saved yet."""
        row = self.conn.execute(
            "SELECT data FROM user_state ORDER BY updated_at DESC LIMIT 1"
        ).fetchone()
        if row is None:
            return None
        return UserState.from_dict(json.loads(row["data"]))

    def load_or_create_state(self) -> UserState:
        """Return the stored user, creating and saving a new one if needed."""
        state = self.load_state()
        if state is None:
            state = UserState.new()
            self.save_state(state)
        return state

    def save_state(self, state: UserState) -> None:
        """Insert or replace the serialized user state."""
        self.conn.execute(
            "INSERT INTO user_state (user_id, data, updated_at) VALUES (?, ?, ?) "
            "ON CONFLICT(user_id) DO UPDATE SET data = excluded.data, updated_at = excluded.updated_at",
            (
                state.user_id,
                json.dumps(state.to_dict()),
                datetime.now(tz=timezone.utc).isoformat(),
            ),
        )
        self.conn.commit()

    def reset(self) -> None:
        """Delete all stored progress and day locks."""
        self.conn.execute("DELETE FROM user_state")
        self.conn.execute("DELETE FROM day_locks")
        self.conn.commit()

    def lock_day(self, date: str, timestamp: str | None = None) -> None:
        """Lock a day. Re-locking keeps the original timestamp."""
        self.conn.execute(
            "INSERT OR IGNORE INTO day_locks (date, locked_at) VALUES (?, ?)",
            (date, timestamp or datetime.now(tz=timezone.utc).isoformat()),
        )
        self.conn.commit()

    def is_day_locked(self, date: str) -> bool:
        row = self.conn.execute(
            "SELECT 1 FROM day_locks WHERE date = ?", (date,)
        ).fetchone()
        return row is not None

    def get_locked_days(self) -> list[str]:
        """Return all locked dates, oldest first."""
        rows = self.conn.execute("SELECT date FROM day_locks ORDER BY date").fetchall()
        return [row["date"] for row in rows]

    def close(self) -> None:
        """Close the database connection."""
        self.conn.close()
