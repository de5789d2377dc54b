"""
SessionStore - Persist work sessions in ~/.stitchmap/sessions.db.

Stores one row per work session:
- Pattern being worked
- Five-counter position
- Status and activity timestamps
"""

import logging
import os
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Optional

from stitchmap.schemas import Position, SessionStatus, WorkSession

logger = logging.getLogger(__name__)


DEFAULT_STITCHMAP_DIR = Path(os.getenv("STITCHMAP_HOME", Path.home() / ".stitchmap"))
DEFAULT_SESSIONS_DB = DEFAULT_STITCHMAP_DIR / "sessions.db"


class SessionNotFoundError(LookupError):
    """No work session with the requested id."""


class SessionStore:
    """
    Store work sessions in a SQLite database.

    Each method opens its own connection, so a store can be shared between
    Streamlit reruns and threads.
    """

    def __init__(self, db_path: Optional[Path] = None):
        """
        Initialize session store.

        Args:
            db_path: Path to sessions.db (default: ~/.stitchmap/sessions.db)
        """
        self.db_path = Path(db_path) if db_path else DEFAULT_SESSIONS_DB
        self._ensure_database()

    def _ensure_database(self):
        """Create database and tables if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(str(self.db_path))
        try:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS work_sessions (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    pattern_name TEXT NOT NULL,
                    current_group_index INTEGER NOT NULL DEFAULT 0,
                    current_group_repeat INTEGER NOT NULL DEFAULT 0,
                    current_entry_index INTEGER NOT NULL DEFAULT 0,
                    current_entry_repeat INTEGER NOT NULL DEFAULT 0,
                    current_unit_count INTEGER NOT NULL DEFAULT 0,
                    status TEXT NOT NULL DEFAULT 'active',
                    started_at TEXT NOT NULL,
                    last_activity_at TEXT NOT NULL,
                    completed_at TEXT
                );

                CREATE INDEX IF NOT EXISTS idx_work_sessions_pattern
                ON work_sessions(pattern_name);

                CREATE INDEX IF NOT EXISTS idx_work_sessions_status
                ON work_sessions(status);
            """)
            conn.commit()
        finally:
            conn.close()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    @staticmethod
    def _row_to_session(row: sqlite3.Row) -> WorkSession:
        return WorkSession(
            id=row["id"],
            pattern_name=row["pattern_name"],
            position=Position(
                group_index=row["current_group_index"],
                group_repeat=row["current_group_repeat"],
                entry_index=row["current_entry_index"],
                entry_repeat=row["current_entry_repeat"],
                unit_count=row["current_unit_count"],
            ),
            status=SessionStatus(row["status"]),
            started_at=datetime.fromisoformat(row["started_at"]),
            last_activity_at=datetime.fromisoformat(row["last_activity_at"]),
            completed_at=datetime.fromisoformat(row["completed_at"]) if row["completed_at"] else None,
        )

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def create(self, session: WorkSession) -> WorkSession:
        """Insert a new session and set its id."""
        conn = self._get_connection()
        try:
            pos = session.position
            cursor = conn.execute(
                """INSERT INTO work_sessions (
                       pattern_name,
                       current_group_index, current_group_repeat,
                       current_entry_index, current_entry_repeat, current_unit_count,
                       status, started_at, last_activity_at, completed_at)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                (
                    session.pattern_name,
                    *pos.as_tuple(),
                    session.status.value,
                    session.started_at.isoformat(),
                    session.last_activity_at.isoformat(),
                    session.completed_at.isoformat() if session.completed_at else None,
                )
            )
            conn.commit()
            session.id = cursor.lastrowid
        finally:
            conn.close()
        logger.debug(f"Created session {session.id} for pattern '{session.pattern_name}'")
        return session

    def update(self, session: WorkSession):
        """Write position, status and timestamps back to the session's row."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """UPDATE work_sessions SET
                       current_group_index = ?,
                       current_group_repeat = ?,
                       current_entry_index = ?,
                       current_entry_repeat = ?,
                       current_unit_count = ?,
                       status = ?,
                       last_activity_at = ?,
                       completed_at = ?
                   WHERE id = ?""",
                (
                    *session.position.as_tuple(),
                    session.status.value,
                    session.last_activity_at.isoformat(),
                    session.completed_at.isoformat() if session.completed_at else None,
                    session.id,
                )
            )
            conn.commit()
            if cursor.rowcount == 0:
                raise SessionNotFoundError(f"Work session not found: {session.id}")
        finally:
            conn.close()

    def delete(self, session_id: int):
        """Delete a session. Deleting a missing session is a no-op."""
        conn = self._get_connection()
        try:
            conn.execute("DELETE FROM work_sessions WHERE id = ?", (session_id,))
            conn.commit()
        finally:
            conn.close()

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get(self, session_id: int) -> WorkSession:
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                "SELECT * FROM work_sessions WHERE id = ?", (session_id,)
            )
            row = cursor.fetchone()
            if not row:
                raise SessionNotFoundError(f"Work session not found: {session_id}")
            return self._row_to_session(row)
        finally:
            conn.close()

    def list_active(self) -> list[WorkSession]:
        """Active and paused sessions, most recently worked first."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """SELECT * FROM work_sessions
                   WHERE status IN ('active', 'paused')
                   ORDER BY last_activity_at DESC, id DESC"""
            )
            return [self._row_to_session(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def list_completed(self, limit: int = 20, offset: int = 0) -> list[WorkSession]:
        """Completed sessions, most recently finished first."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """SELECT * FROM work_sessions
                   WHERE status = 'completed'
                   ORDER BY completed_at DESC, id DESC
                   LIMIT ? OFFSET ?""",
                (limit, offset)
            )
            return [self._row_to_session(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def count_completed(self) -> int:
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                "SELECT COUNT(*) AS n FROM work_sessions WHERE status = 'completed'"
            )
            return cursor.fetchone()["n"]
        finally:
            conn.close()
