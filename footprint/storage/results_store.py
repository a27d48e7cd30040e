"""SQLite store for per-user scan summaries."""

from __future__ import annotations

import pathlib
import sqlite3
from datetime import UTC, datetime

from footprint.utils import logger

log = logger.create_logger("ResultsStore")


class ResultsStore:
    """Append-only summary rows keyed by user id.

    Each call opens and closes its own connection, so one store can
    be shared across worker threads.
    """

    def __init__(self, db_path: str | pathlib.Path) -> None:
        self._db_path = pathlib.Path(db_path)

    def _get_connection(self) -> sqlite3.Connection:
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(self._db_path))
        conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def init(self) -> None:
        """Create tables if they don't exist."""
        conn = self._get_connection()
        try:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS footprint_results (
                    id              INTEGER PRIMARY KEY AUTOINCREMENT,
                    user_id         TEXT NOT NULL,
                    score           INTEGER NOT NULL,
                    breach_count    INTEGER NOT NULL,
                    platforms_found TEXT NOT NULL,
                    summary         TEXT NOT NULL,
                    created_at      TEXT NOT NULL
                );

                CREATE INDEX IF NOT EXISTS idx_footprint_results_user
                    ON footprint_results(user_id);
            """)
            conn.commit()
        finally:
            conn.close()

    def insert_summary(
        self,
        user_id: str,
        score: int,
        breach_count: int,
        platforms_found: int,
        summary: str,
    ) -> None:
        """Append one summary row for *user_id*."""
        conn = self._get_connection()
        try:
            conn.execute(
                """
                INSERT INTO footprint_results
                    (user_id, score, breach_count, platforms_found, summary, created_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    user_id,
                    score,
                    breach_count,
                    str(platforms_found),
                    summary,
                    datetime.now(UTC).isoformat(),
                ),
            )
            conn.commit()
        finally:
            conn.close()

    def delete_for_user(self, user_id: str) -> int:
        """Remove every row for *user_id*; return how many were deleted."""
        conn = self._get_connection()
        try:
            cursor = conn.execute("DELETE FROM footprint_results WHERE user_id = ?", (user_id,))
            conn.commit()
            return cursor.rowcount
        finally:
            conn.close()

    def list_for_user(self, user_id: str) -> list[dict[str, object]]:
        """Return a user's rows, newest first."""
        conn = self._get_connection()
        conn.row_factory = sqlite3.Row
        try:
            rows = conn.execute(
                """
                SELECT user_id, score, breach_count, platforms_found, summary, created_at
                FROM footprint_results
                WHERE user_id = ?
                ORDER BY id DESC
                """,
                (user_id,),
            ).fetchall()
            return [dict(row) for row in rows]
        finally:
            conn.close()
