import sqlite3
from datetime import datetime, timezone

from pydantic import ValidationError

from assessor.config import AppConfig
from assessor.interview.adapters.db_manager import DatabaseManager
from assessor.interview.domain.models import InterviewSession
from assessor.interview.domain.ports import IHistoryRepository
from assessor.shared.telemetry import Telemetry, measure_time


class SQLiteHistoryRepository(IHistoryRepository):
    """
    Interview history kept as JSON documents, newest first,
    capped at `limit` sessions.
    """

    def __init__(
        self, db_manager: DatabaseManager, limit: int = AppConfig.HISTORY_LIMIT
    ) -> None:
        self.telemetry = Telemetry("SQLiteHistoryRepository")
        self.db_manager = db_manager
        self.limit = limit

    def _get_connection(self) -> sqlite3.Connection:
        return self.db_manager.get_connection()

    @measure_time("db_list_sessions")
    def list_sessions(self) -> list[InterviewSession]:
        try:
            cursor = self._get_connection().execute(
                "SELECT id, json_data FROM interview_history ORDER BY seq DESC"
            )
            rows = cursor.fetchall()
        except sqlite3.Error as e:
            self.telemetry.log_error("list_sessions failed", e)
            return []

        sessions = []
        for session_id, json_data in rows:
            try:
                sessions.append(InterviewSession.model_validate_json(json_data))
            except ValidationError as e:
                # One corrupt record must not hide the rest of the history
                self.telemetry.log_error("Skipping unreadable session", e, id=session_id)
        return sessions

    def get_session(self, session_id: str) -> InterviewSession | None:
        try:
            row = (
                self._get_connection()
                .execute(
                    "SELECT json_data FROM interview_history WHERE id = ?",
                    (session_id,),
                )
                .fetchone()
            )
            return InterviewSession.model_validate_json(row[0]) if row else None
        except (sqlite3.Error, ValidationError) as e:
            self.telemetry.log_error("get_session failed", e, id=session_id)
            return None

    @measure_time("db_save_session")
    def save_session(self, session: InterviewSession) -> int:
        conn = self._get_connection()
        saved_at = datetime.now(timezone.utc).isoformat()
        try:
            existing = conn.execute(
                "SELECT seq FROM interview_history WHERE id = ?", (session.id,)
            ).fetchone()

            if existing:
                # Updates keep their place in the list
                conn.execute(
                    "UPDATE interview_history "
                    "SET saved_at = ?, candidate = ?, status = ?, json_data = ? "
                    "WHERE id = ?",
                    (
                        saved_at,
                        session.candidate_name,
                        session.status.value,
                        session.model_dump_json(),
                        session.id,
                    ),
                )
            else:
                conn.execute(
                    "INSERT INTO interview_history "
                    "(id, seq, saved_at, candidate, status, json_data) "
                    "VALUES (?, (SELECT COALESCE(MAX(seq), 0) + 1 FROM interview_history), "
                    "?, ?, ?, ?)",
                    (
                        session.id,
                        saved_at,
                        session.candidate_name,
                        session.status.value,
                        session.model_dump_json(),
                    ),
                )

            conn.execute(
                "DELETE FROM interview_history WHERE id NOT IN "
                "(SELECT id FROM interview_history ORDER BY seq DESC LIMIT ?)",
                (self.limit,),
            )
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            self.telemetry.log_error("save_session failed", e, id=session.id)

        total = self._count()
        self.telemetry.log_info("Session Saved", id=session.id, total=total)
        return total

    def delete_session(self, session_id: str) -> int:
        conn = self._get_connection()
        try:
            conn.execute("DELETE FROM interview_history WHERE id = ?", (session_id,))
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            self.telemetry.log_error("delete_session failed", e, id=session_id)
        return self._count()

    def _count(self) -> int:
        try:
            row = (
                self._get_connection()
                .execute("SELECT count(*) FROM interview_history")
                .fetchone()
            )
            return row[0] if row else 0
        except sqlite3.Error as e:
            self.telemetry.log_error("count failed", e)
            return 0
