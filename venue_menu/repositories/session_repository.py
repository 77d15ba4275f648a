"""
Repository layer for signed-in sessions.
All SQL for the `sessions` table lives here.
"""
import sqlite3
from datetime import datetime
from typing import Optional
import logging

from venue_menu.models.session import UserSession
from venue_menu.core.logging_config import log_db_timing

logger = logging.getLogger(__name__)


class SessionRepository:
    """Data access layer for refresh-token backed sessions."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        logger.trace("Initializing SessionRepository")
        self._conn = conn

    @log_db_timing
    def get_by_refresh_token(self, token: str) -> Optional[UserSession]:
        """Return the session holding *token*, if any."""
        row = self._conn.execute(
            "SELECT * FROM sessions WHERE refresh_token = ?", (token,)
        ).fetchone()
        return UserSession.from_row(row) if row else None

    @log_db_timing
    def create(self, user_id: int, token: str, expires_at: datetime) -> UserSession:
        """Open a session for *user_id* and return it."""
        logger.info("Opening session for user id=%s", user_id)
        cursor = self._conn.execute(
            "INSERT INTO sessions (user_id, refresh_token, expires_at) VALUES (?, ?, ?)",
            (user_id, token, expires_at.isoformat()),
        )
        row = self._conn.execute(
            "SELECT * FROM sessions WHERE id = ?", (cursor.lastrowid,)
        ).fetchone()
        return UserSession.from_row(row)

    @log_db_timing
    def revoke(self, token: str) -> bool:
        """Revoke a single session and return True if updated."""
        cursor = self._conn.execute(
            "UPDATE sessions SET revoked = 1 WHERE refresh_token = ?", (token,)
        )
        logger.info("Session revoke affected %s rows", cursor.rowcount)
        return cursor.rowcount > 0

    @log_db_timing
    def revoke_all_for_user(self, user_id: int) -> int:
        """Revoke every open session of *user_id* and return the count."""
        cursor = self._conn.execute(
            "UPDATE sessions SET revoked = 1 WHERE user_id = ? AND revoked = 0",
            (user_id,),
        )
        logger.info("Revoked %s sessions for user id=%s", cursor.rowcount, user_id)
        return cursor.rowcount
