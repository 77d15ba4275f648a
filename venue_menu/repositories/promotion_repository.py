"""
Repository layer for Promotion persistence.
All SQL for the `promotions` table lives here.
"""
import sqlite3
from typing import Iterable
import logging

from venue_menu.core.logging_config import log_db_timing
from venue_menu.models.promotion import Promotion

logger = logging.getLogger(__name__)


class PromotionRepository:
    """Data access layer for promotion rows keyed by `key`."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        logger.trace("Initializing PromotionRepository")
        self._conn = conn

    @log_db_timing
    def list_all(self) -> list[Promotion]:
        """Return every stored promotion row."""
        rows = self._conn.execute(
            "SELECT key, title, description, category, active FROM promotions ORDER BY rowid"
        ).fetchall()
        return [Promotion.from_row(r) for r in rows]

    @log_db_timing
    def upsert(self, promotion: Promotion) -> None:
        """Insert or replace the row for ``promotion.key`` (conflict key)."""
        logger.info("Upserting promotion key=%s active=%s", promotion.key, promotion.active)
        self._conn.execute(
            """
            INSERT INTO promotions (key, title, description, category, active)
            VALUES (?, ?, ?, ?, ?)
            ON CONFLICT(key) DO UPDATE SET
                title       = excluded.title,
                description = excluded.description,
                category    = excluded.category,
                active      = excluded.active
            """,
            (
                promotion.key,
                promotion.title,
                promotion.description,
                promotion.category.value,
                int(promotion.active),
            ),
        )

    @log_db_timing
    def upsert_many(self, promotions: Iterable[Promotion]) -> None:
        for promotion in promotions:
            self.upsert(promotion)
