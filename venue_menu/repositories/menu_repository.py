"""
Shared data access for the two menu tables (`food_menu`, `alcohol`).
Subclasses declare the table, its writable columns and the row model.
"""
import sqlite3
from datetime import datetime, timezone
from typing import Callable, Generic, Iterable, Optional, TypeVar
import logging

from venue_menu.core.logging_config import log_db_timing
from venue_menu.models.menu_item import tags_to_column

logger = logging.getLogger(__name__)

T = TypeVar("T")


class MenuTableRepository(Generic[T]):
    """Query/insert/update/delete helpers for one menu table."""

    table: str = ""
    columns: tuple[str, ...] = ()
    from_row: Callable[[sqlite3.Row], T]

    def __init__(self, conn: sqlite3.Connection) -> None:
        """Store the database connection for query execution."""
        logger.trace("Initializing %s", type(self).__name__)
        self._conn = conn

    def _to_columns(self, fields: dict) -> dict:
        unknown = set(fields) - set(self.columns)
        if unknown:
            raise ValueError(f"Unknown {self.table} columns: {sorted(unknown)}")
        values = {}
        for col, value in fields.items():
            if col == "tags":
                value = tags_to_column(value)
            elif isinstance(value, bool):
                value = int(value)
            elif value is not None and col.startswith("price"):
                value = float(value)
            values[col] = value
        return values

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    @log_db_timing
    def get_by_id(self, item_id: int) -> Optional[T]:
        """Return a row by id or None if missing."""
        row = self._conn.execute(
            f"SELECT * FROM {self.table} WHERE id = ?", (item_id,)
        ).fetchone()
        return type(self).from_row(row) if row else None

    @log_db_timing
    def list_all(
        self,
        available: Optional[bool] = None,
        category: Optional[str] = None,
    ) -> list[T]:
        """Return rows in insertion order, optionally filtered by equality."""
        clauses, params = [], []
        if available is not None:
            clauses.append("available = ?")
            params.append(int(available))
        if category is not None:
            clauses.append("category = ?")
            params.append(category)
        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
        rows = self._conn.execute(
            f"SELECT * FROM {self.table}{where} ORDER BY id", params
        ).fetchall()
        return [type(self).from_row(r) for r in rows]

    @log_db_timing
    def existing_ids(self, ids: Iterable[int]) -> set[int]:
        """Return the subset of *ids* that exist in the table."""
        ids = list(ids)
        if not ids:
            return set()
        placeholders = ", ".join("?" for _ in ids)
        rows = self._conn.execute(
            f"SELECT id FROM {self.table} WHERE id IN ({placeholders})", ids
        ).fetchall()
        return {r["id"] for r in rows}

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    @log_db_timing
    def create(self, **fields) -> T:
        """Insert a row and return it."""
        values = self._to_columns(fields)
        now = datetime.now(tz=timezone.utc).isoformat()
        values["created_at"] = now
        values["updated_at"] = now
        cols = ", ".join(values)
        placeholders = ", ".join("?" for _ in values)
        cursor = self._conn.execute(
            f"INSERT INTO {self.table} ({cols}) VALUES ({placeholders})",
            list(values.values()),
        )
        logger.info("Created %s row id=%s", self.table, cursor.lastrowid)
        return self.get_by_id(cursor.lastrowid)  # type: ignore[return-value]

    @log_db_timing
    def update(self, item_id: int, **fields) -> Optional[T]:
        """Update the given columns and return the updated row."""
        values = self._to_columns(fields)
        if not values:
            return self.get_by_id(item_id)
        values["updated_at"] = datetime.now(tz=timezone.utc).isoformat()
        set_clause = ", ".join(f"{col} = ?" for col in values)
        self._conn.execute(
            f"UPDATE {self.table} SET {set_clause} WHERE id = ?",
            list(values.values()) + [item_id],
        )
        return self.get_by_id(item_id)

    @log_db_timing
    def set_available_bulk(self, ids: Iterable[int], available: bool) -> int:
        """Set availability for every id in one statement; return rows affected."""
        ids = list(ids)
        if not ids:
            return 0
        placeholders = ", ".join("?" for _ in ids)
        now = datetime.now(tz=timezone.utc).isoformat()
        cursor = self._conn.execute(
            f"UPDATE {self.table} SET available = ?, updated_at = ? WHERE id IN ({placeholders})",
            [int(available), now, *ids],
        )
        logger.info("%s availability bulk update affected %s rows", self.table, cursor.rowcount)
        return cursor.rowcount

    @log_db_timing
    def delete(self, item_id: int) -> bool:
        """Delete a row by id and return True if removed."""
        cursor = self._conn.execute(
            f"DELETE FROM {self.table} WHERE id = ?", (item_id,)
        )
        logger.info("%s delete affected %s rows", self.table, cursor.rowcount)
        return cursor.rowcount > 0
