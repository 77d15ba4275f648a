"""
Repository layer for the singleton `venue_settings` row.
"""
import sqlite3
from typing import Optional
import logging

from venue_menu.core.logging_config import log_db_timing
from venue_menu.models.venue_settings import DEFAULT_SETTINGS_ID, VenueSettings

logger = logging.getLogger(__name__)

_COLUMNS = (
    "id",
    "bar_name",
    "logo_url",
    "instagram_url",
    "facebook_url",
    "website_url",
    "address",
    "phone",
    "email",
    "hours",
    "google_maps_url",
    "embed_url",
    "show_map_embed",
    "updated_at",
)


class VenueSettingsRepository:
    """Data access layer for the `default` venue settings record."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        logger.trace("Initializing VenueSettingsRepository")
        self._conn = conn

    @log_db_timing
    def get(self) -> Optional[VenueSettings]:
        """Return the settings row or None when it was never saved."""
        row = self._conn.execute(
            f"SELECT {', '.join(_COLUMNS)} FROM venue_settings WHERE id = ?",
            (DEFAULT_SETTINGS_ID,),
        ).fetchone()
        return VenueSettings.from_row(row) if row else None

    @log_db_timing
    def upsert(self, venue: VenueSettings) -> None:
        """Overwrite the whole settings row (conflict key `id`)."""
        logger.info("Upserting venue settings")
        data = venue.to_dict()
        data["id"] = DEFAULT_SETTINGS_ID
        data["show_map_embed"] = int(bool(data["show_map_embed"]))
        updates = ", ".join(f"{col} = excluded.{col}" for col in _COLUMNS if col != "id")
        self._conn.execute(
            f"""
            INSERT INTO venue_settings ({', '.join(_COLUMNS)})
            VALUES ({', '.join('?' for _ in _COLUMNS)})
            ON CONFLICT(id) DO UPDATE SET {updates}
            """,
            [data[col] for col in _COLUMNS],
        )
