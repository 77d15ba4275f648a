"""
Domain model for the singleton `venue_settings` row.
"""
from dataclasses import asdict, dataclass, fields
from datetime import datetime
from typing import Optional

DEFAULT_SETTINGS_ID = "default"


@dataclass
class VenueSettings:
    id: str = DEFAULT_SETTINGS_ID
    bar_name: Optional[str] = None
    logo_url: Optional[str] = None
    instagram_url: Optional[str] = None
    facebook_url: Optional[str] = None
    website_url: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    hours: Optional[str] = None
    google_maps_url: Optional[str] = None
    embed_url: Optional[str] = None
    show_map_embed: bool = False
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        """Serialize for the local fallback store."""
        data = asdict(self)
        data["updated_at"] = self.updated_at.isoformat() if self.updated_at else None
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "VenueSettings":
        """Build settings from a plain mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known}
        values["id"] = DEFAULT_SETTINGS_ID
        values["show_map_embed"] = bool(values.get("show_map_embed"))
        updated_at = values.get("updated_at")
        if isinstance(updated_at, str):
            values["updated_at"] = datetime.fromisoformat(updated_at)
        return cls(**values)

    @classmethod
    def from_row(cls, row) -> "VenueSettings":
        """Build VenueSettings from a sqlite3.Row object."""
        return cls.from_dict(dict(row))
