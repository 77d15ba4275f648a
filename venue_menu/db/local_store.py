"""
Local key-value store used as the fallback tier behind the record store.

Values live in a single JSON file keyed by fixed string identifiers. The
store is a cache, not a source of truth: its own I/O failures are logged and
swallowed, reads then behave as a miss and writes are dropped.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
import json
import logging
import os
import threading
from typing import Any, Optional

logger = logging.getLogger(__name__)

VENUE_SETTINGS_KEY = "venue_settings"
ACTIVE_PROMOTIONS_KEY = "active_promotions"


@dataclass
class LocalEntry:
    value: Any
    synced_at: Optional[datetime]
    # written while the record store was unreachable; not yet pushed upstream
    pending: bool = False


class LocalStore:
    """JSON-file backed key-value store with best-effort semantics."""

    def __init__(self, path: str) -> None:
        self._path = path
        self._lock = threading.Lock()

    @property
    def path(self) -> str:
        return self._path

    def _load(self) -> dict:
        try:
            with open(self._path, encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError):
            logger.warning("Local store unreadable at %s", self._path, exc_info=True)
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> Optional[LocalEntry]:
        """Return the entry stored under *key*, or None on a miss or read error."""
        with self._lock:
            raw = self._load().get(key)
        if not isinstance(raw, dict) or "value" not in raw:
            return None
        synced_at = raw.get("synced_at")
        try:
            synced = datetime.fromisoformat(synced_at) if synced_at else None
        except ValueError:
            synced = None
        return LocalEntry(value=raw["value"], synced_at=synced, pending=bool(raw.get("pending")))

    def put(self, key: str, value: Any, pending: bool = False) -> None:
        """Store *value* under *key*; write errors are logged and dropped."""
        entry = {
            "value": value,
            "synced_at": None if pending else datetime.now(tz=timezone.utc).isoformat(),
            "pending": pending,
        }
        with self._lock:
            data = self._load()
            data[key] = entry
            try:
                directory = os.path.dirname(self._path)
                if directory:
                    os.makedirs(directory, exist_ok=True)
                tmp_path = f"{self._path}.tmp"
                with open(tmp_path, "w", encoding="utf-8") as fh:
                    json.dump(data, fh)
                os.replace(tmp_path, self._path)
            except (OSError, TypeError, ValueError):
                logger.warning("Local store write failed for key=%s", key, exc_info=True)
                return
        logger.info("Local store updated key=%s pending=%s", key, pending)

    def clear(self) -> None:
        """Remove every entry (used on reset and in tests)."""
        with self._lock:
            try:
                os.remove(self._path)
            except FileNotFoundError:
                pass
            except OSError:
                logger.warning("Local store clear failed at %s", self._path, exc_info=True)
