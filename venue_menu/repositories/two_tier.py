"""
Two-tier repository: the record store first, the local store as fallback.

Policy
------
Read
    A pending local entry (written while the record store was down) is
    pushed upstream first. Otherwise the record store is queried; a hit is
    written through to the local store and returned as ``source="remote"``.
    An error or an empty result falls back to the local entry
    (``source="local"``), then to the caller's default (``source="default"``).
    Local data is never preferred over reachable remote data.
Write
    The record store is written first and, on success, mirrored locally.
    On failure the error propagates unless the caller allows local-only
    writes, in which case the value is stored locally as pending and
    ``"local"`` is returned.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
import logging
import sqlite3
from typing import Any, Callable, Generic, Optional, TypeVar

from venue_menu.db.local_store import LocalStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

REMOTE_ERRORS = (sqlite3.Error,)

SOURCE_REMOTE = "remote"
SOURCE_LOCAL = "local"
SOURCE_DEFAULT = "default"


@dataclass
class Tiered(Generic[T]):
    value: T
    source: str
    synced_at: Optional[datetime] = None


class TwoTierRepository(Generic[T]):
    """Remote-first access to one value with a local fallback entry."""

    def __init__(
        self,
        local: LocalStore,
        key: str,
        encode: Callable[[T], Any],
        decode: Callable[[Any], T],
    ) -> None:
        self._local = local
        self._key = key
        self._encode = encode
        self._decode = decode

    def _local_value(self):
        entry = self._local.get(self._key)
        if entry is None:
            return None, None
        try:
            return entry, self._decode(entry.value)
        except (KeyError, TypeError, ValueError):
            logger.warning("Discarding malformed local entry key=%s", self._key, exc_info=True)
            return None, None

    def read(
        self,
        fetch_remote: Callable[[], Optional[T]],
        default: Callable[[], T],
        push_remote: Optional[Callable[[T], None]] = None,
    ) -> Tiered[T]:
        entry, local_value = self._local_value()

        if entry is not None and entry.pending and push_remote is not None:
            try:
                push_remote(local_value)
            except REMOTE_ERRORS:
                logger.warning("Record store still unavailable for key=%s", self._key, exc_info=True)
                return Tiered(local_value, SOURCE_LOCAL, entry.synced_at)
            logger.info("Pushed pending local entry key=%s upstream", self._key)
            self._local.put(self._key, self._encode(local_value))
            return Tiered(local_value, SOURCE_REMOTE, datetime.now(tz=timezone.utc))

        try:
            remote_value = fetch_remote()
        except REMOTE_ERRORS:
            logger.warning("Record store read failed for key=%s, using fallback", self._key, exc_info=True)
            remote_value = None

        if remote_value is not None:
            self._local.put(self._key, self._encode(remote_value))
            return Tiered(remote_value, SOURCE_REMOTE, datetime.now(tz=timezone.utc))

        if entry is not None:
            logger.info("Serving local fallback for key=%s", self._key)
            return Tiered(local_value, SOURCE_LOCAL, entry.synced_at)

        return Tiered(default(), SOURCE_DEFAULT)

    def write(
        self,
        value: T,
        push_remote: Callable[[T], None],
        allow_local_only: bool = False,
    ) -> str:
        """Persist *value*; return where it landed (``"remote"`` or ``"local"``)."""
        try:
            push_remote(value)
        except REMOTE_ERRORS:
            if not allow_local_only:
                raise
            logger.warning("Record store write failed for key=%s, kept locally", self._key, exc_info=True)
            self._local.put(self._key, self._encode(value), pending=True)
            return SOURCE_LOCAL
        self._local.put(self._key, self._encode(value))
        return SOURCE_REMOTE
