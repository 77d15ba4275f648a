"""
Promotion activation over the preset promotions.

Active flags are read remote-first with a local fallback. Flipping a flag
writes the record store and mirrors locally; if the store is unreachable
the change is kept locally (pending) and reported as a local activation.
"""
import sqlite3
import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import HTTPException, status

from venue_menu.db.local_store import ACTIVE_PROMOTIONS_KEY, LocalStore
from venue_menu.models.promotion import PRESET_PROMOTIONS, Promotion, PromotionCategory
from venue_menu.repositories.promotion_repository import PromotionRepository
from venue_menu.repositories.two_tier import SOURCE_LOCAL, Tiered, TwoTierRepository

logger = logging.getLogger(__name__)


@dataclass
class PromotionListing:
    promotions: list[Promotion]
    source: str

    def grouped(self) -> list[tuple[PromotionCategory, list[Promotion]]]:
        groups: dict[PromotionCategory, list[Promotion]] = {}
        for promotion in self.promotions:
            groups.setdefault(promotion.category, []).append(promotion)
        return list(groups.items())

    @property
    def active(self) -> list[Promotion]:
        return [p for p in self.promotions if p.active]


@dataclass
class Activation:
    message: str
    persisted: str
    promotion: Promotion


class PromotionService:
    def __init__(self, conn: sqlite3.Connection, local_store: LocalStore) -> None:
        logger.trace("Initializing PromotionService")
        self._repo = PromotionRepository(conn)
        self._tier: TwoTierRepository[frozenset[str]] = TwoTierRepository(
            local_store,
            ACTIVE_PROMOTIONS_KEY,
            encode=lambda keys: sorted(keys),
            decode=lambda raw: frozenset(str(k) for k in raw),
        )
        self._remote_rows: Optional[dict[str, Promotion]] = None

    # ------------------------------------------------------------------
    # Remote tier callbacks
    # ------------------------------------------------------------------

    def _fetch_active_keys(self) -> Optional[frozenset[str]]:
        rows = self._repo.list_all()
        self._remote_rows = {row.key: row for row in rows}
        if not rows:
            return None
        return frozenset(row.key for row in rows if row.active)

    def _push_active_keys(self, keys: frozenset[str]) -> None:
        rows = self._remote_rows or {}
        self._repo.upsert_many(
            self._merge(preset, rows).with_active(preset.key in keys)
            for preset in PRESET_PROMOTIONS
        )

    @staticmethod
    def _merge(preset: Promotion, rows: dict[str, Promotion]) -> Promotion:
        """Stored text overrides the preset's; the preset supplies the rest."""
        row = rows.get(preset.key)
        if row is None:
            return preset
        return Promotion(
            key=preset.key,
            title=row.title or preset.title,
            description=row.description or preset.description,
            category=row.category or preset.category,
            active=row.active,
        )

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def _active_keys(self) -> Tiered[frozenset[str]]:
        return self._tier.read(
            fetch_remote=self._fetch_active_keys,
            default=frozenset,
            push_remote=self._push_active_keys,
        )

    def list_promotions(self) -> PromotionListing:
        """Every preset with stored overrides and its current active flag."""
        tiered = self._active_keys()
        rows = self._remote_rows or {}
        promotions = [
            self._merge(preset, rows).with_active(preset.key in tiered.value)
            for preset in PRESET_PROMOTIONS
        ]
        logger.info(
            "Listed %s promotions (%s active) from %s",
            len(promotions),
            sum(p.active for p in promotions),
            tiered.source,
        )
        return PromotionListing(promotions=promotions, source=tiered.source)

    def active_promotions(self) -> list[Promotion]:
        return self.list_promotions().active

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def set_active(self, key: str, active: bool) -> Activation:
        """Activate or stop a preset promotion; repeating a state is a no-op."""
        listing = self.list_promotions()
        current = next((p for p in listing.promotions if p.key == key), None)
        if current is None:
            logger.warning("Unknown promotion key=%s", key)
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Promotion '{key}' not found",
            )

        keys = {p.key for p in listing.active}
        if active:
            keys.add(key)
        else:
            keys.discard(key)
        updated = current.with_active(active)

        persisted = self._tier.write(
            frozenset(keys),
            push_remote=self._push_active_keys,
            allow_local_only=True,
        )
        message = "Promotion Activated" if active else "Promotion Stopped"
        if persisted == SOURCE_LOCAL:
            message += " (Local)"
        logger.info("%s key=%s persisted=%s", message, key, persisted)
        return Activation(message=message, persisted=persisted, promotion=updated)
