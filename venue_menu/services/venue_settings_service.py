"""
Venue settings: the single `default` record behind the contact card.

Reads are remote-first with the local copy as fallback and empty settings
as the last resort. Saves overwrite the whole record; a failed save is
reported to the caller rather than kept only locally.
"""
import sqlite3
import logging
from datetime import datetime, timezone

from venue_menu.core.exceptions import StoreUnavailableError
from venue_menu.db.local_store import VENUE_SETTINGS_KEY, LocalStore
from venue_menu.models.venue_settings import VenueSettings
from venue_menu.repositories.two_tier import REMOTE_ERRORS, Tiered, TwoTierRepository
from venue_menu.repositories.venue_settings_repository import VenueSettingsRepository
from venue_menu.schemas.venue_settings import VenueContactCard, VenueSettingsUpdate

logger = logging.getLogger(__name__)


class VenueSettingsService:
    def __init__(self, conn: sqlite3.Connection, local_store: LocalStore) -> None:
        logger.trace("Initializing VenueSettingsService")
        self._repo = VenueSettingsRepository(conn)
        self._tier: TwoTierRepository[VenueSettings] = TwoTierRepository(
            local_store,
            VENUE_SETTINGS_KEY,
            encode=VenueSettings.to_dict,
            decode=VenueSettings.from_dict,
        )

    def get(self) -> Tiered[VenueSettings]:
        tiered = self._tier.read(fetch_remote=self._repo.get, default=VenueSettings)
        logger.info("Loaded venue settings from %s", tiered.source)
        return tiered

    def save(self, data: VenueSettingsUpdate) -> VenueSettings:
        """Upsert every field of the settings record."""
        venue = VenueSettings(
            **data.model_dump(),
            updated_at=datetime.now(tz=timezone.utc),
        )
        logger.info("Saving venue settings bar_name=%s", venue.bar_name)
        try:
            self._tier.write(venue, push_remote=self._repo.upsert)
        except REMOTE_ERRORS as exc:
            logger.error("Failed to save venue settings", exc_info=True)
            raise StoreUnavailableError("save venue settings") from exc
        return venue

    def contact_card(self) -> VenueContactCard:
        """Public contact card; the map embed only when the venue enabled it."""
        venue = self.get().value
        card = VenueContactCard.model_validate(venue)
        if not venue.show_map_embed:
            card.embed_url = None
        return card
