"""
Public menu page data.

Food and alcohol are loaded independently: a failure loading one is logged
and reported in `errors` while the other's items are still shown. Active
promotions and the venue contact card come from their own services with
their local fallbacks.
"""
import sqlite3
import logging
from dataclasses import dataclass, field

from venue_menu.core.config import settings
from venue_menu.db.local_store import LocalStore
from venue_menu.models.menu_item import AlcoholItem, FoodItem
from venue_menu.models.promotion import Promotion
from venue_menu.repositories.alcohol_repository import AlcoholRepository
from venue_menu.repositories.food_repository import FoodRepository
from venue_menu.schemas.venue_settings import VenueContactCard
from venue_menu.services.menu_view import (
    MenuFilters,
    MenuView,
    MenuViewResult,
    build_public_view,
    present_item,
)
from venue_menu.services.promotion_service import PromotionService
from venue_menu.services.venue_settings_service import VenueSettingsService

logger = logging.getLogger(__name__)


@dataclass
class PublicMenuData:
    food: list[FoodItem] = field(default_factory=list)
    alcohol: list[AlcoholItem] = field(default_factory=list)
    promotions: list[Promotion] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


class PublicMenuService:
    def __init__(self, conn: sqlite3.Connection, local_store: LocalStore) -> None:
        logger.trace("Initializing PublicMenuService")
        self._food_repo = FoodRepository(conn)
        self._alcohol_repo = AlcoholRepository(conn)
        self._promotions = PromotionService(conn, local_store)
        self._venue = VenueSettingsService(conn, local_store)

    def load(self) -> PublicMenuData:
        """Fetch the available items of both collections and the active promotions."""
        data = PublicMenuData()
        try:
            data.food = self._food_repo.list_all(available=True)
        except sqlite3.Error:
            logger.error("Failed to load food menu", exc_info=True)
            data.errors.append("Failed to load food menu")
        try:
            data.alcohol = self._alcohol_repo.list_all(available=True)
        except sqlite3.Error:
            logger.error("Failed to load alcohol menu", exc_info=True)
            data.errors.append("Failed to load alcohol menu")
        data.promotions = self._promotions.active_promotions()
        logger.info(
            "Public menu loaded food=%s alcohol=%s promotions=%s errors=%s",
            len(data.food),
            len(data.alcohol),
            len(data.promotions),
            len(data.errors),
        )
        return data

    def contact_card(self) -> VenueContactCard:
        return self._venue.contact_card()

    def menu(self, view: MenuView, filters: MenuFilters) -> dict:
        """Grouped public view with presented items, promotions and contact card."""
        data = self.load()
        result = build_public_view(data.food, data.alcohol, view, filters, data.promotions)
        return {
            **serialize_view(result),
            "promotions": data.promotions,
            "venue": self.contact_card(),
            "errors": data.errors,
        }


def serialize_view(result: MenuViewResult) -> dict:
    """Flatten a view result into response data, presenting each entry by kind."""
    symbol = settings.CURRENCY_SYMBOL
    return {
        "view": result.view,
        "filters": result.filters,
        "chips": result.chips,
        "buckets": [
            {
                "title": bucket.title,
                "items": [present_item(item, symbol) for item in bucket.items],
                "promotions": bucket.promotions,
            }
            for bucket in result.buckets
        ],
        "total": result.total,
    }
