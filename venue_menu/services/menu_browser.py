"""
Stateful browse session over the public menu.

Holds the loaded collections and the visitor's current view, category chip,
diet toggle and search text. Chip, diet and view changes recompute at once;
search text goes through a Debouncer so only the last keystroke inside the
debounce window triggers a recomputation.
"""
from dataclasses import replace
import logging
import threading
from typing import Callable, Optional, Sequence

from venue_menu.core.config import settings
from venue_menu.core.debounce import Debouncer
from venue_menu.models.menu_item import AlcoholItem, FoodItem
from venue_menu.models.promotion import Promotion
from venue_menu.services.menu_view import (
    ALL_CATEGORIES,
    Diet,
    MenuFilters,
    MenuView,
    MenuViewResult,
    build_public_view,
)

logger = logging.getLogger(__name__)


class MenuBrowser:
    def __init__(
        self,
        food: Sequence[FoodItem] = (),
        alcohol: Sequence[AlcoholItem] = (),
        promotions: Sequence[Promotion] = (),
        view: MenuView = MenuView.FOOD,
        debounce_seconds: Optional[float] = None,
        on_change: Optional[Callable[[MenuViewResult], None]] = None,
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
    ) -> None:
        if debounce_seconds is None:
            debounce_seconds = settings.SEARCH_DEBOUNCE_SECONDS
        self._lock = threading.RLock()
        self._food = list(food)
        self._alcohol = list(alcohol)
        self._promotions = list(promotions)
        self._view = view
        self._filters = MenuFilters()
        self._raw_query = ""
        self._on_change = on_change
        self._search = Debouncer(debounce_seconds, self._apply_query, timer_factory)
        self._snapshot = build_public_view(
            self._food, self._alcohol, self._view, self._filters, self._promotions
        )
        self.recompute_count = 0

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def snapshot(self) -> MenuViewResult:
        with self._lock:
            return self._snapshot

    @property
    def raw_query(self) -> str:
        """Text as typed, which may be ahead of the applied query."""
        return self._raw_query

    @property
    def filters(self) -> MenuFilters:
        with self._lock:
            return self._filters

    def _recompute(self) -> MenuViewResult:
        with self._lock:
            self._snapshot = build_public_view(
                self._food, self._alcohol, self._view, self._filters, self._promotions
            )
            self.recompute_count += 1
            snapshot = self._snapshot
        logger.info(
            "Menu view recomputed view=%s category=%s query=%r buckets=%s",
            snapshot.view.value,
            snapshot.filters.category,
            snapshot.filters.query,
            len(snapshot.buckets),
        )
        if self._on_change is not None:
            self._on_change(snapshot)
        return snapshot

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    def load(
        self,
        food: Sequence[FoodItem],
        alcohol: Sequence[AlcoholItem],
        promotions: Sequence[Promotion] = (),
    ) -> MenuViewResult:
        with self._lock:
            self._food = list(food)
            self._alcohol = list(alcohol)
            self._promotions = list(promotions)
        return self._recompute()

    def type_query(self, raw: str) -> None:
        """Record a keystroke; filtering catches up once typing pauses."""
        self._raw_query = raw
        self._search(raw)

    def _apply_query(self, raw: str) -> None:
        with self._lock:
            self._filters = replace(self._filters, query=raw)
        self._recompute()

    def flush_query(self) -> None:
        """Apply pending search text immediately (e.g. on submit)."""
        self._search.flush()

    def select_category(self, category: str) -> MenuViewResult:
        with self._lock:
            self._filters = replace(self._filters, category=category or ALL_CATEGORIES)
        return self._recompute()

    def set_diet(self, diet: Diet) -> MenuViewResult:
        with self._lock:
            self._filters = replace(self._filters, diet=Diet(diet))
        return self._recompute()

    def set_view(self, view: MenuView) -> MenuViewResult:
        """Switch between food and drinks; the category chip resets to all."""
        with self._lock:
            self._view = MenuView(view)
            self._filters = replace(self._filters, category=ALL_CATEGORIES)
        return self._recompute()

    def close(self) -> None:
        self._search.cancel()
