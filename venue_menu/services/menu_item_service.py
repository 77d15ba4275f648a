"""
Admin menu management for food and alcohol items.

Business rules:
- Forms are validated by the request schemas before any store call.
- Updates replace the whole item (form submit), availability can also be
  flipped on its own or set for a selection in bulk.
- A bulk availability change is all-or-nothing: unknown ids abort it.
- Every store failure is reported as an error naming the attempted action.
"""
import sqlite3
import logging
from dataclasses import dataclass
from typing import Generic, Iterable, TypeVar

from fastapi import HTTPException, status
from pydantic import BaseModel

from venue_menu.core.exceptions import store_errors
from venue_menu.models.menu_item import (
    ALCOHOL_CATEGORY_PRESETS,
    FOOD_CATEGORY_PRESETS,
    AlcoholItem,
    FoodItem,
)
from venue_menu.repositories.alcohol_repository import AlcoholRepository
from venue_menu.repositories.food_repository import FoodRepository
from venue_menu.repositories.menu_repository import MenuTableRepository
from venue_menu.services.menu_view import MenuFilters, MenuView, MenuViewResult, build_menu_view

logger = logging.getLogger(__name__)

T = TypeVar("T", FoodItem, AlcoholItem)


@dataclass
class Mutation(Generic[T]):
    message: str
    item: T


@dataclass
class BulkResult:
    message: str
    count: int
    available: bool


class MenuItemService(Generic[T]):
    """Shared CRUD and availability operations over one menu table."""

    label: str = "menu item"
    view: MenuView = MenuView.FOOD
    category_presets: tuple[str, ...] = ()
    repository_class: type[MenuTableRepository] = MenuTableRepository

    def __init__(self, conn: sqlite3.Connection) -> None:
        logger.trace("Initializing %s", type(self).__name__)
        self._repo = self.repository_class(conn)

    def _not_found(self, item_id: int) -> HTTPException:
        logger.warning("%s id=%s not found", self.label, item_id)
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{self.label.capitalize()} with id={item_id} not found",
        )

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def admin_view(self, filters: MenuFilters) -> MenuViewResult:
        """All items (any availability) grouped, filtered and counted."""
        logger.info("Building admin %s view filters=%s", self.label, filters)
        with store_errors(f"load {self.label}s"):
            items = self._repo.list_all()
        return build_menu_view(items, self.view, filters)

    def get_item(self, item_id: int) -> T:
        with store_errors(f"load {self.label}"):
            item = self._repo.get_by_id(item_id)
        if item is None:
            raise self._not_found(item_id)
        return item

    # ------------------------------------------------------------------
    # Create / update / delete
    # ------------------------------------------------------------------

    def create_item(self, data: BaseModel) -> Mutation[T]:
        logger.info("Creating %s name=%s", self.label, getattr(data, "name", None))
        with store_errors(f"create {self.label}"):
            item = self._repo.create(**data.model_dump())
        logger.info("%s created id=%s", self.label, item.id)
        return Mutation(message=f"{self.label.capitalize()} created successfully", item=item)

    def update_item(self, item_id: int, data: BaseModel) -> Mutation[T]:
        logger.info("Updating %s id=%s", self.label, item_id)
        self.get_item(item_id)
        with store_errors(f"update {self.label}"):
            item = self._repo.update(item_id, **data.model_dump())
        return Mutation(message=f"{self.label.capitalize()} updated successfully", item=item)

    def delete_item(self, item_id: int) -> str:
        logger.info("Deleting %s id=%s", self.label, item_id)
        with store_errors(f"delete {self.label}"):
            removed = self._repo.delete(item_id)
        if not removed:
            raise self._not_found(item_id)
        return f"{self.label.capitalize()} deleted successfully"

    # ------------------------------------------------------------------
    # Availability
    # ------------------------------------------------------------------

    def set_availability(self, item_id: int, available: bool) -> Mutation[T]:
        self.get_item(item_id)
        with store_errors(f"update {self.label} availability"):
            item = self._repo.update(item_id, available=available)
        state = "available" if available else "unavailable"
        return Mutation(message=f"{self.label.capitalize()} marked {state}", item=item)

    def toggle_availability(self, item_id: int) -> Mutation[T]:
        """Quick toggle from the admin list."""
        current = self.get_item(item_id)
        return self.set_availability(item_id, not current.available)

    def set_availability_bulk(self, ids: Iterable[int], available: bool) -> BulkResult:
        """
        Set availability for every selected id as one logical operation.

        Raises 404 naming the missing ids if any selected item does not exist;
        the request transaction is then rolled back so nothing changes.
        """
        ids = list(dict.fromkeys(ids))
        state = "available" if available else "unavailable"
        action = f"mark {len(ids)} {self.label}s {state}"
        logger.info("Bulk availability %s ids=%s", state, ids)

        with store_errors(action):
            missing = set(ids) - self._repo.existing_ids(ids)
            if missing:
                logger.warning("Bulk availability aborted, missing ids=%s", sorted(missing))
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND,
                    detail=f"Failed to {action}: ids not found {sorted(missing)}",
                )
            updated = self._repo.set_available_bulk(ids, available)

        if updated != len(ids):
            logger.error("Bulk availability updated %s of %s rows", updated, len(ids))
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Failed to {action}: only {updated} of {len(ids)} updated",
            )
        return BulkResult(
            message=f"{updated} {self.label}(s) marked {state}",
            count=updated,
            available=available,
        )


class FoodMenuService(MenuItemService[FoodItem]):
    label = "food item"
    view = MenuView.FOOD
    category_presets = FOOD_CATEGORY_PRESETS
    repository_class = FoodRepository


class AlcoholMenuService(MenuItemService[AlcoholItem]):
    label = "alcohol item"
    view = MenuView.DRINKS
    category_presets = ALCOHOL_CATEGORY_PRESETS
    repository_class = AlcoholRepository


def admin_view_payload(result: MenuViewResult, category_presets: Iterable[str]) -> dict:
    """Response data for an admin manager view."""
    return {
        "filters": result.filters,
        "chips": result.chips,
        "buckets": [{"title": b.title, "items": b.items} for b in result.buckets],
        "total": result.total,
        "category_presets": list(category_presets),
    }
