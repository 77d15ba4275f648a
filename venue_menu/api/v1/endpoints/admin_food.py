"""
Food menu management endpoints (admin only):
  GET    /admin/food                              – Grouped, filtered food list with category chips
  POST   /admin/food                              – Create a food item
  POST   /admin/food/bulk-availability            – Mark a selection available / unavailable
  GET    /admin/food/{item_id}                    – Get a food item
  PUT    /admin/food/{item_id}                    – Replace a food item (edit form)
  DELETE /admin/food/{item_id}                    – Delete a food item
  PUT    /admin/food/{item_id}/availability       – Set availability
  POST   /admin/food/{item_id}/toggle-availability – Flip availability
"""
from fastapi import APIRouter, Depends, status
import logging

from venue_menu.core.dependencies import db_dependency, menu_filters_dependency, require_admin
from venue_menu.models.user import User
from venue_menu.schemas.menu import AdminFoodView
from venue_menu.schemas.menu_item import (
    AvailabilityUpdate,
    BulkAvailabilityRequest,
    BulkAvailabilityResponse,
    FoodItemCreate,
    FoodItemResponse,
    FoodMutationResponse,
    MessageResponse,
)
from venue_menu.services.menu_item_service import FoodMenuService, admin_view_payload
from venue_menu.services.menu_view import MenuFilters

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/food", tags=["Admin: Food"])


@router.get(
    "",
    response_model=AdminFoodView,
    summary="List food items grouped by category",
)
def food_view(
    filters: MenuFilters = Depends(menu_filters_dependency),
    conn=Depends(db_dependency),
    _: User = Depends(require_admin),
):
    """
    All food items (available or not), filtered by category chip, diet,
    availability and search text, grouped by category in first-seen order.
    """
    logger.info("Admin food view requested")
    service = FoodMenuService(conn)
    return admin_view_payload(service.admin_view(filters), service.category_presets)


@router.post(
    "",
    response_model=FoodMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a food item",
)
def create_food_item(
    data: FoodItemCreate,
    conn=Depends(db_dependency),
    _: User = Depends(require_admin),
):
    logger.info("Create food item requested name=%s", data.name)
    return FoodMenuService(conn).create_item(data)


@router.post(
    "/bulk-availability",
    response_model=BulkAvailabilityResponse,
    summary="Set availability for several food items at once",
)
def bulk_food_availability(
    data: BulkAvailabilityRequest,
    conn=Depends(db_dependency),
    _: User = Depends(require_admin),
):
    """All-or-nothing: any unknown id aborts the whole change with 404."""
    logger.info("Bulk food availability requested count=%s", len(data.ids))
    return FoodMenuService(conn).set_availability_bulk(data.ids, data.available)


@router.get(
    "/{item_id}",
    response_model=FoodItemResponse,
    summary="Get a food item",
)
def get_food_item(
    item_id: int,
    conn=Depends(db_dependency),
    _: User = Depends(require_admin),
):
    return FoodMenuService(conn).get_item(item_id)


@router.put(
    "/{item_id}",
    response_model=FoodMutationResponse,
    summary="Update a food item",
)
def update_food_item(
    item_id: int,
    data: FoodItemCreate,
    conn=Depends(db_dependency),
    _: User = Depends(require_admin),
):
    logger.info("Update food item requested id=%s", item_id)
    return FoodMenuService(conn).update_item(item_id, data)


@router.delete(
    "/{item_id}",
    response_model=MessageResponse,
    summary="Delete a food item",
)
def delete_food_item(
    item_id: int,
    conn=Depends(db_dependency),
    _: User = Depends(require_admin),
):
    logger.info("Delete food item requested id=%s", item_id)
    return MessageResponse(message=FoodMenuService(conn).delete_item(item_id))


@router.put(
    "/{item_id}/availability",
    response_model=FoodMutationResponse,
    summary="Set a food item's availability",
)
def set_food_availability(
    item_id: int,
    data: AvailabilityUpdate,
    conn=Depends(db_dependency),
    _: User = Depends(require_admin),
):
    return FoodMenuService(conn).set_availability(item_id, data.available)


@router.post(
    "/{item_id}/toggle-availability",
    response_model=FoodMutationResponse,
    summary="Flip a food item's availability",
)
def toggle_food_availability(
    item_id: int,
    conn=Depends(db_dependency),
    _: User = Depends(require_admin),
):
    logger.info("Toggle food availability requested id=%s", item_id)
    return FoodMenuService(conn).toggle_availability(item_id)
