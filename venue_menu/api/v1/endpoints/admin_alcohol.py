"""
Alcohol menu management endpoints (admin only):
  GET    /admin/alcohol                              – Grouped, filtered drinks list with category chips
  POST   /admin/alcohol                              – Create an alcohol item
  POST   /admin/alcohol/bulk-availability            – Mark a selection available / unavailable
  GET    /admin/alcohol/{item_id}                    – Get an alcohol item
  PUT    /admin/alcohol/{item_id}                    – Replace an alcohol item (edit form)
  DELETE /admin/alcohol/{item_id}                    – Delete an alcohol item
  PUT    /admin/alcohol/{item_id}/availability       – Set availability
  POST   /admin/alcohol/{item_id}/toggle-availability – Flip availability
"""
from fastapi import APIRouter, Depends, status
import logging

from venue_menu.core.dependencies import db_dependency, menu_filters_dependency, require_admin
from venue_menu.models.user import User
from venue_menu.schemas.menu import AdminAlcoholView
from venue_menu.schemas.menu_item import (
    AvailabilityUpdate,
    BulkAvailabilityRequest,
    BulkAvailabilityResponse,
    AlcoholItemCreate,
    AlcoholItemResponse,
    AlcoholMutationResponse,
    MessageResponse,
)
from venue_menu.services.menu_item_service import AlcoholMenuService, admin_view_payload
from venue_menu.services.menu_view import MenuFilters

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/alcohol", tags=["Admin: Alcohol"])


@router.get(
    "",
    response_model=AdminAlcoholView,
    summary="List alcohol items grouped by category",
)
def alcohol_view(
    filters: MenuFilters = Depends(menu_filters_dependency),
    conn=Depends(db_dependency),
    _: User = Depends(require_admin),
):
    """
    All alcohol items (available or not), filtered by category chip,
    availability and search text, grouped by category in first-seen order.
    """
    logger.info("Admin alcohol view requested")
    service = AlcoholMenuService(conn)
    return admin_view_payload(service.admin_view(filters), service.category_presets)


@router.post(
    "",
    response_model=AlcoholMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an alcohol item",
)
def create_alcohol_item(
    data: AlcoholItemCreate,
    conn=Depends(db_dependency),
    _: User = Depends(require_admin),
):
    logger.info("Create alcohol item requested name=%s", data.name)
    return AlcoholMenuService(conn).create_item(data)


@router.post(
    "/bulk-availability",
    response_model=BulkAvailabilityResponse,
    summary="Set availability for several alcohol items at once",
)
def bulk_alcohol_availability(
    data: BulkAvailabilityRequest,
    conn=Depends(db_dependency),
    _: User = Depends(require_admin),
):
    """All-or-nothing: any unknown id aborts the whole change with 404."""
    logger.info("Bulk alcohol availability requested count=%s", len(data.ids))
    return AlcoholMenuService(conn).set_availability_bulk(data.ids, data.available)


@router.get(
    "/{item_id}",
    response_model=AlcoholItemResponse,
    summary="Get an alcohol item",
)
def get_alcohol_item(
    item_id: int,
    conn=Depends(db_dependency),
    _: User = Depends(require_admin),
):
    return AlcoholMenuService(conn).get_item(item_id)


@router.put(
    "/{item_id}",
    response_model=AlcoholMutationResponse,
    summary="Update an alcohol item",
)
def update_alcohol_item(
    item_id: int,
    data: AlcoholItemCreate,
    conn=Depends(db_dependency),
    _: User = Depends(require_admin),
):
    logger.info("Update alcohol item requested id=%s", item_id)
    return AlcoholMenuService(conn).update_item(item_id, data)


@router.delete(
    "/{item_id}",
    response_model=MessageResponse,
    summary="Delete an alcohol item",
)
def delete_alcohol_item(
    item_id: int,
    conn=Depends(db_dependency),
    _: User = Depends(require_admin),
):
    logger.info("Delete alcohol item requested id=%s", item_id)
    return MessageResponse(message=AlcoholMenuService(conn).delete_item(item_id))


@router.put(
    "/{item_id}/availability",
    response_model=AlcoholMutationResponse,
    summary="Set an alcohol item's availability",
)
def set_alcohol_availability(
    item_id: int,
    data: AvailabilityUpdate,
    conn=Depends(db_dependency),
    _: User = Depends(require_admin),
):
    return AlcoholMenuService(conn).set_availability(item_id, data.available)


@router.post(
    "/{item_id}/toggle-availability",
    response_model=AlcoholMutationResponse,
    summary="Flip an alcohol item's availability",
)
def toggle_alcohol_availability(
    item_id: int,
    conn=Depends(db_dependency),
    _: User = Depends(require_admin),
):
    logger.info("Toggle alcohol availability requested id=%s", item_id)
    return AlcoholMenuService(conn).toggle_availability(item_id)
