"""
Venue settings endpoints:
  GET /admin/settings   – Current venue settings (record store, local copy or empty)
  PUT /admin/settings   – Save every settings field
  GET /public/venue     – Public contact card
"""
from fastapi import APIRouter, Depends
import logging

from venue_menu.core.dependencies import db_dependency, local_store_dependency, require_admin
from venue_menu.models.user import User
from venue_menu.schemas.venue_settings import (
    VenueContactCard,
    VenueSettingsResponse,
    VenueSettingsSaveResponse,
    VenueSettingsUpdate,
)
from venue_menu.services.venue_settings_service import VenueSettingsService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Venue Settings"])


@router.get(
    "/admin/settings",
    response_model=VenueSettingsResponse,
    summary="Get venue settings",
)
def get_settings(
    conn=Depends(db_dependency),
    local_store=Depends(local_store_dependency),
    _: User = Depends(require_admin),
):
    logger.info("Admin venue settings requested")
    tiered = VenueSettingsService(conn, local_store).get()
    return VenueSettingsResponse(**tiered.value.to_dict(), source=tiered.source)


@router.put(
    "/admin/settings",
    response_model=VenueSettingsSaveResponse,
    summary="Save venue settings",
)
def save_settings(
    data: VenueSettingsUpdate,
    conn=Depends(db_dependency),
    local_store=Depends(local_store_dependency),
    _: User = Depends(require_admin),
):
    """Overwrites the whole record; blank fields are stored as empty."""
    logger.info("Save venue settings requested")
    venue = VenueSettingsService(conn, local_store).save(data)
    return VenueSettingsSaveResponse(
        message="Settings saved successfully",
        settings=VenueSettingsResponse(**venue.to_dict()),
    )


@router.get(
    "/public/venue",
    response_model=VenueContactCard,
    summary="Get the venue contact card",
)
def get_contact_card(
    conn=Depends(db_dependency),
    local_store=Depends(local_store_dependency),
):
    logger.info("Public venue contact card requested")
    return VenueSettingsService(conn, local_store).contact_card()
