"""
Public menu endpoints (no auth):
  GET /public/menu      – Available items for the food or drinks view, grouped, with chips,
                          bucket promotions and the venue contact card
  GET /public/menu.pdf  – Printable menu
"""
from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
import logging

from venue_menu.core.config import settings
from venue_menu.core.dependencies import db_dependency, local_store_dependency, menu_filters_dependency
from venue_menu.schemas.menu import PublicMenuResponse
from venue_menu.services.menu_view import MenuFilters, MenuView
from venue_menu.services.pdf_service import MenuPDFService
from venue_menu.services.public_menu_service import PublicMenuService
from venue_menu.services.venue_settings_service import VenueSettingsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/public", tags=["Public Menu"])


@router.get(
    "/menu",
    response_model=PublicMenuResponse,
    summary="Browse the public menu",
)
def public_menu(
    view: MenuView = Query(MenuView.FOOD),
    filters: MenuFilters = Depends(menu_filters_dependency),
    conn=Depends(db_dependency),
    local_store=Depends(local_store_dependency),
):
    """
    Only available items are listed; the `availability` parameter is ignored
    and `diet` only applies to the food view. If one collection fails to
    load the other is still returned and the failure is listed in `errors`.
    """
    logger.info("Public menu requested view=%s", view.value)
    return PublicMenuService(conn, local_store).menu(view, filters)


@router.get(
    "/menu.pdf",
    summary="Download the printable menu",
)
def public_menu_pdf(
    conn=Depends(db_dependency),
    local_store=Depends(local_store_dependency),
):
    logger.info("Public menu PDF requested")
    data = PublicMenuService(conn, local_store).load()
    venue = VenueSettingsService(conn, local_store).get().value
    pdf_buffer = MenuPDFService(settings.CURRENCY_SYMBOL).generate_menu(data.food, data.alcohol, venue)
    return StreamingResponse(
        pdf_buffer,
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="menu.pdf"'},
    )
