"""
QR code endpoints (admin only):
  GET /admin/qr/presets – Colour presets
  GET /admin/qr.svg     – QR code linking to the public menu as SVG
  GET /admin/qr.png     – Same code as a 1024x1024 PNG
"""
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import Response
import logging

from venue_menu.core.dependencies import (
    db_dependency,
    local_store_dependency,
    media_storage_dependency,
    require_admin,
)
from venue_menu.models.user import User
from venue_menu.schemas.qr import QROptions, QRPresetResponse
from venue_menu.services.qr_service import QR_PRESETS, Logo, QRService
from venue_menu.services.storage_service import MediaStorage
from venue_menu.services.venue_settings_service import VenueSettingsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin: QR"])


def _resolve_logo(
    options: QROptions,
    storage: MediaStorage,
    conn,
    local_store,
) -> Optional[Logo]:
    """Logo bytes from an explicit media path or from the venue's stored logo."""
    path = options.logo_path
    if path is None and options.use_venue_logo:
        logo_url = VenueSettingsService(conn, local_store).get().value.logo_url
        path = storage.path_from_url(logo_url)
        if path is None:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="The venue has no uploaded logo",
            )
    if path is None:
        return None
    content, content_type = storage.read(path)
    if not content_type.startswith("image/"):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Logo must be an image file",
        )
    return Logo(content=content, content_type=content_type)


@router.get(
    "/qr/presets",
    response_model=list[QRPresetResponse],
    summary="List QR colour presets",
)
def list_qr_presets(_: User = Depends(require_admin)):
    return [QRPresetResponse.model_validate(p) for p in QR_PRESETS]


@router.get(
    "/qr.svg",
    summary="Export the menu QR code as SVG",
    response_class=Response,
)
def export_qr_svg(
    options: Annotated[QROptions, Query()],
    storage: MediaStorage = Depends(media_storage_dependency),
    conn=Depends(db_dependency),
    local_store=Depends(local_store_dependency),
    _: User = Depends(require_admin),
):
    logger.info("QR SVG export requested url=%s", options.url)
    logo = _resolve_logo(options, storage, conn, local_store)
    svg = QRService(options, logo).render_svg()
    return Response(
        content=svg,
        media_type="image/svg+xml",
        headers={"Content-Disposition": 'attachment; filename="menu-qr.svg"'},
    )


@router.get(
    "/qr.png",
    summary="Export the menu QR code as PNG",
    response_class=Response,
)
def export_qr_png(
    options: Annotated[QROptions, Query()],
    storage: MediaStorage = Depends(media_storage_dependency),
    conn=Depends(db_dependency),
    local_store=Depends(local_store_dependency),
    _: User = Depends(require_admin),
):
    logger.info("QR PNG export requested url=%s", options.url)
    logo = _resolve_logo(options, storage, conn, local_store)
    png = QRService(options, logo).render_png()
    return Response(
        content=png,
        media_type="image/png",
        headers={"Content-Disposition": 'attachment; filename="menu-qr.png"'},
    )
