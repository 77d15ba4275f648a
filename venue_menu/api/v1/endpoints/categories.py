"""
Category preset endpoint:
  GET /admin/categories – Preset category names offered by the food and alcohol forms
"""
from fastapi import APIRouter, Depends
import logging

from venue_menu.core.dependencies import require_admin
from venue_menu.models.menu_item import ALCOHOL_CATEGORY_PRESETS, FOOD_CATEGORY_PRESETS
from venue_menu.models.user import User
from venue_menu.schemas.menu_item import CategoryPresetsResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/categories", tags=["Admin: Categories"])


@router.get(
    "",
    response_model=CategoryPresetsResponse,
    summary="List preset categories",
)
def list_category_presets(_: User = Depends(require_admin)):
    logger.info("Listing category presets")
    return CategoryPresetsResponse(
        food=list(FOOD_CATEGORY_PRESETS),
        alcohol=list(ALCOHOL_CATEGORY_PRESETS),
    )
