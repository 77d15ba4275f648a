"""
Promotion endpoints:
  GET /admin/promotions                 – Preset promotions grouped by category with active flags
  PUT /admin/promotions/{key}/active    – Activate or stop a promotion
  GET /public/promotions                – Active promotions (no auth)
"""
from fastapi import APIRouter, Depends
import logging

from venue_menu.core.dependencies import db_dependency, local_store_dependency, require_admin
from venue_menu.models.user import User
from venue_menu.schemas.promotion import (
    PromotionActivation,
    PromotionActivationResponse,
    PromotionGroup,
    PromotionListResponse,
    PromotionResponse,
)
from venue_menu.services.promotion_service import PromotionService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Promotions"])


@router.get(
    "/admin/promotions",
    response_model=PromotionListResponse,
    summary="List promotions grouped by category",
)
def list_promotions(
    conn=Depends(db_dependency),
    local_store=Depends(local_store_dependency),
    _: User = Depends(require_admin),
):
    """
    Every preset promotion with its active flag. `source` tells whether the
    flags came from the record store, the local fallback, or the defaults.
    """
    logger.info("Admin promotions list requested")
    listing = PromotionService(conn, local_store).list_promotions()
    return PromotionListResponse(
        source=listing.source,
        groups=[
            PromotionGroup(
                category=category,
                promotions=[PromotionResponse.model_validate(p) for p in promotions],
            )
            for category, promotions in listing.grouped()
        ],
    )


@router.put(
    "/admin/promotions/{key}/active",
    response_model=PromotionActivationResponse,
    summary="Activate or stop a promotion",
)
def set_promotion_active(
    key: str,
    body: PromotionActivation,
    conn=Depends(db_dependency),
    local_store=Depends(local_store_dependency),
    _: User = Depends(require_admin),
):
    """
    Idempotent. When the record store cannot be written the change is kept
    locally, `persisted` is `"local"` and the message says so.
    """
    logger.info("Promotion %s active=%s requested", key, body.active)
    return PromotionService(conn, local_store).set_active(key, body.active)


@router.get(
    "/public/promotions",
    response_model=list[PromotionResponse],
    summary="List active promotions",
)
def list_active_promotions(
    conn=Depends(db_dependency),
    local_store=Depends(local_store_dependency),
):
    logger.info("Public promotions requested")
    return PromotionService(conn, local_store).active_promotions()
