"""
Central v1 API router – registers all endpoint sub-routers.
"""
from fastapi import APIRouter
import logging

from venue_menu.api.v1.endpoints import (
    admin_alcohol,
    admin_food,
    auth,
    categories,
    promotions,
    public,
    qr,
    uploads,
    venue_settings,
)

logger = logging.getLogger(__name__)

api_router = APIRouter(prefix="/api/v1")

logger.info("Registering v1 API routers")
api_router.include_router(auth.router)
api_router.include_router(admin_food.router)
api_router.include_router(admin_alcohol.router)
api_router.include_router(categories.router)
api_router.include_router(promotions.router)
api_router.include_router(venue_settings.router)
api_router.include_router(uploads.router)
api_router.include_router(qr.router)
api_router.include_router(public.router)
