"""
Application entry point.
Run with:  uvicorn venue_menu.main:app --reload

⚠️  DEVELOPMENT NOTE:
    A default admin user is seeded automatically on startup (see venue_menu/db/seeder.py).
    Set SEED_ADMIN=false before deploying to production.
"""
import logging
import os

from fastapi import FastAPI

from venue_menu.core.logging_config import configure_logging
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from venue_menu.core.config import settings
from venue_menu.core.exceptions import global_exception_handler
from venue_menu.api.v1.router import api_router
from venue_menu.db.database import init_db
from venue_menu.db.local_store import LocalStore
from venue_menu.db.seeder import seed_admin, seed_demo_menu
from venue_menu.services.storage_service import MediaStorage

configure_logging()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance."""
    logger = logging.getLogger(__name__)
    logger.info("Starting FastAPI application setup")
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description=(
            "Backend API for a digital restaurant and bar menu: public menu "
            "browsing, admin menu management, promotions, venue settings and "
            "QR code export."
        ),
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # ── Shared handles ──────────────────────────────────────────────────────
    app.state.local_store = LocalStore(settings.LOCAL_STORE_PATH)
    app.state.media_storage = MediaStorage(
        settings.MEDIA_ROOT,
        settings.PUBLIC_BASE_URL.rstrip("/") + settings.MEDIA_URL,
    )

    # ── Middleware ──────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(Exception, global_exception_handler)

    # ── Routers ─────────────────────────────────────────────────────────────
    app.include_router(api_router)
    os.makedirs(settings.MEDIA_ROOT, exist_ok=True)
    app.mount(
        settings.MEDIA_URL.rstrip("/"),
        StaticFiles(directory=settings.MEDIA_ROOT),
        name="media",
    )

    # ── Startup / shutdown events ───────────────────────────────────────────
    @app.on_event("startup")
    def on_startup() -> None:
        """Initialize the database and development seed data."""
        logger.info("Initializing database and seed data")
        init_db()
        # ⚠️ DEV ONLY – disable these seeders in production
        if settings.SEED_ADMIN:
            seed_admin()
        if settings.SEED_DEMO_MENU:
            seed_demo_menu()

    return app


app = create_app()
