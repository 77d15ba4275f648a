"""Application configuration loaded via pydantic settings."""

from typing import List
import secrets

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Strongly-typed application settings with environment overrides."""

    # Application
    APP_NAME: str = "Venue Menu"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False

    # Security
    SECRET_KEY: str = secrets.token_urlsafe(32)
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 15
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7
    PASSWORD_RESET_EXPIRE_MINUTES: int = 30

    # Record store
    DATABASE_URL: str = "sqlite:///./venue_menu/venue_menu.db"

    # Local fallback store (venue settings, active promotion keys)
    LOCAL_STORE_PATH: str = "./venue_menu/local_store.json"

    # File storage
    MEDIA_ROOT: str = "./venue_menu/media"
    MEDIA_URL: str = "/media/"
    MAX_UPLOAD_BYTES: int = 2 * 1024 * 1024

    # Public site
    PUBLIC_BASE_URL: str = "http://localhost:8000"
    CURRENCY_SYMBOL: str = "₹"
    SEARCH_DEBOUNCE_SECONDS: float = 0.25

    # Mail (password reset). Empty SMTP_HOST logs the reset link instead.
    SMTP_HOST: str = ""
    SMTP_PORT: int = 587
    SMTP_USER: str = ""
    SMTP_PASSWORD: str = ""
    FROM_EMAIL: str = "no-reply@example.com"

    # Development seed data
    SEED_ADMIN: bool = True
    SEED_DEMO_MENU: bool = False
    ADMIN_USERNAME: str = "admin"
    ADMIN_EMAIL: str = "admin@example.com"
    ADMIN_PASSWORD: str = "Admin1234!"

    # CORS
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_LEVELS: str = "TRACE,ERROR,WARNING,INFO"
    LOG_FILE_PATH: str = "./venue_menu/logs/app.log"

    class Config:
        """Configure environment file loading behavior."""

        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


settings = Settings()
