"""Record store connection helpers and initialization."""

import logging
import os
import sqlite3
from contextlib import contextmanager

from venue_menu.core.config import settings

logger = logging.getLogger(__name__)


def database_path() -> str:
    """Return the SQLite file path from DATABASE_URL (strips "sqlite:///")."""
    return settings.DATABASE_URL.replace("sqlite:///", "")


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection with row factory."""
    path = database_path()
    db_dir = os.path.dirname(path)
    if db_dir:
        os.makedirs(db_dir, exist_ok=True)
    logger.trace("Opening database connection to %s", path)
    conn = sqlite3.connect(path, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def get_db():
    """Context manager that yields a database connection and auto-commits/rolls back."""
    conn = get_connection()
    try:
        yield conn
        conn.commit()
        logger.trace("Database transaction committed")
    except Exception:
        logger.warning("Database transaction rolled back", exc_info=True)
        conn.rollback()
        raise
    finally:
        conn.close()
        logger.trace("Database connection closed")


def init_db() -> None:
    """Initialize the database by creating all tables."""
    logger.info("Initializing database schema at %s", database_path())
    from venue_menu.db import schema
    schema.create_tables()
