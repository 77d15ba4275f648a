"""
Error translation for record store failures and the global 500 handler.
"""
from contextlib import contextmanager
import logging
import sqlite3

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class StoreUnavailableError(HTTPException):
    """A record store call failed while performing *action*."""

    def __init__(self, action: str) -> None:
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Failed to {action}",
        )
        self.action = action


@contextmanager
def store_errors(action: str):
    """Convert sqlite errors raised inside the block into a 503 naming *action*."""
    try:
        yield
    except sqlite3.Error as exc:
        logger.error("Record store error while trying to %s", action, exc_info=True)
        raise StoreUnavailableError(action) from exc


async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception on %s", request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )
