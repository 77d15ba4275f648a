"""
FastAPI dependency injection helpers: record store connection, local store,
media storage, and the authentication / admin guards.
"""
from typing import Generator

from fastapi import Depends, HTTPException, Query, Request, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
import logging

from venue_menu.core.security import decode_token
from venue_menu.db.database import get_db
from venue_menu.db.local_store import LocalStore
from venue_menu.models.user import User, UserRole
from venue_menu.repositories.user_repository import UserRepository
from venue_menu.services.menu_view import ALL_CATEGORIES, Availability, Diet, MenuFilters
from venue_menu.services.storage_service import MediaStorage

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")


# ---------------------------------------------------------------------------
# Store dependencies
# ---------------------------------------------------------------------------

def db_dependency() -> Generator:
    """Yield a database connection for the duration of a request."""
    with get_db() as conn:
        yield conn


def local_store_dependency(request: Request) -> LocalStore:
    """Return the local fallback store constructed by the application factory."""
    return request.app.state.local_store


def media_storage_dependency(request: Request) -> MediaStorage:
    """Return the media storage handle constructed by the application factory."""
    return request.app.state.media_storage


# ---------------------------------------------------------------------------
# Auth dependencies
# ---------------------------------------------------------------------------

def get_current_user(
    token: str = Depends(oauth2_scheme),
    conn=Depends(db_dependency),
) -> User:
    """
    Decode the Bearer access token and return the corresponding active User.
    Raises HTTP 401 if the token is invalid, expired, or the user is unknown
    or deactivated.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = decode_token(token)
    except JWTError:
        logger.warning("Failed to decode access token")
        raise credentials_exception
    if payload.get("type") != "access" or payload.get("sub") is None:
        logger.warning("Access token type or subject invalid")
        raise credentials_exception

    user = UserRepository(conn).get_by_id(int(payload["sub"]))
    if user is None or not user.is_active:
        logger.warning("User not found or inactive for token subject")
        raise credentials_exception
    return user


def require_roles(*roles: UserRole):
    """
    Factory that returns a dependency which enforces that the current user
    has one of the specified roles.
    """
    def _check(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in roles:
            logger.warning(
                "User id=%s lacks required roles: %s",
                current_user.id,
                ", ".join(role.value for role in roles),
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You don't have admin privileges",
            )
        return current_user
    return _check


require_admin = require_roles(UserRole.ADMIN)


# ---------------------------------------------------------------------------
# Menu view query parameters
# ---------------------------------------------------------------------------

def menu_filters_dependency(
    category: str = Query(ALL_CATEGORIES, max_length=100),
    diet: Diet = Query(Diet.ALL),
    availability: Availability = Query(Availability.ALL),
    q: str = Query("", max_length=200, description="Search text (name or tag)"),
) -> MenuFilters:
    return MenuFilters(category=category, diet=diet, availability=availability, query=q)
