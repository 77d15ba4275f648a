"""
Authentication endpoints:
  POST /auth/sign-up                 – Create a member account
  POST /auth/login                   – OAuth2 password flow, returns access + refresh tokens
  POST /auth/refresh                 – Exchange a valid refresh token for a new access token
  POST /auth/logout                  – Sign out (revoke the provided refresh token)
  GET  /auth/session                 – Current user and whether they may use the admin panel
  POST /auth/password-reset          – Email a password reset link
  POST /auth/password-reset/confirm  – Set a new password with a reset token
"""
from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
import logging

from venue_menu.core.dependencies import db_dependency, get_current_user
from venue_menu.models.user import User
from venue_menu.schemas.menu_item import MessageResponse
from venue_menu.schemas.token import Token, AccessToken, RefreshTokenRequest
from venue_menu.schemas.user import (
    PasswordResetConfirm,
    PasswordResetRequest,
    SessionResponse,
    SignUpRequest,
    UserResponse,
)
from venue_menu.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/sign-up",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a member account",
)
def sign_up(
    data: SignUpRequest,
    conn=Depends(db_dependency),
):
    """Register with email, username and password. New accounts are members."""
    logger.info("Sign-up requested for username=%s", data.username)
    service = AuthService(conn)
    return service.sign_up(data)


@router.post(
    "/login",
    response_model=Token,
    summary="Login with username/email and password (OAuth2 Password Flow)",
)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    conn=Depends(db_dependency),
):
    """
    Standard OAuth2 Password Flow endpoint.
    - **username**: your username *or* email address
    - **password**: your password
    """
    logger.info("Login requested for username=%s", form_data.username)
    service = AuthService(conn)
    return service.login(form_data.username, form_data.password)


@router.post(
    "/refresh",
    response_model=AccessToken,
    summary="Obtain a new access token using a valid refresh token",
)
def refresh_token(
    body: RefreshTokenRequest,
    conn=Depends(db_dependency),
):
    logger.info("Refreshing access token")
    service = AuthService(conn)
    return service.refresh(body.refresh_token)


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Sign out",
)
def logout(
    body: RefreshTokenRequest,
    conn=Depends(db_dependency),
    _: User = Depends(get_current_user),
):
    """Revoke the supplied **refresh token**, ending that session."""
    logger.info("Logout requested")
    service = AuthService(conn)
    service.logout(body.refresh_token)


@router.get(
    "/session",
    response_model=SessionResponse,
    summary="Get the current session's user and role",
)
def get_session(current_user: User = Depends(get_current_user)):
    logger.info("Returning session for user id=%s", current_user.id)
    return SessionResponse(
        user=UserResponse.model_validate(current_user),
        is_admin=current_user.is_admin,
    )


@router.post(
    "/password-reset",
    response_model=MessageResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Request a password reset link",
)
def request_password_reset(
    body: PasswordResetRequest,
    conn=Depends(db_dependency),
):
    """Always accepted, whether or not the email belongs to an account."""
    logger.info("Password reset link requested")
    service = AuthService(conn)
    service.request_password_reset(body.email)
    return MessageResponse(message="If the email is registered, a reset link has been sent")


@router.post(
    "/password-reset/confirm",
    response_model=MessageResponse,
    summary="Set a new password using a reset token",
)
def confirm_password_reset(
    body: PasswordResetConfirm,
    conn=Depends(db_dependency),
):
    logger.info("Password reset confirmation received")
    service = AuthService(conn)
    service.confirm_password_reset(body)
    return MessageResponse(message="Password updated successfully")
