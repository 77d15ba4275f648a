"""
Authentication service: sign-up, sign-in, token refresh, sign-out and
password reset.
"""
import sqlite3
from datetime import datetime, timedelta, timezone
import logging

from fastapi import HTTPException, status
from jose import JWTError

from venue_menu.core.config import settings
from venue_menu.core.security import (
    create_access_token,
    create_password_reset_token,
    create_refresh_token,
    decode_token,
    hash_password,
    password_fingerprint,
    verify_password,
)
from venue_menu.models.user import User, UserRole
from venue_menu.repositories.session_repository import SessionRepository
from venue_menu.repositories.user_repository import UserRepository
from venue_menu.schemas.token import AccessToken, Token
from venue_menu.schemas.user import PasswordResetConfirm, SignUpRequest
from venue_menu.services.email_service import send_password_reset_email

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, conn: sqlite3.Connection) -> None:
        logger.trace("Initializing AuthService")
        self._user_repo = UserRepository(conn)
        self._session_repo = SessionRepository(conn)

    # ------------------------------------------------------------------
    # Sign-up
    # ------------------------------------------------------------------

    def sign_up(self, data: SignUpRequest) -> User:
        """Create a member account; admin roles are only granted out of band."""
        logger.info("Sign-up requested username=%s", data.username)
        if self._user_repo.get_by_email(data.email) or self._user_repo.get_by_username(data.username):
            logger.warning("Sign-up rejected, account exists username=%s", data.username)
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="An account with this email or username already exists",
            )
        user = self._user_repo.create(
            email=data.email,
            username=data.username,
            hashed_password=hash_password(data.password),
            role=UserRole.MEMBER,
            full_name=data.full_name,
        )
        logger.info("Account created id=%s", user.id)
        return user

    # ------------------------------------------------------------------
    # Sign-in
    # ------------------------------------------------------------------

    def login(self, username: str, password: str) -> Token:
        """
        Validate credentials and open a session.
        Accepts either username or email in the *username* field.
        """
        logger.info("Authenticating user '%s'", username)
        user = (
            self._user_repo.get_by_username(username)
            or self._user_repo.get_by_email(username)
        )

        if not user or not verify_password(password, user.hashed_password):
            logger.warning("Invalid login attempt for '%s'", username)
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Incorrect username or password",
                headers={"WWW-Authenticate": "Bearer"},
            )

        if not user.is_active:
            logger.warning("Inactive user attempted login id=%s", user.id)
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Inactive user account",
            )

        access_token = create_access_token(user.id, user.role.value)
        refresh_token = create_refresh_token(user.id, user.role.value)
        expires_at = datetime.now(tz=timezone.utc) + timedelta(
            days=settings.REFRESH_TOKEN_EXPIRE_DAYS
        )
        self._session_repo.create(user.id, refresh_token, expires_at)
        logger.info("Login successful for user id=%s", user.id)
        return Token(access_token=access_token, refresh_token=refresh_token)

    def refresh(self, refresh_token: str) -> AccessToken:
        """Exchange a live session's refresh token for a new access token."""
        invalid_exc = HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired refresh token",
        )
        try:
            payload = decode_token(refresh_token)
        except JWTError:
            logger.warning("Refresh token decode failed")
            raise invalid_exc
        if payload.get("type") != "refresh":
            logger.warning("Refresh token type mismatch")
            raise invalid_exc

        session = self._session_repo.get_by_refresh_token(refresh_token)
        if session is None or session.revoked or session.is_expired():
            logger.warning("Session revoked, expired or missing")
            raise invalid_exc

        user = self._user_repo.get_by_id(session.user_id)
        if user is None or not user.is_active:
            logger.warning("Session user not found or inactive")
            raise invalid_exc

        return AccessToken(access_token=create_access_token(user.id, user.role.value))

    def logout(self, refresh_token: str) -> None:
        """Sign out by revoking the session behind *refresh_token*."""
        revoked = self._session_repo.revoke(refresh_token)
        logger.info("Session revoked=%s", revoked)

    # ------------------------------------------------------------------
    # Password reset
    # ------------------------------------------------------------------

    def request_password_reset(self, email: str) -> None:
        """
        Email a reset link when the address belongs to an active account.
        Unknown addresses are ignored silently so accounts cannot be probed.
        """
        user = self._user_repo.get_by_email(email)
        if user is None or not user.is_active:
            logger.info("Password reset requested for unknown or inactive email")
            return
        token = create_password_reset_token(user.id, user.role.value, user.hashed_password)
        link = f"{settings.PUBLIC_BASE_URL.rstrip('/')}/auth/reset-password?token={token}"
        send_password_reset_email(user.email, link)

    def confirm_password_reset(self, data: PasswordResetConfirm) -> None:
        invalid_exc = HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid or expired password reset token",
        )
        try:
            payload = decode_token(data.token)
        except JWTError:
            logger.warning("Password reset token decode failed")
            raise invalid_exc
        if payload.get("type") != "reset" or payload.get("sub") is None:
            raise invalid_exc

        user = self._user_repo.get_by_id(int(payload["sub"]))
        if user is None or not user.is_active:
            raise invalid_exc
        # a token is spent once the password it was issued against changes
        if payload.get("pwd") != password_fingerprint(user.hashed_password):
            logger.warning("Password reset token already used for user id=%s", user.id)
            raise invalid_exc

        self._user_repo.set_password(user.id, hash_password(data.new_password))
        self._session_repo.revoke_all_for_user(user.id)
        logger.info("Password reset completed for user id=%s", user.id)
