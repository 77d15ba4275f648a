"""
Pydantic schemas for token request/response validation.
"""
from pydantic import BaseModel


class Token(BaseModel):
    """Returned after a successful sign-in."""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class AccessToken(BaseModel):
    access_token: str
    token_type: str = "bearer"


class RefreshTokenRequest(BaseModel):
    refresh_token: str
