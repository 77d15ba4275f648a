"""
Pydantic schemas for the venue settings form and the public contact card.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

_URL_FIELDS = (
    "logo_url",
    "instagram_url",
    "facebook_url",
    "website_url",
    "google_maps_url",
    "embed_url",
)


class VenueSettingsUpdate(BaseModel):
    """Whole settings form; blank strings are stored as absent."""

    bar_name: Optional[str] = Field(None, max_length=200)
    logo_url: Optional[str] = Field(None, max_length=1000)
    instagram_url: Optional[str] = Field(None, max_length=500)
    facebook_url: Optional[str] = Field(None, max_length=500)
    website_url: Optional[str] = Field(None, max_length=500)
    address: Optional[str] = Field(None, max_length=500)
    phone: Optional[str] = Field(None, max_length=50)
    email: Optional[EmailStr] = None
    hours: Optional[str] = Field(None, max_length=500)
    google_maps_url: Optional[str] = Field(None, max_length=1000)
    embed_url: Optional[str] = Field(None, max_length=2000)
    show_map_embed: bool = False

    @field_validator("*", mode="before")
    @classmethod
    def blank_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip() if isinstance(v, str) else v

    @field_validator(*_URL_FIELDS)
    @classmethod
    def http_url(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.lower().startswith(("http://", "https://", "/")):
            raise ValueError("must be an http(s) URL")
        return v


class VenueSettingsResponse(VenueSettingsUpdate):
    id: str
    updated_at: Optional[datetime]
    source: str = "remote"

    model_config = {"from_attributes": True}


class VenueSettingsSaveResponse(BaseModel):
    message: str
    settings: VenueSettingsResponse


class VenueContactCard(BaseModel):
    bar_name: Optional[str] = None
    logo_url: Optional[str] = None
    instagram_url: Optional[str] = None
    facebook_url: Optional[str] = None
    website_url: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    hours: Optional[str] = None
    google_maps_url: Optional[str] = None
    # only set when the venue enabled the map embed
    embed_url: Optional[str] = None

    model_config = {"from_attributes": True}
