"""
Pydantic schemas for the QR code generator.
"""
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from venue_menu.core.config import settings

HEX_COLOR_PATTERN = r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$"


def _default_menu_url() -> str:
    return settings.PUBLIC_BASE_URL.rstrip("/") + "/menu"


class QROptions(BaseModel):
    """Query parameters shared by the SVG and PNG exports."""

    url: str = Field(default_factory=_default_menu_url, max_length=2000)
    fg_color: str = Field("#00F7FF", pattern=HEX_COLOR_PATTERN)
    bg_color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN)
    use_venue_logo: bool = False
    logo_path: Optional[str] = Field(None, max_length=500)
    logo_size: float = Field(0.22, ge=0.12, le=0.35)
    logo_padding: int = Field(8, ge=0, le=24)
    logo_bg_shape: Literal["none", "circle", "square"] = "none"
    logo_bg_color: str = Field("#ffffff", pattern=HEX_COLOR_PATTERN)

    @field_validator("url")
    @classmethod
    def http_url(cls, v: str) -> str:
        v = v.strip()
        if not v.lower().startswith(("http://", "https://")):
            raise ValueError("must be an http(s) URL")
        return v


class QRPresetResponse(BaseModel):
    name: str
    fg: str

    model_config = {"from_attributes": True}
