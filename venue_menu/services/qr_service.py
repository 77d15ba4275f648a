"""
QR code export for the public menu link.

The `qrcode` library builds and draws the code: SvgPathImage for SVG
output and the default Pillow image for PNG output, scaled onto a fixed
1024x1024 canvas. Only the optional centre logo (with its background
shape) is drawn here. A logo raises the error correction level to H so
the covered modules stay recoverable.
"""
import base64
from dataclasses import dataclass
from io import BytesIO
import logging
from typing import Optional
import xml.etree.ElementTree as ET

import qrcode
from qrcode.constants import ERROR_CORRECT_H, ERROR_CORRECT_M
from qrcode.image.svg import SvgPathImage
from fastapi import HTTPException, status
from PIL import Image, ImageColor, ImageDraw, UnidentifiedImageError

from venue_menu.schemas.qr import QROptions

logger = logging.getLogger(__name__)

SVG_SIZE = 360
PNG_SIZE = 1024
PNG_BACKGROUND = "#0b0e11"
QUIET_ZONE = 4


@dataclass(frozen=True)
class QRPreset:
    name: str
    fg: str


QR_PRESETS = (
    QRPreset("Neon Cyan", "#00F7FF"),
    QRPreset("Electric Purple", "#A855F7"),
    QRPreset("Lime Glow", "#84CC16"),
    QRPreset("Hot Pink", "#F472B6"),
)


@dataclass(frozen=True)
class Logo:
    content: bytes
    content_type: str

    def data_url(self) -> str:
        encoded = base64.b64encode(self.content).decode("ascii")
        return f"data:{self.content_type};base64,{encoded}"


class QRService:
    def __init__(self, options: QROptions, logo: Optional[Logo] = None) -> None:
        self._options = options
        self._logo = logo

    def _code(self, box_size: int = 1) -> qrcode.QRCode:
        qr = qrcode.QRCode(
            error_correction=ERROR_CORRECT_H if self._logo else ERROR_CORRECT_M,
            box_size=box_size,
            border=QUIET_ZONE,
        )
        qr.add_data(self._options.url)
        qr.make(fit=True)
        logger.info("QR version %s for %s", qr.version, self._options.url)
        return qr

    def matrix(self) -> list[list[bool]]:
        """Module matrix including the quiet zone."""
        return self._code().get_matrix()

    def _logo_box(self, size: int, scale: float = 1.0) -> tuple[int, int, int]:
        """Logo edge length, top-left offset and padding in output pixels."""
        logo_px = round(size * self._options.logo_size)
        offset = round(size / 2 - logo_px / 2)
        padding = round(self._options.logo_padding * scale)
        return logo_px, offset, padding

    # ------------------------------------------------------------------
    # SVG
    # ------------------------------------------------------------------

    def render_svg(self) -> str:
        opts = self._options
        img = self._code().make_image(image_factory=SvgPathImage)
        img.path.set("fill", opts.fg_color)
        img.path.set("shape-rendering", "crispEdges")

        svg = img.get_image()
        # overlay coordinates are laid out on a SVG_SIZE grid
        extent = float(svg.get("viewBox").split()[2])
        svg.set("width", str(SVG_SIZE))
        svg.set("height", str(SVG_SIZE))
        if opts.bg_color:
            svg.insert(0, ET.Element("rect", width="100%", height="100%", fill=opts.bg_color))
        if self._logo:
            svg.append(self._svg_logo_overlay(scale=extent / SVG_SIZE))
        return img.to_string(encoding="unicode")

    def _svg_logo_overlay(self, scale: float) -> ET.Element:
        opts = self._options
        logo_px, offset, padding = self._logo_box(SVG_SIZE)
        center = SVG_SIZE / 2
        group = ET.Element("g", id="qr-logo-overlay", transform=f"scale({scale:.6f})")
        match opts.logo_bg_shape:
            case "circle":
                ET.SubElement(
                    group, "circle",
                    cx=f"{center:g}", cy=f"{center:g}", r=str(round(logo_px / 2 + padding)),
                    fill=opts.logo_bg_color,
                )
            case "square":
                w = str(logo_px + padding * 2)
                ET.SubElement(
                    group, "rect",
                    x=str(offset - padding), y=str(offset - padding), width=w, height=w,
                    rx="10", fill=opts.logo_bg_color,
                )
        ET.SubElement(
            group, "image",
            href=self._logo.data_url(),
            x=str(offset), y=str(offset), width=str(logo_px), height=str(logo_px),
            preserveAspectRatio="xMidYMid meet",
        )
        return group

    # ------------------------------------------------------------------
    # PNG
    # ------------------------------------------------------------------

    def render_png(self) -> bytes:
        opts = self._options
        qr = self._code()
        qr.box_size = max(1, PNG_SIZE // (qr.modules_count + QUIET_ZONE * 2))
        image = (
            qr.make_image(fill_color=opts.fg_color, back_color=opts.bg_color or PNG_BACKGROUND)
            .get_image()
            .convert("RGBA")
            .resize((PNG_SIZE, PNG_SIZE), Image.NEAREST)
        )
        if self._logo:
            self._paste_logo(image)

        buffer = BytesIO()
        image.save(buffer, format="PNG")
        logger.info("QR PNG rendered (%s bytes)", buffer.tell())
        return buffer.getvalue()

    def _paste_logo(self, image: Image.Image) -> None:
        opts = self._options
        logo_px, offset, padding = self._logo_box(PNG_SIZE, scale=PNG_SIZE / SVG_SIZE)
        draw = ImageDraw.Draw(image)
        bg = ImageColor.getrgb(opts.logo_bg_color)
        match opts.logo_bg_shape:
            case "circle":
                r = round(logo_px / 2 + padding)
                c = PNG_SIZE // 2
                draw.ellipse([c - r, c - r, c + r, c + r], fill=bg)
            case "square":
                draw.rounded_rectangle(
                    [offset - padding, offset - padding, offset + logo_px + padding, offset + logo_px + padding],
                    radius=round(10 * PNG_SIZE / SVG_SIZE),
                    fill=bg,
                )
        try:
            logo = Image.open(BytesIO(self._logo.content)).convert("RGBA")
        except (UnidentifiedImageError, OSError) as exc:
            logger.warning("Logo could not be decoded for PNG export", exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="Logo cannot be rendered into a PNG (use a PNG, JPEG, GIF or WebP logo)",
            ) from exc
        logo.thumbnail((logo_px, logo_px))
        x = offset + (logo_px - logo.width) // 2
        y = offset + (logo_px - logo.height) // 2
        image.paste(logo, (x, y), logo)
