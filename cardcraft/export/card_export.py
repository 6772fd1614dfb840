"""
Business card image export.

Cards are drawn with Pillow and saved as PNG. Export is best effort:
a failure is logged and the caller gets None back.
"""
import asyncio
import base64
import binascii
import io
import logging
from pathlib import Path
from typing import Optional, Tuple

from PIL import Image, ImageDraw, ImageFont, UnidentifiedImageError

from ..personal.models import PersonalData, ProfessionalData
from ..storage.models import CardTemplate

logger = logging.getLogger(__name__)

SIDES = ("front", "back")

# Card size in layout pixels, multiplied by the rasterizer scale
CARD_WIDTH = 384
CARD_HEIGHT = 224
PADDING = 24
AVATAR_SIZE = 64
LOGO_SIZE = 48
BOTH_SIDES_DELAY = 0.5

TEXT_COLOR = (255, 255, 255)
MUTED_TEXT_COLOR = (219, 234, 254)

def export_filename(side: str, name: Optional[str] = None) -> str:
    """Suggested download name, e.g. business-card-front-Jane Doe.png."""
    label = (name or "card").replace("/", "_").replace("\\", "_")
    return f"business-card-{side}-{label}.png"

def _hex_to_rgb(value: str) -> Tuple[int, int, int]:
    value = value.lstrip("#")
    return tuple(int(value[i:i + 2], 16) for i in (0, 2, 4))

def _decode_data_uri(uri: Optional[str]) -> Optional[Image.Image]:
    """Decode a base64 image data URI; anything unreadable gives None."""
    if not uri or not uri.startswith("data:") or "," not in uri:
        return None
    header, payload = uri.split(",", 1)
    if ";base64" not in header:
        return None
    try:
        return Image.open(io.BytesIO(base64.b64decode(payload))).convert("RGBA")
    except (binascii.Error, ValueError, UnidentifiedImageError, OSError):
        logger.debug("Ignoring unreadable image data URI")
        return None

class CardRasterizer:
    """Draws either side of a business card into PNG bytes."""

    def __init__(self, scale: int = 2):
        self.scale = scale
        self.width = CARD_WIDTH * scale
        self.height = CARD_HEIGHT * scale

    def _font(self, size: int) -> ImageFont.ImageFont:
        return ImageFont.load_default(size=size * self.scale)

    def _background(self, template: CardTemplate) -> Image.Image:
        """Diagonal two-color gradient of the template."""
        start, end = (_hex_to_rgb(c) for c in CardTemplate(template).style.gradient)
        card = Image.new("RGBA", (self.width, self.height))
        draw = ImageDraw.Draw(card)
        span = self.width + self.height
        for offset in range(span):
            t = offset / (span - 1)
            color = tuple(int(start[i] + (end[i] - start[i]) * t) for i in range(3))
            draw.line([(offset, 0), (offset - self.height, self.height)], fill=color, width=2)
        return card

    def _text_centered(self, draw: ImageDraw.ImageDraw, center: Tuple[int, int], text: str, font):
        left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
        x = center[0] - (right - left) // 2 - left
        y = center[1] - (bottom - top) // 2 - top
        draw.text((x, y), text, font=font, fill=TEXT_COLOR)

    def _paste_circle(self, card: Image.Image, image: Image.Image, box: Tuple[int, int], size: int):
        image = image.resize((size, size), Image.Resampling.LANCZOS)
        mask = Image.new("L", (size, size), 0)
        ImageDraw.Draw(mask).ellipse((0, 0, size - 1, size - 1), fill=255)
        card.paste(image, box, mask)

    def render(
        self,
        side: str,
        template: CardTemplate,
        personal: Optional[PersonalData],
        professional: Optional[ProfessionalData]
    ) -> bytes:
        """Render one side and return it PNG-encoded."""
        if side not in SIDES:
            raise ValueError(f"Unknown card side: {side}")
        personal = personal or PersonalData()
        professional = professional or ProfessionalData()

        card = self._background(template)
        if side == "front":
            self._draw_front(card, personal, professional)
        else:
            self._draw_back(card, personal, professional)

        buffer = io.BytesIO()
        card.save(buffer, format="PNG")
        return buffer.getvalue()

    def _draw_front(self, card: Image.Image, personal: PersonalData, professional: ProfessionalData):
        s = self.scale
        draw = ImageDraw.Draw(card, "RGBA")
        pad = PADDING * s
        avatar_size = AVATAR_SIZE * s

        avatar = _decode_data_uri(personal.avatar)
        if avatar is not None:
            self._paste_circle(card, avatar, (pad, pad), avatar_size)
        else:
            draw.ellipse((pad, pad, pad + avatar_size, pad + avatar_size), fill=(255, 255, 255, 60))
            initial = (personal.name[:1] or "?").upper()
            self._text_centered(draw, (pad + avatar_size // 2, pad + avatar_size // 2), initial, self._font(28))

        logo = _decode_data_uri(professional.company_logo)
        if logo is not None:
            logo_size = LOGO_SIZE * s
            self._paste_circle(card, logo, (self.width - pad - logo_size, pad), logo_size)

        x = pad + avatar_size + 16 * s
        draw.text((x, pad), personal.name, font=self._font(20), fill=TEXT_COLOR)
        draw.text((x, pad + 28 * s), professional.job_title, font=self._font(13), fill=MUTED_TEXT_COLOR)
        draw.text((x, pad + 46 * s), professional.company, font=self._font(12), fill=MUTED_TEXT_COLOR)

        bottom = self.height - pad
        draw.text((pad, bottom - 36 * s), personal.phone, font=self._font(12), fill=TEXT_COLOR)
        draw.text((pad, bottom - 16 * s), personal.email, font=self._font(12), fill=TEXT_COLOR)

    def _draw_back(self, card: Image.Image, personal: PersonalData, professional: ProfessionalData):
        s = self.scale
        draw = ImageDraw.Draw(card)
        pad = PADDING * s
        small = self._font(12)

        y = pad
        location = ", ".join(part for part in (personal.city, personal.state) if part)
        for line in (location, professional.website, "LinkedIn Profile" if professional.linked_in else ""):
            if line:
                draw.text((pad, y), line, font=small, fill=TEXT_COLOR)
                y += 20 * s

        column = self.width // 2 + 8 * s
        draw.text((column, pad), "Services", font=self._font(14), fill=TEXT_COLOR)
        y = pad + 24 * s
        for service in professional.services[:3]:
            draw.text((column, y), f"- {service}", font=small, fill=MUTED_TEXT_COLOR)
            y += 18 * s
        if len(professional.services) > 3:
            draw.text((column, y), f"+{len(professional.services) - 3} more", font=small, fill=MUTED_TEXT_COLOR)

        footer = " | ".join(part for part in (professional.industry, professional.experience) if part)
        if footer:
            self._text_centered(draw, (self.width // 2, self.height - pad - 8 * s), footer, small)

async def download_card(
    rasterizer: CardRasterizer,
    side: str,
    template: CardTemplate,
    personal: Optional[PersonalData],
    professional: Optional[ProfessionalData],
    out_dir: str = "exports"
) -> Optional[Path]:
    """Render one side of a card and write it to out_dir.

    Returns:
        Path of the written PNG, or None if export failed
    """
    try:
        png = await asyncio.to_thread(rasterizer.render, side, template, personal, professional)
        target_dir = Path(out_dir)
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / export_filename(side, personal.name if personal else None)
        path.write_bytes(png)
    except Exception as e:
        logger.error("Error downloading card: %s", e)
        return None

    logger.info("Exported %s side to %s", side, path)
    return path

async def download_both_sides(
    rasterizer: CardRasterizer,
    template: CardTemplate,
    personal: Optional[PersonalData],
    professional: Optional[ProfessionalData],
    out_dir: str = "exports",
    delay: float = BOTH_SIDES_DELAY
) -> Tuple[Optional[Path], Optional[Path]]:
    """Export the front, wait briefly, then export the back."""
    front = await download_card(rasterizer, "front", template, personal, professional, out_dir)
    await asyncio.sleep(delay)
    back = await download_card(rasterizer, "back", template, personal, professional, out_dir)
    return front, back
