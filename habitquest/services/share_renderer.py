# habitquest/services/share_renderer.py
import base64
import io
import logging
import textwrap
from functools import lru_cache
from typing import Optional

from PIL import Image, ImageDraw, ImageFont

logger = logging.getLogger(__name__)

CARD_W, CARD_H = 1080, 1080
BACKGROUND = (24, 26, 43)
ACCENT = (255, 196, 61)
TEXT = (235, 235, 245)
MUTED = (150, 152, 176)
FOOTER = "Отслеживай цели вместе со мной в Telegram"


@lru_cache(maxsize=8)
def _font(size: int, bold: bool = False):
    # DejaVu has Cyrillic glyphs; the bundled default font is the fallback
    name = "DejaVuSans-Bold.ttf" if bold else "DejaVuSans.ttf"
    try:
        return ImageFont.truetype(name, size)
    except OSError:
        logger.warning("Font %s not found, using Pillow default", name)
        return ImageFont.load_default(size=size)


def _draw_wrapped(draw: ImageDraw.ImageDraw, text: str, x: int, y: int, width: int, font, fill, spacing: int = 12) -> int:
    """Draw `text` wrapped to `width` characters; returns the y below the last line."""
    for line in textwrap.wrap(text, width=width) or [""]:
        draw.text((x, y), line, fill=fill, font=font)
        box = draw.textbbox((x, y), line, font=font)
        y = box[3] + spacing
    return y


def render_share_card(title: str, description: str, points: Optional[int] = None) -> bytes:
    """Render an achievement card as PNG bytes."""
    img = Image.new("RGB", (CARD_W, CARD_H), BACKGROUND)
    draw = ImageDraw.Draw(img)

    # Frame
    draw.rounded_rectangle((40, 40, CARD_W - 40, CARD_H - 40), radius=48, outline=ACCENT, width=6)

    # Header
    draw.text((96, 110), "ДОСТИЖЕНИЕ", fill=ACCENT, font=_font(44, bold=True))

    y = _draw_wrapped(draw, title.strip(), 96, 220, 24, _font(72, bold=True), TEXT)
    y = _draw_wrapped(draw, description.strip(), 96, y + 40, 40, _font(40), MUTED)

    if points is not None:
        badge = f"+{points} pts"
        font = _font(56, bold=True)
        box = draw.textbbox((0, 0), badge, font=font)
        w, h = box[2] - box[0], box[3] - box[1]
        top = max(y + 60, 700)
        draw.rounded_rectangle((96, top, 96 + w + 80, top + h + 60), radius=36, fill=ACCENT)
        draw.text((136, top + 30 - box[1]), badge, fill=BACKGROUND, font=font)

    draw.text((96, CARD_H - 150), FOOTER, fill=MUTED, font=_font(32))

    buf = io.BytesIO()
    img.save(buf, "PNG")
    return buf.getvalue()


def render_share_data_url(title: str, description: str, points: Optional[int] = None) -> str:
    png = render_share_card(title, description, points)
    return "data:image/png;base64," + base64.b64encode(png).decode("ascii")
