"""Social network icons referenced by exported signatures"""

import logging
from functools import lru_cache
from io import BytesIO

from fastapi import APIRouter, HTTPException, Response
from PIL import Image, ImageDraw, ImageFont

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/icons", tags=["Icons"])

ICON_SIZE = 64

# Brand colour and label drawn in the circle
SOCIAL_ICONS = {
    "linkedin": ("#0077b5", "in"),
    "twitter": ("#1da1f2", "X"),
    "instagram": ("#e4405f", "IG"),
    "youtube": ("#ff0000", "YT"),
    "tiktok": ("#000000", "TT"),
}


@lru_cache(maxsize=None)
def render_icon(platform: str, size: int = ICON_SIZE) -> bytes:
    """Filled brand-colour circle with a white label, as PNG bytes"""
    color, label = SOCIAL_ICONS[platform]
    image = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(image)
    draw.ellipse([0, 0, size - 1, size - 1], fill=color)

    font = ImageFont.load_default()
    left, top, right, bottom = draw.textbbox((0, 0), label, font=font)
    position = ((size - (right - left)) / 2 - left, (size - (bottom - top)) / 2 - top)
    draw.text(position, label, fill="#ffffff", font=font)

    buffer = BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


@router.get("/{platform}.png")
async def get_icon(platform: str):
    if platform not in SOCIAL_ICONS:
        raise HTTPException(status_code=404, detail="Unknown social platform")
    return Response(
        content=render_icon(platform),
        media_type="image/png",
        headers={"Cache-Control": "public, max-age=86400"},
    )
