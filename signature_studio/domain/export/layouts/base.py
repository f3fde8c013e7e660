"""Shared building blocks for signature layouts"""

import logging
from dataclasses import dataclass
from typing import Optional

from ....utils.sanitization import sanitize_string, sanitize_url
from ...signatures.schemas import SOCIAL_PLATFORMS, ElementPosition, SignatureRecord
from ..image_resolver import resolve_image_url

logger = logging.getLogger(__name__)

MIN_SIZE_PERCENT = 50
MAX_SIZE_PERCENT = 200

# Stable hooks the animated path captures by id
ELEMENT_IDS = {
    "headshot": "headshot-element",
    "logo": "logo-element",
    "socialIcons": "social-icons-element",
}

EMAIL_CLIENT_CSS = {
    "gmail": """
      table { border-collapse: collapse; }
      img { outline: none; text-decoration: none; }
      a { text-decoration: none; }
    """,
    "outlook": """
      table { border-collapse: collapse; mso-table-lspace: 0pt; mso-table-rspace: 0pt; }
      td { mso-line-height-rule: exactly; }
      img { -ms-interpolation-mode: bicubic; outline: none; text-decoration: none; }
    """,
    "apple-mail": """
      table { -webkit-text-size-adjust: 100%; }
      a { color: inherit; text-decoration: none; }
    """,
}

DOCUMENT = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<style>
{css}
</style>
</head>
<body>
{table}
</body>
</html>
"""


def clamp_percent(value: Optional[float]) -> float:
    if value is None:
        return 100
    return max(MIN_SIZE_PERCENT, min(MAX_SIZE_PERCENT, value))


def scaled(base: int, percent: Optional[float]) -> int:
    """Pixel size for a percentage of a layout's base dimension"""
    return round(base * clamp_percent(percent) / 100)


def _number(value: float) -> str:
    return f"{value:g}"


def position_transform(position: Optional[ElementPosition]) -> str:
    """CSS transform for a user nudge, or an empty string when nothing moved"""
    if position is None:
        return ""
    parts = []
    if position.x != 0 or position.y != 0:
        parts.append(f"translate({_number(position.x)}px, {_number(position.y)}px)")
    if position.scale != 1:
        parts.append(f"scale({_number(position.scale)})")
    if not parts:
        return ""
    return f"transform: {' '.join(parts)};"


def style_attr(*declarations: str) -> str:
    css = " ".join(d for d in declarations if d)
    return f' style="{css}"' if css else ""


@dataclass
class LayoutContext:
    """Everything a layout needs, with images already resolved to absolute URLs"""

    signature: SignatureRecord
    base_url: str
    headshot_url: Optional[str] = None
    logo_url: Optional[str] = None
    background_url: Optional[str] = None
    animated: bool = False
    email_client: Optional[str] = None

    @classmethod
    def build(
        cls,
        signature: SignatureRecord,
        base_url: str,
        animated: bool = False,
        email_client: Optional[str] = None,
    ) -> "LayoutContext":
        images = signature.images
        return cls(
            signature=signature,
            base_url=base_url.rstrip("/"),
            headshot_url=resolve_image_url(images.headshot, base_url),
            logo_url=resolve_image_url(images.logo, base_url),
            background_url=resolve_image_url(images.background, base_url),
            animated=animated,
            email_client=email_client,
        )


class SignatureLayout:
    """
    One email signature layout.

    Subclasses set their geometry constants and implement ``stylesheet`` and
    ``render_table``; the table must be the only top-level element of the body.
    """

    template_id = "default"
    headshot_base = 80
    logo_base = 120
    placeholder_company: Optional[str] = None
    placeholder_subtitle: Optional[str] = None
    background_color = "#ffffff"
    social_order: tuple[str, ...] = SOCIAL_PLATFORMS
    social_icon_size = 24

    def render(self, ctx: LayoutContext) -> str:
        css = self.stylesheet(ctx)
        if ctx.email_client:
            css += EMAIL_CLIENT_CSS.get(ctx.email_client, "")
        return DOCUMENT.format(css=css.strip("\n"), table=self.render_table(ctx).strip())

    def stylesheet(self, ctx: LayoutContext) -> str:
        raise NotImplementedError

    def render_table(self, ctx: LayoutContext) -> str:
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Sizing
    # ------------------------------------------------------------------

    def headshot_size(self, ctx: LayoutContext) -> int:
        return scaled(self.headshot_base, ctx.signature.images.headshotSize)

    def logo_size(self, ctx: LayoutContext) -> int:
        return scaled(self.logo_base, ctx.signature.images.logoSize)

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------

    def text(self, value: Optional[str]) -> str:
        return sanitize_string(value.strip()) if value and value.strip() else ""

    def company(self, ctx: LayoutContext) -> tuple[str, bool]:
        """Company text and whether it is the layout's placeholder"""
        company = self.text(ctx.signature.personalInfo.company)
        if company:
            return company, False
        return self.placeholder_company or "", self.placeholder_company is not None

    def transform(self, ctx: LayoutContext, element: str) -> str:
        return position_transform(getattr(ctx.signature.elementPositions, element, None))

    # ------------------------------------------------------------------
    # Animation hooks
    # ------------------------------------------------------------------

    def animation_class(self, ctx: LayoutContext, element: str) -> str:
        if not ctx.animated:
            return ""
        animation = getattr(ctx.signature.elementAnimations, element, "none")
        return f" animate-{animation}" if animation != "none" else ""

    # ------------------------------------------------------------------
    # Fragments
    # ------------------------------------------------------------------

    def image(
        self,
        ctx: LayoutContext,
        element: str,
        url: Optional[str],
        width: int,
        height: int,
        css_class: str,
        alt: str,
        extra_style: str = "",
    ) -> str:
        """``<img>`` for an element, or nothing when the image is absent. ``alt`` must be escaped."""
        if not url:
            return ""
        classes = f"{css_class}{self.animation_class(ctx, element)}"
        return (
            f'<img id="{ELEMENT_IDS[element]}" class="{classes}" src="{sanitize_string(url)}" '
            f'alt="{alt}" width="{width}" height="{height}" border="0"'
            f'{style_attr(f"width: {width}px; height: {height}px;", extra_style)}>'
        )

    def social_links(self, ctx: LayoutContext) -> list[tuple[str, str]]:
        """(platform, href) pairs for populated platforms in this layout's order"""
        links = []
        for platform in self.social_order:
            href = sanitize_url(getattr(ctx.signature.socialMedia, platform, None))
            if href:
                links.append((platform, href))
        return links

    def social_icons(self, ctx: LayoutContext, vertical: bool = False, gap: int = 6) -> str:
        links = self.social_links(ctx)
        if not links:
            return ""
        size = self.social_icon_size
        anchors = []
        for platform, href in links:
            anchor = (
                f'<a class="social-link" href="{sanitize_string(href)}" data-platform="{platform}">'
                f'<img class="social-icon" src="{ctx.base_url}/api/icons/{platform}.png" '
                f'alt="{platform}" width="{size}" height="{size}" border="0"'
                f' style="width: {size}px; height: {size}px;"></a>'
            )
            if vertical:
                anchors.append(f'<div style="padding: {gap // 2}px 0;">{anchor}</div>')
            else:
                anchors.append(anchor)
        joiner = "" if vertical else f'<span style="display: inline-block; width: {gap}px;"></span>'
        classes = f"social-icons{self.animation_class(ctx, 'socialIcons')}"
        return (
            f'<div id="{ELEMENT_IDS["socialIcons"]}" class="{classes}"'
            f'{style_attr(self.transform(ctx, "social"))}>{joiner.join(anchors)}</div>'
        )

    def contact_rows(self, ctx: LayoutContext, label_class: str = "contact-label") -> str:
        info = ctx.signature.personalInfo
        rows = []
        phone = self.text(info.phone)
        if phone:
            tel = "".join(ch for ch in info.phone if ch.isdigit() or ch == "+")
            rows.append(
                f'<div class="contact-row"><span class="{label_class}">P</span> '
                f'<a class="contact-link" href="tel:{tel}">{phone}</a></div>'
            )
        email = self.text(info.email)
        if email:
            rows.append(
                f'<div class="contact-row"><span class="{label_class}">E</span> '
                f'<a class="contact-link" href="mailto:{email}">{email}</a></div>'
            )
        website = self.text(info.website)
        href = sanitize_url(info.website)
        if website and href:
            rows.append(
                f'<div class="contact-row"><span class="{label_class}">W</span> '
                f'<a class="contact-link" href="{sanitize_string(href)}">{website}</a></div>'
            )
        if not rows:
            return ""
        return (
            f'<div class="contact"{style_attr(self.transform(ctx, "contact"))}>{"".join(rows)}</div>'
        )
