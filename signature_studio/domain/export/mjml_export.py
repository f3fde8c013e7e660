"""
MJML signature templates.

Each template mirrors the raw HTML layout of the same id: same fields, same
omission rules, same placeholder text. The document is compiled to HTML with
the mjml package.
"""

import logging
from collections.abc import Mapping
from typing import Callable

from mjml import mjml_to_html

from ...utils.sanitization import sanitize_string, sanitize_url
from ..signatures.schemas import SignatureRecord
from .errors import MarkupCompilationError
from .layouts import LayoutContext, SignatureLayout, get_layout
from .layouts.minimal import PURPLE
from .layouts.modern import CYAN, NAVY

logger = logging.getLogger(__name__)

PLAYFAIR_FONT_URL = (
    "https://fonts.googleapis.com/css2?family=Playfair+Display:wght@400;500;600;700&display=swap"
)
TEAL = "#0d9488"


def _social(layout: SignatureLayout, ctx: LayoutContext, vertical: bool = False) -> str:
    size = layout.social_icon_size
    anchors = []
    for platform, href in layout.social_links(ctx):
        anchor = (
            f'<a href="{sanitize_string(href)}" style="text-decoration: none;">'
            f'<img src="{ctx.base_url}/api/icons/{platform}.png" alt="{platform}" '
            f'width="{size}" height="{size}" border="0" style="width: {size}px; height: {size}px;" /></a>'
        )
        anchors.append(f"<div style=\"padding: 6px 0;\">{anchor}</div>" if vertical else anchor)
    return ("" if vertical else "&nbsp;").join(anchors)


def _contact(layout: SignatureLayout, ctx: LayoutContext, color: str, accent: str) -> str:
    info = ctx.signature.personalInfo
    lines = []
    phone = layout.text(info.phone)
    if phone:
        lines.append(f'<span style="color: {accent}; font-weight: bold;">P</span> {phone}')
    email = layout.text(info.email)
    if email:
        lines.append(
            f'<span style="color: {accent}; font-weight: bold;">E</span> '
            f'<a href="mailto:{email}" style="color: {color}; text-decoration: none;">{email}</a>'
        )
    website = layout.text(info.website)
    if website:
        lines.append(
            f'<span style="color: {accent}; font-weight: bold;">W</span> '
            f'<a href="{sanitize_string(sanitize_url(info.website) or "")}" '
            f'style="color: {color}; text-decoration: none;">{website}</a>'
        )
    return "<br />".join(lines)


def _text(content: str, **attrs) -> str:
    if not content:
        return ""
    rendered = " ".join(f'{k.replace("_", "-")}="{v}"' for k, v in attrs.items())
    return f"<mj-text {rendered}>{content}</mj-text>"


def _image(url, width: int, height: int, alt: str, **attrs) -> str:
    if not url:
        return ""
    extra = " ".join(f'{k.replace("_", "-")}="{v}"' for k, v in attrs.items())
    return (
        f'<mj-image src="{sanitize_string(url)}" alt="{alt}" '
        f'width="{width}px" height="{height}px" padding="0" {extra} />'
    )


def _sales_professional(layout: SignatureLayout, ctx: LayoutContext) -> str:
    info = ctx.signature.personalInfo
    company, is_placeholder = layout.company(ctx)
    name = layout.text(info.name)
    subtitle = (
        f'<br /><span style="font-size: 10px; letter-spacing: 4px; color: {TEAL};">'
        f"{layout.placeholder_subtitle}</span>"
        if is_placeholder
        else ""
    )
    social = _social(layout, ctx, vertical=True)
    sidebar = (
        f"""
      <mj-column width="80px" background-color="#2563eb" vertical-align="middle">
        <mj-text align="center" padding="16px 0">{social}</mj-text>
      </mj-column>"""
        if social
        else ""
    )
    headshot_width = layout.headshot_size(ctx)
    headshot = _image(ctx.headshot_url, headshot_width, layout.headshot_height, name or "headshot")
    portrait = (
        f"""
      <mj-column width="{headshot_width}px">{headshot}</mj-column>"""
        if headshot
        else ""
    )
    logo_size = layout.logo_size(ctx)
    return f"""
    <mj-section background-color="#ffffff" padding="0">{sidebar}
      <mj-column>
        {_image(ctx.logo_url, logo_size, logo_size, f"{company} logo", align="left", padding_left="24px", padding_top="24px")}
        {_text(f"{company}{subtitle}", font_size="18px", font_weight="bold", letter_spacing="2px", color="#0f172a", padding="24px 24px 12px 28px")}
        {_text(f'{name} <span style="color: {TEAL};">&#10003;</span>' if name else "", font_size="24px", font_weight="bold", color="#0f172a", padding="0 24px 0 28px")}
        {_text(layout.text(info.title), font_size="14px", color=TEAL, text_transform="uppercase", padding="4px 24px 12px 28px")}
        {_text(_contact(layout, ctx, "#334155", TEAL), font_size="13px", line_height="22px", color="#334155", padding="0 24px 24px 28px")}
      </mj-column>{portrait}
    </mj-section>"""


def _modern(layout: SignatureLayout, ctx: LayoutContext) -> str:
    info = ctx.signature.personalInfo
    company, is_placeholder = layout.company(ctx)
    name = layout.text(info.name)
    size = layout.headshot_size(ctx)
    headshot = _image(
        ctx.headshot_url, size, size, name or "headshot", border_radius="50%",
        border=f"3px solid {CYAN}",
    )
    portrait = (
        f"""
      <mj-column width="{size + 48}px" vertical-align="middle" padding="28px 20px 28px 28px">{headshot}</mj-column>"""
        if headshot
        else ""
    )
    logo_size = layout.logo_size(ctx)
    company_color = "#64748b" if is_placeholder else CYAN
    return f"""
    <mj-section background-color="{NAVY}" border-radius="12px" padding="0">{portrait}
      <mj-column vertical-align="middle" padding="28px 28px 28px 8px">
        {_image(ctx.logo_url, logo_size, logo_size, f"{company} logo", align="left")}
        {_text(company, font_size="14px", font_weight="bold", letter_spacing="3px", color=company_color, padding="0 0 12px 0")}
        {_text(name, font_size="26px", font_weight="bold", color="#ffffff", padding="0")}
        {_text(layout.text(info.title), font_size="14px", color=CYAN, padding="4px 0 14px 0")}
        {_text(_contact(layout, ctx, "#cbd5e1", CYAN), font_size="13px", line_height="22px", color="#cbd5e1", padding="0")}
        {_text(_social(layout, ctx), padding="14px 0 0 0")}
      </mj-column>
    </mj-section>"""


def _minimal(layout: SignatureLayout, ctx: LayoutContext) -> str:
    info = ctx.signature.personalInfo
    company, is_placeholder = layout.company(ctx)
    name = layout.text(info.name)
    logo_size = layout.logo_size(ctx)
    brand = _image(ctx.logo_url, logo_size, logo_size, "logo")
    if not brand:
        brand = _text(
            f'<span style="display: inline-block; width: 22px; height: 22px; background-color: {PURPLE};"></span>'
            f'<div style="font-size: 20px; font-weight: bold; letter-spacing: 4px; color: #111827; padding-top: 8px;">{layout.placeholder_company}</div>'
            f'<div style="font-size: 9px; letter-spacing: 5px; color: #6b7280;">{layout.placeholder_subtitle}</div>',
            align="center",
        )
    size = layout.headshot_size(ctx)
    headshot = _image(
        ctx.headshot_url, size, size, name or "headshot", border_radius="50%",
        border=f"4px solid {PURPLE}",
    )
    company_line = "" if is_placeholder else company
    return f"""
    <mj-section background-color="#ffffff" border-left="4px solid {PURPLE}" padding="0">
      <mj-column width="60%" padding="24px">
        {_text(name, font_family="Playfair Display, Georgia, serif", font_size="26px", color="#111827", padding="0")}
        {_text(layout.text(info.title), font_size="13px", color=PURPLE, letter_spacing="2px", text_transform="uppercase", padding="4px 0 12px 0")}
        {_text(company_line, font_size="14px", color="#374151", padding="0 0 10px 0")}
        {_text(_contact(layout, ctx, "#4b5563", PURPLE), font_size="13px", line_height="21px", color="#4b5563", padding="0")}
        {_text(_social(layout, ctx), padding="12px 0 0 0")}
      </mj-column>
      <mj-column width="40%" padding="24px">
        {brand}
        {headshot}
      </mj-column>
    </mj-section>"""


def _default(layout: SignatureLayout, ctx: LayoutContext) -> str:
    info = ctx.signature.personalInfo
    company, _ = layout.company(ctx)
    name = layout.text(info.name)
    size = layout.headshot_size(ctx)
    headshot = _image(ctx.headshot_url, size, size, name or "headshot", border_radius="50%")
    portrait = f'\n      <mj-column width="{size + 16}px">{headshot}</mj-column>' if headshot else ""
    logo_width = layout.logo_size(ctx)
    return f"""
    <mj-section background-color="#ffffff" padding="0">{portrait}
      <mj-column border-left="2px solid #14b8a6" padding-left="16px">
        {_text(name, font_size="18px", font_weight="bold", color="#0f172a", padding="0")}
        {_text(layout.text(info.title), font_size="13px", color="#334155", padding="0")}
        {_text(company, font_size="13px", font_weight="bold", color=TEAL, padding="0 0 8px 0")}
        {_text(_contact(layout, ctx, "#334155", TEAL), font_size="12px", line_height="20px", color="#334155", padding="0")}
        {_image(ctx.logo_url, logo_width, round(logo_width / 3), f"{company or 'company'} logo", align="left", padding_top="10px")}
        {_text(_social(layout, ctx), padding="10px 0 0 0")}
      </mj-column>
    </mj-section>"""


MJML_BUILDERS: dict[str, Callable[[SignatureLayout, LayoutContext], str]] = {
    "sales-professional": _sales_professional,
    "modern": _modern,
    "minimal": _minimal,
}


def build_mjml(signature: SignatureRecord, base_url: str) -> str:
    """MJML source for a signature"""
    layout = get_layout(signature.templateId)
    ctx = LayoutContext.build(signature, base_url)
    body = MJML_BUILDERS.get(layout.template_id, _default)(layout, ctx)
    width = getattr(layout, "table_width", 600)
    return f"""<mjml>
  <mj-head>
    <mj-title>Email signature</mj-title>
    <mj-font name="Playfair Display" href="{PLAYFAIR_FONT_URL}" />
    <mj-attributes>
      <mj-all font-family="Arial, Helvetica, sans-serif" />
      <mj-text padding="0" />
    </mj-attributes>
  </mj-head>
  <mj-body width="{width}px" background-color="#ffffff">{body}
  </mj-body>
</mjml>
"""


def _format_error(error) -> str:
    if isinstance(error, str):
        return error
    if isinstance(error, Mapping):
        return str(error.get("formattedMessage") or error.get("message") or error)
    return str(getattr(error, "formattedMessage", None) or getattr(error, "message", None) or error)


def compile_mjml_to_html(mjml_content: str) -> tuple[str, list[str]]:
    """Compile MJML to HTML, returning the HTML and any compiler warnings"""
    try:
        result = mjml_to_html(mjml_content)
    except Exception as e:
        logger.error(f"❌ MJML compilation error: {e}")
        raise MarkupCompilationError(f"Failed to compile MJML template: {str(e)}") from e

    # Older releases return a DotMap, newer ones a named tuple; both expose attributes
    try:
        errors = [_format_error(error) for error in (getattr(result, "errors", None) or [])]
        html = getattr(result, "html", None) or ""
    except Exception as e:
        logger.error(f"❌ Unreadable MJML compiler result: {e}")
        raise MarkupCompilationError(f"Unreadable MJML compiler result: {str(e)}") from e

    if errors:
        logger.warning(f"⚠️ MJML compilation warnings: {errors}")
    if not html:
        raise MarkupCompilationError("MJML compiler returned no HTML")
    return html, errors
