"""Three-column sales layout: social sidebar, content, angled portrait"""

from ....utils.sanitization import sanitize_string
from .base import LayoutContext, SignatureLayout, style_attr

SIDEBAR_GRADIENT = "linear-gradient(180deg, #22d3ee, #2563eb)"
ACCENT = "#0d9488"


class SalesProfessionalLayout(SignatureLayout):
    template_id = "sales-professional"
    headshot_base = 256
    headshot_height = 280
    logo_base = 48
    table_width = 650
    sidebar_width = 80
    placeholder_company = "COMPANY"
    placeholder_subtitle = "GRAPHICS"
    background_color = "#ffffff"
    social_order = ("twitter", "linkedin", "instagram", "youtube", "tiktok")
    social_icon_size = 32

    def stylesheet(self, ctx: LayoutContext) -> str:
        return f"""
      .sig {{ width: {self.table_width}px; background-color: {self.background_color}; font-family: Arial, Helvetica, sans-serif; }}
      .sidebar {{ width: {self.sidebar_width}px; background-color: #2563eb; background-image: {SIDEBAR_GRADIENT}; text-align: center; vertical-align: middle; padding: 16px 0; }}
      .main {{ position: relative; vertical-align: top; padding: 24px 24px 24px 28px; }}
      .portrait {{ vertical-align: top; padding: 0; }}
      .brand {{ padding-bottom: 14px; }}
      .company {{ font-size: 18px; font-weight: bold; letter-spacing: 2px; color: #0f172a; }}
      .company-subtitle {{ font-size: 10px; letter-spacing: 4px; color: {ACCENT}; }}
      .name {{ font-size: 24px; font-weight: bold; color: #0f172a; }}
      .verified {{ color: {ACCENT}; font-size: 18px; }}
      .title {{ font-size: 14px; color: {ACCENT}; text-transform: uppercase; letter-spacing: 1px; padding-bottom: 12px; }}
      .contact-row {{ font-size: 13px; line-height: 22px; color: #334155; }}
      .contact-label {{ font-weight: bold; color: {ACCENT}; }}
      .contact-link {{ color: #334155; text-decoration: none; }}
      .logo {{ vertical-align: middle; }}
      .headshot {{ display: block; object-fit: cover; }}
      .social-icon {{ display: block; margin: 0 auto; }}
    """

    def _shapes(self) -> str:
        # Decorative rotated squares behind the content column
        shapes = (
            ("top: -20px; right: 40px;", 60, "#ccfbf1", 20),
            ("bottom: 10px; right: 120px;", 36, "#e0f2fe", 45),
            ("top: 40px; right: -10px;", 24, "#cffafe", 30),
        )
        return "".join(
            f'<div class="shape" style="position: absolute; {offset} width: {size}px; '
            f'height: {size}px; background-color: {color}; transform: rotate({angle}deg); '
            f'opacity: 0.6;"></div>'
            for offset, size, color, angle in shapes
        )

    def _brand(self, ctx: LayoutContext) -> str:
        company, is_placeholder = self.company(ctx)
        logo_size = self.logo_size(ctx)
        logo = self.image(
            ctx, "logo", ctx.logo_url, logo_size, logo_size, "logo", f"{company} logo",
            self.transform(ctx, "logo"),
        )
        subtitle = (
            f'<div class="company-subtitle">{self.placeholder_subtitle}</div>'
            if is_placeholder
            else ""
        )
        logo_cell = f'<td class="logo" style="padding-right: 10px;">{logo}</td>' if logo else ""
        return (
            '<table class="brand" cellpadding="0" cellspacing="0" border="0"><tr>'
            f"{logo_cell}"
            f'<td{style_attr(self.transform(ctx, "company"))}>'
            f'<div class="company">{company}</div>{subtitle}</td>'
            "</tr></table>"
        )

    def _portrait(self, ctx: LayoutContext) -> str:
        width = self.headshot_size(ctx)
        headshot = self.image(
            ctx,
            "headshot",
            ctx.headshot_url,
            width,
            self.headshot_height,
            "headshot",
            self.text(ctx.signature.personalInfo.name) or "headshot",
            "clip-path: polygon(25% 0%, 100% 0%, 100% 100%, 0% 100%); "
            + self.transform(ctx, "headshot"),
        )
        if not headshot:
            return ""
        return f'<td class="portrait" width="{width}">{headshot}</td>'

    def render_table(self, ctx: LayoutContext) -> str:
        info = ctx.signature.personalInfo
        name = self.text(info.name)
        title = self.text(info.title)

        background = ""
        overlay = ""
        if ctx.background_url:
            bg = sanitize_string(ctx.background_url)
            opacity = max(0, min(100, ctx.signature.images.backgroundOpacity)) / 100
            background = (
                f' background="{bg}" style="background-image: '
                f"url('{bg}'); background-size: cover;\""
            )
            overlay = f"background-color: rgba(255, 255, 255, {round(1 - opacity, 2):g});"

        social = self.social_icons(ctx, vertical=True, gap=12)
        sidebar = (
            f'<td class="sidebar" width="{self.sidebar_width}">{social}</td>' if social else ""
        )
        name_block = (
            f'<div class="name"{style_attr(self.transform(ctx, "name"))}>'
            f'{name} <span class="verified">&#10003;</span></div>'
            if name
            else ""
        )
        title_block = f'<div class="title">{title}</div>' if title else ""

        return f"""
<table class="sig" width="{self.table_width}" cellpadding="0" cellspacing="0" border="0">
  <tr>
    {sidebar}
    <td class="main"{background}>
      <div{style_attr(overlay)}>
        {self._shapes()}
        {self._brand(ctx)}
        {name_block}
        {title_block}
        {self.contact_rows(ctx)}
      </div>
    </td>
    {self._portrait(ctx)}
  </tr>
</table>
"""
