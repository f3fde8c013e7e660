"""Dark two-column layout with a glowing circular portrait"""

from .base import LayoutContext, SignatureLayout, style_attr

CYAN = "#00bcd4"
NAVY = "#0f172a"


class ModernLayout(SignatureLayout):
    template_id = "modern"
    headshot_base = 160
    logo_base = 40
    placeholder_company = "TECHSPACE"
    background_color = NAVY
    social_icon_size = 28

    def stylesheet(self, ctx: LayoutContext) -> str:
        return f"""
      .sig {{ width: 600px; background-color: {NAVY}; background-image: linear-gradient(135deg, {NAVY} 0%, #1e293b 100%); font-family: Helvetica, Arial, sans-serif; border-radius: 12px; }}
      .portrait {{ vertical-align: middle; text-align: center; padding: 28px 20px 28px 28px; }}
      .details {{ vertical-align: middle; padding: 28px 28px 28px 8px; }}
      .headshot {{ border-radius: 50%; border: 3px solid {CYAN}; box-shadow: 0 0 20px {CYAN}; }}
      .brand {{ padding-bottom: 12px; }}
      .company {{ font-size: 14px; font-weight: bold; letter-spacing: 3px; color: {CYAN}; }}
      .company-placeholder {{ color: #64748b; }}
      .logo-bars {{ display: inline-block; vertical-align: middle; }}
      .logo-bar {{ display: block; height: 4px; background-color: {CYAN}; margin-bottom: 3px; border-radius: 2px; }}
      .name {{ font-size: 26px; font-weight: bold; color: #ffffff; }}
      .title {{ font-size: 14px; color: {CYAN}; padding-bottom: 14px; }}
      .contact-row {{ font-size: 13px; line-height: 22px; color: #cbd5e1; }}
      .contact-label {{ color: {CYAN}; font-weight: bold; }}
      .contact-link {{ color: #cbd5e1; text-decoration: none; }}
      .social-icons {{ padding-top: 14px; }}
    """

    def _brand(self, ctx: LayoutContext) -> str:
        company, is_placeholder = self.company(ctx)
        size = self.logo_size(ctx)
        mark = self.image(
            ctx, "logo", ctx.logo_url, size, size, "logo", f"{company} logo",
            self.transform(ctx, "logo"),
        )
        if not mark:
            # Three stacked bars stand in for a missing logo
            widths = (size, round(size * 0.75), round(size * 0.5))
            bars = "".join(
                f'<span class="logo-bar" style="width: {w}px;"></span>' for w in widths
            )
            mark = f'<span class="logo-bars"{style_attr(self.transform(ctx, "logo"))}>{bars}</span>'
        company_class = "company company-placeholder" if is_placeholder else "company"
        return (
            f'<div class="brand">{mark} '
            f'<span class="{company_class}"{style_attr(self.transform(ctx, "company"))}>'
            f"{company}</span></div>"
        )

    def render_table(self, ctx: LayoutContext) -> str:
        info = ctx.signature.personalInfo
        name = self.text(info.name)
        title = self.text(info.title)
        size = self.headshot_size(ctx)
        headshot = self.image(
            ctx, "headshot", ctx.headshot_url, size, size, "headshot", name or "headshot",
            self.transform(ctx, "headshot"),
        )
        portrait = f'<td class="portrait" width="{size + 48}">{headshot}</td>' if headshot else ""
        name_block = (
            f'<div class="name"{style_attr(self.transform(ctx, "name"))}>{name}</div>' if name else ""
        )
        title_block = f'<div class="title">{title}</div>' if title else ""

        return f"""
<table class="sig" width="600" cellpadding="0" cellspacing="0" border="0">
  <tr>
    {portrait}
    <td class="details">
      {self._brand(ctx)}
      {name_block}
      {title_block}
      {self.contact_rows(ctx)}
      {self.social_icons(ctx)}
    </td>
  </tr>
</table>
"""
