"""Two-column 60/40 layout with a gradient-ringed portrait"""

from .base import LayoutContext, SignatureLayout, style_attr

PURPLE = "#a855f7"
BLUE = "#3b82f6"


class MinimalLayout(SignatureLayout):
    template_id = "minimal"
    headshot_base = 160
    logo_base = 48
    placeholder_company = "APEX"
    placeholder_subtitle = "SOLUTIONS"

    def stylesheet(self, ctx: LayoutContext) -> str:
        return f"""
      .sig {{ width: 600px; background-color: #ffffff; font-family: Georgia, 'Times New Roman', serif; border-left: 4px solid {PURPLE}; }}
      .details {{ width: 60%; vertical-align: top; padding: 24px; }}
      .aside {{ width: 40%; vertical-align: top; text-align: center; padding: 24px; }}
      .name {{ font-size: 26px; color: #111827; }}
      .title {{ font-size: 13px; color: {PURPLE}; letter-spacing: 2px; text-transform: uppercase; padding-bottom: 12px; }}
      .company {{ font-size: 14px; color: #374151; padding-bottom: 10px; }}
      .contact-row {{ font-size: 13px; line-height: 21px; color: #4b5563; }}
      .contact-label {{ color: {PURPLE}; }}
      .contact-link {{ color: #4b5563; text-decoration: none; }}
      .social-icons {{ padding-top: 12px; }}
      .brand-block {{ padding-bottom: 16px; }}
      .brand-mark {{ display: inline-block; width: 22px; height: 22px; background-color: {PURPLE}; transform: rotate(45deg); }}
      .brand-name {{ font-size: 20px; font-weight: bold; letter-spacing: 4px; color: #111827; padding-top: 8px; }}
      .brand-subtitle {{ font-size: 9px; letter-spacing: 5px; color: #6b7280; }}
      .headshot-ring {{ display: inline-block; padding: 4px; border-radius: 50%; background-color: {PURPLE}; background-image: linear-gradient(135deg, {PURPLE}, {BLUE}); }}
      .headshot {{ display: block; border-radius: 50%; border: 3px solid #ffffff; }}
    """

    def _brand_block(self, ctx: LayoutContext) -> str:
        size = self.logo_size(ctx)
        logo = self.image(
            ctx, "logo", ctx.logo_url, size, size, "logo", "logo", self.transform(ctx, "logo")
        )
        if logo:
            return f'<div class="brand-block">{logo}</div>'
        # Placeholder brand shown until a logo is uploaded
        return (
            f'<div class="brand-block"{style_attr(self.transform(ctx, "logo"))}>'
            '<span class="brand-mark"></span>'
            f'<div class="brand-name">{self.placeholder_company}</div>'
            f'<div class="brand-subtitle">{self.placeholder_subtitle}</div>'
            "</div>"
        )

    def render_table(self, ctx: LayoutContext) -> str:
        info = ctx.signature.personalInfo
        name = self.text(info.name)
        title = self.text(info.title)
        company, is_placeholder = self.company(ctx)

        size = self.headshot_size(ctx)
        headshot = self.image(
            ctx, "headshot", ctx.headshot_url, size, size, "headshot", name or "headshot"
        )
        if headshot:
            headshot = (
                f'<span class="headshot-ring"{style_attr(self.transform(ctx, "headshot"))}>'
                f"{headshot}</span>"
            )
        company_block = ""
        if not is_placeholder:
            company_block = (
                f'<div class="company"{style_attr(self.transform(ctx, "company"))}>{company}</div>'
            )
        elif ctx.logo_url:
            # The brand block is replaced by the logo, so the placeholder moves here
            company_block = (
                f'<div class="company"{style_attr(self.transform(ctx, "company"))}>{company} '
                f'<span class="brand-subtitle">{self.placeholder_subtitle}</span></div>'
            )
        name_block = (
            f'<div class="name"{style_attr(self.transform(ctx, "name"))}>{name}</div>' if name else ""
        )
        title_block = f'<div class="title">{title}</div>' if title else ""

        return f"""
<table class="sig" width="600" cellpadding="0" cellspacing="0" border="0">
  <tr>
    <td class="details" width="360">
      {name_block}
      {title_block}
      {company_block}
      {self.contact_rows(ctx)}
      {self.social_icons(ctx)}
    </td>
    <td class="aside" width="240">
      {self._brand_block(ctx)}
      {headshot}
    </td>
  </tr>
</table>
"""
