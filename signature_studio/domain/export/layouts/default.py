"""Classic layout used for professional, creative and unknown templates"""

from .base import LayoutContext, SignatureLayout, style_attr


class DefaultLayout(SignatureLayout):
    template_id = "professional"
    headshot_base = 80
    logo_base = 120

    def stylesheet(self, ctx: LayoutContext) -> str:
        return """
      .sig { font-family: Arial, Helvetica, sans-serif; background-color: #ffffff; }
      .portrait { vertical-align: top; padding-right: 16px; }
      .headshot { border-radius: 50%; display: block; }
      .details { vertical-align: top; border-left: 2px solid #14b8a6; padding-left: 16px; }
      .name { font-size: 18px; font-weight: bold; color: #0f172a; }
      .title { font-size: 13px; color: #334155; }
      .company { font-size: 13px; font-weight: bold; color: #0d9488; padding-bottom: 8px; }
      .contact-row { font-size: 12px; line-height: 20px; color: #334155; }
      .contact-label { font-weight: bold; color: #0d9488; }
      .contact-link { color: #334155; text-decoration: none; }
      .logo { display: block; padding-top: 10px; }
      .social-icons { padding-top: 10px; }
    """

    def render_table(self, ctx: LayoutContext) -> str:
        info = ctx.signature.personalInfo
        name = self.text(info.name)
        title = self.text(info.title)
        company, _ = self.company(ctx)

        size = self.headshot_size(ctx)
        headshot = self.image(
            ctx, "headshot", ctx.headshot_url, size, size, "headshot", name or "headshot",
            self.transform(ctx, "headshot"),
        )
        portrait = f'<td class="portrait" width="{size + 16}">{headshot}</td>' if headshot else ""

        logo_width = self.logo_size(ctx)
        # Logos here are wordmarks, so height follows a 3:1 box
        logo = self.image(
            ctx, "logo", ctx.logo_url, logo_width, round(logo_width / 3), "logo",
            f"{company or 'company'} logo", self.transform(ctx, "logo"),
        )

        name_block = (
            f'<div class="name"{style_attr(self.transform(ctx, "name"))}>{name}</div>' if name else ""
        )
        title_block = f'<div class="title">{title}</div>' if title else ""
        company_block = (
            f'<div class="company"{style_attr(self.transform(ctx, "company"))}>{company}</div>'
            if company
            else ""
        )

        return f"""
<table class="sig" cellpadding="0" cellspacing="0" border="0">
  <tr>
    {portrait}
    <td class="details">
      {name_block}
      {title_block}
      {company_block}
      {self.contact_rows(ctx)}
      {logo}
      {self.social_icons(ctx)}
    </td>
  </tr>
</table>
"""
