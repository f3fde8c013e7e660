from __future__ import annotations

import logging

import pytest
from bs4 import BeautifulSoup

from signature_studio.domain.export.errors import InvalidTemplateError
from signature_studio.domain.export.layouts import (
    DEFAULT_LAYOUT,
    LayoutContext,
    get_layout,
    lookup_layout,
    position_transform,
    scaled,
)
from signature_studio.domain.export.table_extractor import top_level_tables
from signature_studio.domain.signatures.schemas import ElementPosition
from tests.conftest import BASE_URL, FULL_SOCIAL, make_signature

TEMPLATES = ["professional", "modern", "minimal", "creative", "sales-professional"]


def render(signature, **kwargs) -> BeautifulSoup:
    layout = get_layout(signature.templateId)
    html = layout.render(LayoutContext.build(signature, BASE_URL, **kwargs))
    return BeautifulSoup(html, "lxml")


def test_scaled_clamps_percent_to_supported_range() -> None:
    assert scaled(80, 100) == 80
    assert scaled(80, 300) == 160
    assert scaled(80, 10) == 40
    assert scaled(80, None) == 80
    assert scaled(256, 150) == 384


def test_position_transform_is_empty_for_default_positions() -> None:
    assert position_transform(ElementPosition()) == ""
    assert position_transform(None) == ""


def test_position_transform_only_emits_changed_parts() -> None:
    assert position_transform(ElementPosition(x=5)) == "transform: translate(5px, 0px);"
    assert position_transform(ElementPosition(scale=1.5)) == "transform: scale(1.5);"
    assert (
        position_transform(ElementPosition(x=-3, y=4.5, scale=0.8))
        == "transform: translate(-3px, 4.5px) scale(0.8);"
    )


@pytest.mark.parametrize("template_id", TEMPLATES)
def test_every_layout_has_a_single_top_level_table(template_id: str) -> None:
    signature = make_signature(
        templateId=template_id,
        images={"headshot": "/api/files/me.png", "logo": "/api/files/logo.png"},
        socialMedia=FULL_SOCIAL,
    )
    soup = render(signature)
    assert len(top_level_tables(soup)) == 1
    assert soup.body.find_all(recursive=False)[0].name == "table"


@pytest.mark.parametrize("template_id", TEMPLATES)
def test_absent_optional_fields_leave_no_markup(template_id: str) -> None:
    signature = make_signature(
        templateId=template_id,
        personalInfo={"name": "Jane Doe", "title": "CEO", "company": "Acme", "email": "j@acme.test"},
        socialMedia={"linkedin": "https://linkedin.com/in/jane"},
    )
    soup = render(signature)
    html = str(soup)
    assert "tel:" not in html
    assert 'href="https://acme.test"' not in html
    assert soup.find("a", attrs={"data-platform": "twitter"}) is None
    assert soup.find("a", attrs={"data-platform": "linkedin"}) is not None
    assert soup.find("img", id="headshot-element") is None
    assert soup.find("img", id="logo-element") is None
    assert "None" not in soup.get_text()
    assert "undefined" not in html
    assert soup.find("a", href="") is None


@pytest.mark.parametrize("template_id", TEMPLATES)
def test_social_icons_follow_platform_order(template_id: str) -> None:
    soup = render(make_signature(templateId=template_id, socialMedia=FULL_SOCIAL))
    order = [a["data-platform"] for a in soup.find_all("a", attrs={"data-platform": True})]
    expected = get_layout(template_id).social_order
    assert order == list(expected)
    assert len(order) == 5


def test_sales_professional_puts_twitter_first() -> None:
    assert get_layout("sales-professional").social_order[0] == "twitter"
    assert get_layout("modern").social_order[0] == "linkedin"


def test_headshot_size_is_clamped_per_template() -> None:
    big = render(make_signature(images={"headshot": "me.png", "headshotSize": 300}))
    small = render(make_signature(images={"headshot": "me.png", "headshotSize": 10}))
    assert big.find("img", id="headshot-element")["width"] == "160"
    assert small.find("img", id="headshot-element")["width"] == "40"

    modern = render(make_signature(templateId="modern", images={"headshot": "me.png", "headshotSize": 50}))
    assert modern.find("img", id="headshot-element")["width"] == "80"


@pytest.mark.parametrize(
    "template_id, at_max, at_min",
    [("professional", "240", "60"), ("modern", "80", "20"), ("sales-professional", "96", "24")],
)
def test_logo_size_is_clamped_per_template(template_id: str, at_max: str, at_min: str) -> None:
    big = render(make_signature(templateId=template_id, images={"logo": "l.png", "logoSize": 300}))
    small = render(make_signature(templateId=template_id, images={"logo": "l.png", "logoSize": 10}))
    assert big.find("img", id="logo-element")["width"] == at_max
    assert small.find("img", id="logo-element")["width"] == at_min


def sales_main_cell(**images) -> BeautifulSoup:
    soup = render(make_signature(templateId="sales-professional", images=images))
    return soup.find("td", class_="main")


def test_sales_professional_background_and_overlay() -> None:
    cell = sales_main_cell(background="bg.png", backgroundOpacity=40)
    assert cell["background"] == f"{BASE_URL}/api/files/bg.png"
    assert f"url('{BASE_URL}/api/files/bg.png')" in cell["style"]
    assert "rgba(255, 255, 255, 0.6)" in cell.find("div")["style"]


def test_background_opacity_is_clamped() -> None:
    opaque = sales_main_cell(background="bg.png", backgroundOpacity=150)
    assert "rgba(255, 255, 255, 0)" in opaque.find("div")["style"]

    hidden = sales_main_cell(background="bg.png", backgroundOpacity=-5)
    assert "rgba(255, 255, 255, 1)" in hidden.find("div")["style"]


def test_no_background_leaves_no_overlay() -> None:
    cell = sales_main_cell()
    assert cell.get("background") is None
    assert cell.find("div").get("style") is None


def test_images_are_resolved_before_rendering() -> None:
    soup = render(make_signature(images={"logo": {"url": "/api/files/logo.png"}}))
    assert soup.find("img", id="logo-element")["src"] == f"{BASE_URL}/api/files/logo.png"


def test_placeholder_company_is_marked_with_subtitle() -> None:
    info = {"name": "Jane", "title": "CEO", "company": "", "email": "j@x.test"}
    placeholder = render(make_signature(templateId="sales-professional", personalInfo=info)).get_text()
    assert "COMPANY" in placeholder
    assert "GRAPHICS" in placeholder

    genuine = render(make_signature(templateId="sales-professional")).get_text()
    assert "Acme Corp" in genuine
    assert "GRAPHICS" not in genuine


def test_modern_placeholder_company_is_dimmed() -> None:
    info = {"name": "Jane", "title": "CEO", "email": "j@x.test"}
    soup = render(make_signature(templateId="modern", personalInfo=info))
    placeholder = soup.find(class_="company-placeholder")
    assert placeholder is not None
    assert placeholder.get_text() == "TECHSPACE"


def test_minimal_shows_brand_placeholder_without_logo() -> None:
    soup = render(make_signature(templateId="minimal"))
    text = soup.get_text()
    assert "APEX" in text
    assert "SOLUTIONS" in text
    assert "Acme Corp" in text

    with_logo = render(make_signature(templateId="minimal", images={"logo": "logo.png"}))
    assert "APEX" not in with_logo.get_text()


def test_user_text_is_escaped() -> None:
    info = {"name": "<script>x</script>", "title": "A & B", "company": "Acme", "email": "j@x.test"}
    html = str(render(make_signature(personalInfo=info)))
    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_element_positions_become_inline_transforms() -> None:
    soup = render(
        make_signature(
            images={"headshot": "me.png"},
            elementPositions={"headshot": {"x": 10, "y": 0, "scale": 1}},
        )
    )
    style = soup.find("img", id="headshot-element")["style"]
    assert "translate(10px, 0px)" in style
    assert "scale(" not in style


def test_animation_classes_only_in_animated_render() -> None:
    signature = make_signature(
        images={"headshot": "me.png"}, elementAnimations={"headshot": "pulse"}
    )
    static = render(signature)
    animated = render(signature, animated=True)
    assert "animate-pulse" not in static.find("img", id="headshot-element")["class"]
    assert "animate-pulse" in animated.find("img", id="headshot-element")["class"]


def test_email_client_css_is_appended() -> None:
    soup = render(make_signature(), email_client="outlook")
    assert "mso-table-lspace" in soup.style.get_text()


def test_unknown_template_falls_back_to_default(caplog) -> None:
    with caplog.at_level(logging.WARNING):
        layout = get_layout("retro")
    assert layout is DEFAULT_LAYOUT
    assert "retro" in caplog.text

    with pytest.raises(InvalidTemplateError):
        lookup_layout("retro")


def test_creative_uses_default_layout() -> None:
    assert isinstance(get_layout("creative"), type(DEFAULT_LAYOUT))
