from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from signature_studio.domain.export.errors import (
    ExportTimeoutError,
    MissingRequiredFieldError,
    RenderingSurfaceError,
)
from signature_studio.domain.export.orchestrator import SignatureExporter, missing_required_fields
from signature_studio.domain.export.rendering_pool import RenderingSurfacePool
from signature_studio.domain.export.table_extractor import ISSUE_ABSOLUTE, top_level_tables
from tests.conftest import BASE_URL, FULL_SOCIAL, FakeSurface, InMemoryStorage, make_signature

TEMPLATES = ["professional", "modern", "minimal", "creative", "sales-professional"]
IMAGES = {"headshot": "/api/files/me.png", "logo": "/api/files/logo.png"}


def test_scenario_minimal_without_images_or_social(exporter: SignatureExporter) -> None:
    signature = make_signature(templateId="minimal")
    result = exporter.export(signature)
    soup = BeautifulSoup(result.html, "lxml")
    text = soup.get_text()

    assert "Jane Doe" in text
    assert "Head of Sales" in text
    assert "APEX" in text
    assert "SOLUTIONS" in text
    assert soup.find_all("img") == []
    assert result.gif_urls == {}


def test_scenario_sales_professional_sidebar_and_headshot(exporter: SignatureExporter) -> None:
    signature = make_signature(
        templateId="sales-professional",
        images={"headshot": "/api/files/me.png", "headshotSize": 150},
        socialMedia=FULL_SOCIAL,
    )
    soup = BeautifulSoup(exporter.export(signature).html, "lxml")

    order = [a["data-platform"] for a in soup.find_all("a", attrs={"data-platform": True})]
    assert order == ["twitter", "linkedin", "instagram", "youtube", "tiktok"]
    assert soup.find("img", id="headshot-element")["width"] == str(round(256 * 1.5))


def test_scenario_only_headshot_is_animated(
    exporter: SignatureExporter, surface: FakeSurface, pool: RenderingSurfacePool
) -> None:
    signature = make_signature(
        images=IMAGES,
        socialMedia=FULL_SOCIAL,
        elementAnimations={"headshot": "pulse"},
    )
    result = exporter.export(signature)
    soup = BeautifulSoup(result.html, "lxml")

    assert list(result.gif_urls) == ["headshot"]
    assert soup.find("img", id="headshot-element")["src"] == result.gif_urls["headshot"]
    assert soup.find("img", id="logo-element")["src"] == f"{BASE_URL}/api/files/logo.png"
    social_images = [a.find("img") for a in soup.find_all("a", attrs={"data-platform": True})]
    assert len(social_images) == 5
    assert all(img["src"].endswith(".png") for img in social_images)
    assert "animate-" not in result.html
    assert surface.captured == ["#headshot-element"]
    assert surface.closed
    assert pool.in_use == 0


def test_scenario_inline_export_flags_absolute_positioning(exporter: SignatureExporter) -> None:
    signature = make_signature(templateId="sales-professional", images=IMAGES)
    result = exporter.export_inline(signature)

    assert result.html
    assert result.format == "inline-table"
    assert not result.validation.valid
    assert ISSUE_ABSOLUTE in result.validation.issues
    assert any("clip-path" in issue for issue in result.validation.issues)


def test_static_export_is_idempotent(exporter: SignatureExporter) -> None:
    signature = make_signature(templateId="modern", images=IMAGES, socialMedia=FULL_SOCIAL)
    assert exporter.export(signature).html == exporter.export(signature).html


@pytest.mark.parametrize("template_id", TEMPLATES)
def test_static_exports_keep_single_table(exporter: SignatureExporter, template_id: str) -> None:
    signature = make_signature(templateId=template_id, images=IMAGES, socialMedia=FULL_SOCIAL)
    result = exporter.export(signature, email_client="outlook")
    soup = BeautifulSoup(result.html, "lxml")

    assert len(top_level_tables(soup)) == 1
    assert soup.find("style") is None
    assert soup.find(class_=True) is None
    assert not any("top-level table" in issue for issue in result.validation.issues)


def test_missing_required_fields_fail_before_rendering(
    exporter: SignatureExporter, surface: FakeSurface
) -> None:
    signature = make_signature(
        personalInfo={"name": "Jane", "title": "", "company": "Acme"},
        elementAnimations={"logo": "fade-in"},
    )
    assert missing_required_fields(signature) == ["title", "email"]

    with pytest.raises(MissingRequiredFieldError) as exc_info:
        exporter.export(signature)
    assert exc_info.value.fields == ["title", "email"]
    assert exc_info.value.stage == "validation"
    assert surface.loaded is None

    with pytest.raises(MissingRequiredFieldError):
        exporter.export_mjml(signature)


def test_stale_tag_does_not_choose_the_path(
    exporter: SignatureExporter, surface: FakeSurface
) -> None:
    static = make_signature(images=IMAGES, tag="dynamic")
    assert exporter.export(static).gif_urls == {}
    assert surface.loaded is None

    animated = make_signature(images=IMAGES, tag="static", elementAnimations={"logo": "zoom-in"})
    assert list(exporter.export(animated).gif_urls) == ["logo"]
    assert surface.loaded is not None


def test_unknown_template_is_exported_with_default_layout(exporter: SignatureExporter) -> None:
    fallback = exporter.export(make_signature(templateId="retro")).html
    default = exporter.export(make_signature(templateId="professional")).html
    assert fallback == default


def test_animated_social_icons_keep_their_links(
    exporter: SignatureExporter, storage: InMemoryStorage
) -> None:
    signature = make_signature(socialMedia=FULL_SOCIAL, elementAnimations={"socialIcons": "stick-on"})
    result = exporter.export(signature)
    soup = BeautifulSoup(result.html, "lxml")

    assert sorted(result.gif_urls) == sorted(f"socialIcons.{p}" for p in FULL_SOCIAL)
    for platform, href in FULL_SOCIAL.items():
        anchor = soup.find("a", attrs={"data-platform": platform})
        assert anchor["href"] == href
        assert anchor.find("img")["src"] == result.gif_urls[f"socialIcons.{platform}"]
    assert len(storage.objects) == 5


def test_rendering_failure_releases_surface_and_returns_nothing(storage: InMemoryStorage) -> None:
    surface = FakeSurface(fail_on_capture=True)
    pool = RenderingSurfacePool(max_surfaces=1, launcher=lambda: surface)
    exporter = SignatureExporter(pool=pool, storage=storage, base_url=BASE_URL)

    with pytest.raises(RenderingSurfaceError):
        exporter.export(make_signature(images=IMAGES, elementAnimations={"headshot": "pulse"}))
    assert surface.closed
    assert pool.in_use == 0
    assert storage.objects == {}


def test_export_timeout_releases_surface(storage: InMemoryStorage) -> None:
    surface = FakeSurface()
    pool = RenderingSurfacePool(max_surfaces=1, launcher=lambda: surface)
    exporter = SignatureExporter(pool=pool, storage=storage, base_url=BASE_URL, timeout_seconds=0)

    with pytest.raises(ExportTimeoutError) as exc_info:
        exporter.export(make_signature(images=IMAGES, elementAnimations={"headshot": "pulse"}))
    assert exc_info.value.stage == "timeout"
    assert surface.closed
    assert pool.in_use == 0


def test_export_does_not_mutate_the_signature(exporter: SignatureExporter) -> None:
    signature = make_signature(images=IMAGES, elementAnimations={"headshot": "fade-in"})
    before = signature.model_dump()
    exporter.export(signature)
    assert signature.model_dump() == before


def test_preview_skips_required_field_checks(exporter: SignatureExporter) -> None:
    html = exporter.preview(make_signature(templateId="modern", personalInfo={}))
    assert "TECHSPACE" in html
    assert "<style>" in html


def test_mjml_export_compiles_template(exporter: SignatureExporter) -> None:
    signature = make_signature(templateId="minimal", socialMedia={"linkedin": FULL_SOCIAL["linkedin"]})
    result = exporter.export_mjml(signature)

    assert result.format == "mjml"
    assert result.mjml.startswith("<mjml>")
    assert "Playfair+Display" in result.mjml
    assert "APEX" in result.mjml
    assert "Jane Doe" in result.html
    assert FULL_SOCIAL["linkedin"] in result.html
    assert "twitter" not in result.mjml
    assert not any("top-level table" in issue for issue in result.validation.issues)
