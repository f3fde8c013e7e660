"""Export orchestrator - picks the static or animated path for a signature"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from ...config import EXPORT_TIMEOUT_SECONDS, PUBLIC_BASE_URL
from ...storage import ObjectStorage
from ..signatures.schemas import SignatureRecord
from .animation import FrameConfig
from .errors import MissingRequiredFieldError, SignatureExportError
from .gif_baker import ElementBaker, strip_animation_markup, substitute_rasters
from .inliner import inline_css
from .layouts import LayoutContext, SignatureLayout, get_layout
from .mjml_export import build_mjml, compile_mjml_to_html
from .rendering_pool import Deadline, RenderingSurfacePool
from .table_extractor import ValidationResult, extract_table, normalize_images, validate_markup

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "title", "company", "email")


@dataclass
class ExportResult:
    html: str
    gif_urls: dict[str, str] = field(default_factory=dict)
    validation: Optional[ValidationResult] = None


@dataclass
class InlineExportResult:
    html: str
    validation: ValidationResult
    format: str = "inline-table"


@dataclass
class MjmlExportResult:
    html: str
    mjml: str
    validation: ValidationResult
    format: str = "mjml"


def missing_required_fields(signature: SignatureRecord) -> list[str]:
    info = signature.personalInfo
    return [name for name in REQUIRED_FIELDS if not (getattr(info, name) or "").strip()]


def require_fields(signature: SignatureRecord) -> None:
    missing = missing_required_fields(signature)
    if missing:
        logger.warning(f"⚠️ Signature {signature.id} cannot be exported, missing {missing}")
        raise MissingRequiredFieldError(missing)


class SignatureExporter:
    """
    Turns a signature record into email-client-safe HTML.

    The exporter never mutates the record. Any failing stage raises a
    ``SignatureExportError`` and no HTML is returned.
    """

    def __init__(
        self,
        pool: RenderingSurfacePool,
        storage: ObjectStorage,
        base_url: str = PUBLIC_BASE_URL,
        frame_config: Optional[FrameConfig] = None,
        timeout_seconds: float = EXPORT_TIMEOUT_SECONDS,
    ):
        self.pool = pool
        self.storage = storage
        self.base_url = base_url.rstrip("/")
        self.frame_config = frame_config or FrameConfig()
        self.timeout_seconds = timeout_seconds

    def preview(self, signature: SignatureRecord) -> str:
        """Raw layout HTML, placeholders included, without export checks"""
        layout = get_layout(signature.templateId)
        return layout.render(LayoutContext.build(signature, self.base_url))

    def export(self, signature: SignatureRecord, email_client: str = "gmail") -> ExportResult:
        require_fields(signature)
        layout = get_layout(signature.templateId)

        # The stored tag can be stale, the animation map is authoritative
        if signature.has_active_animation:
            result = self._export_animated(signature, layout, email_client)
        else:
            result = self._export_static(signature, layout, email_client)

        if result.validation and not result.validation.valid:
            logger.warning(
                f"⚠️ Signature {signature.id} exported with compatibility issues: "
                f"{result.validation.issues}"
            )
        logger.info(
            f"✅ Exported signature {signature.id} ({layout.template_id}, "
            f"{len(result.gif_urls)} animated elements)"
        )
        return result

    def export_inline(self, signature: SignatureRecord) -> InlineExportResult:
        require_fields(signature)
        layout = get_layout(signature.templateId)
        result = self._export_static(signature, layout, email_client=None)
        return InlineExportResult(html=result.html, validation=result.validation)

    def export_mjml(self, signature: SignatureRecord) -> MjmlExportResult:
        require_fields(signature)
        mjml = build_mjml(signature, self.base_url)
        html, compile_errors = compile_mjml_to_html(mjml)
        html = normalize_images(html)

        # Compiled MJML is multi-table by construction
        validation = validate_markup(html, require_single_table=False)
        issues = validation.issues + [f"MJML: {error}" for error in compile_errors]
        return MjmlExportResult(
            html=html,
            mjml=mjml,
            validation=ValidationResult(valid=not issues, issues=issues),
        )

    def _finish(self, raw_html: str, signature: SignatureRecord, layout: SignatureLayout) -> str:
        inlined = inline_css(raw_html)
        return extract_table(inlined, layout.template_id, signature.id)

    def _export_static(
        self, signature: SignatureRecord, layout: SignatureLayout, email_client: Optional[str]
    ) -> ExportResult:
        ctx = LayoutContext.build(signature, self.base_url, email_client=email_client)
        html = self._finish(layout.render(ctx), signature, layout)
        return ExportResult(html=html, validation=validate_markup(html))

    def _export_animated(
        self, signature: SignatureRecord, layout: SignatureLayout, email_client: Optional[str]
    ) -> ExportResult:
        deadline = Deadline(self.timeout_seconds)
        ctx = LayoutContext.build(signature, self.base_url, animated=True, email_client=email_client)
        raw_html = layout.render(ctx)
        animations = signature.elementAnimations.active()
        platforms = tuple(platform for platform, _ in layout.social_links(ctx))

        baker = ElementBaker(
            self.storage, self.frame_config, background=layout.background_color, deadline=deadline
        )
        baked = []
        try:
            with self.pool.acquire(deadline) as surface:
                surface.load(raw_html, timeout=deadline.remaining())
                for element, animation in animations.items():
                    deadline.check()
                    baked.extend(baker.bake(surface, element, animation, platforms))
        except SignatureExportError as e:
            logger.error(f"❌ Animated export of {signature.id} failed at {e.stage}: {e.message}")
            raise

        html = strip_animation_markup(substitute_rasters(raw_html, baked))
        html = self._finish(html, signature, layout)
        deadline.check()
        return ExportResult(
            html=html,
            gif_urls={item.key: item.url for item in baked},
            validation=validate_markup(html),
        )
