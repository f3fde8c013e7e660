"""Typed failures of the export pipeline.

Every error carries the ``stage`` it was raised from so the HTTP layer can
report where an export stopped without leaking partial output.
"""

from typing import Optional


class SignatureExportError(Exception):
    """Base class for all export failures"""

    stage = "export"
    status_code = 500

    def __init__(self, message: str, stage: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if stage:
            self.stage = stage


class InvalidTemplateError(SignatureExportError):
    """Unknown template id. Recovered by falling back to the default layout."""

    stage = "layout"

    def __init__(self, template_id: str):
        super().__init__(f"Unknown template '{template_id}'")
        self.template_id = template_id


class MissingRequiredFieldError(SignatureExportError):
    stage = "validation"
    status_code = 422

    def __init__(self, fields: list[str]):
        super().__init__(f"Missing required fields: {', '.join(fields)}")
        self.fields = fields


class ImageResolutionError(SignatureExportError):
    """Image reference could not be turned into an absolute URL. Never escapes the resolver."""

    stage = "image"


class CssInliningError(SignatureExportError):
    stage = "inline"


class TableExtractionError(SignatureExportError):
    stage = "extract"

    def __init__(self, message: str, template_id: str, signature_id: Optional[str] = None):
        super().__init__(f"{message} (template={template_id}, signature={signature_id})")
        self.template_id = template_id
        self.signature_id = signature_id


class RenderingSurfaceError(SignatureExportError):
    stage = "render"
    status_code = 503


class ExportTimeoutError(RenderingSurfaceError):
    stage = "timeout"


class GifEncodingError(SignatureExportError):
    stage = "encode"


class MarkupCompilationError(SignatureExportError):
    stage = "mjml"
