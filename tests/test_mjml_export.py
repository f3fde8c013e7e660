from __future__ import annotations

from collections import namedtuple

import pytest

from signature_studio.domain.export import mjml_export
from signature_studio.domain.export.errors import MarkupCompilationError
from signature_studio.domain.export.mjml_export import build_mjml, compile_mjml_to_html
from signature_studio.domain.export.orchestrator import SignatureExporter
from tests.conftest import BASE_URL, make_signature

ParseResult = namedtuple("ParseResult", ["html", "errors"])


class AttributeResult:
    """Attribute-style result as returned by older compiler releases"""

    def __init__(self, html, errors) -> None:
        self.html = html
        self.errors = errors


class BrokenResult:
    @property
    def html(self):
        raise RuntimeError("corrupt result")

    errors = ()


def test_compile_reads_named_tuple_result(monkeypatch) -> None:
    monkeypatch.setattr(mjml_export, "mjml_to_html", lambda source: ParseResult("<table></table>", []))
    assert compile_mjml_to_html("<mjml></mjml>") == ("<table></table>", [])


def test_compile_reads_attribute_result_and_formats_errors(monkeypatch) -> None:
    result = AttributeResult(
        "<table></table>",
        [{"formattedMessage": "Line 3: mj-text has invalid attribute"}, "plain warning"],
    )
    monkeypatch.setattr(mjml_export, "mjml_to_html", lambda source: result)

    html, errors = compile_mjml_to_html("<mjml></mjml>")
    assert html == "<table></table>"
    assert errors == ["Line 3: mj-text has invalid attribute", "plain warning"]


def test_unreadable_result_is_a_compilation_error(monkeypatch) -> None:
    monkeypatch.setattr(mjml_export, "mjml_to_html", lambda source: BrokenResult())
    with pytest.raises(MarkupCompilationError) as exc_info:
        compile_mjml_to_html("<mjml></mjml>")
    assert exc_info.value.stage == "mjml"


def test_empty_html_is_a_compilation_error(monkeypatch) -> None:
    monkeypatch.setattr(mjml_export, "mjml_to_html", lambda source: ParseResult("", []))
    with pytest.raises(MarkupCompilationError):
        compile_mjml_to_html("<mjml></mjml>")


def test_compiles_every_template_with_installed_compiler() -> None:
    for template_id in ("professional", "modern", "minimal", "sales-professional"):
        source = build_mjml(make_signature(templateId=template_id), BASE_URL)
        html, errors = compile_mjml_to_html(source)
        assert "Jane Doe" in html
        assert isinstance(errors, list)


def test_export_mjml_surfaces_compiler_warnings(
    exporter: SignatureExporter, monkeypatch
) -> None:
    monkeypatch.setattr(
        mjml_export,
        "mjml_to_html",
        lambda source: ParseResult('<table><tr><td><img src="x.png"></td></tr></table>', ["bad attribute"]),
    )
    result = exporter.export_mjml(make_signature(templateId="modern"))
    assert "MJML: bad attribute" in result.validation.issues
    assert result.validation.valid is False
