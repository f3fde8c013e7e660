"""Single-table extraction and email compatibility checks"""

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from bs4 import BeautifulSoup, Tag

from .errors import TableExtractionError

logger = logging.getLogger(__name__)

PX_VALUE = re.compile(r"^\s*(\d+(?:\.\d+)?)px\s*$")

ISSUE_TABLE_COUNT = "Must contain exactly one top-level table element"
ISSUE_STYLES = "Contains external styles - all styles should be inlined"
ISSUE_TABLE_ATTRS = 'Table missing required cellpadding="0" cellspacing="0" attributes'
ISSUE_IMAGE_BORDER = 'Image missing border="0" attribute'
ISSUE_CLIP_PATH = "Contains clip-path which may not work in all email clients"
ISSUE_ABSOLUTE = "Contains absolute positioning which may not work in Gmail"


@dataclass
class ValidationResult:
    valid: bool
    issues: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"valid": self.valid, "issues": list(self.issues)}


def parse_style(style: Optional[str]) -> dict[str, str]:
    """Inline style attribute as {property: value}, last declaration wins"""
    declarations = {}
    for chunk in (style or "").split(";"):
        if ":" not in chunk:
            continue
        prop, value = chunk.split(":", 1)
        prop = prop.strip().lower()
        if prop:
            declarations[prop] = value.strip()
    return declarations


def top_level_tables(soup: BeautifulSoup) -> list[Tag]:
    return [t for t in soup.find_all("table") if t.find_parent("table") is None]


def _fix_images(root: Tag) -> None:
    for img in root.find_all("img"):
        img["border"] = "0"
        styles = parse_style(img.get("style"))
        for dimension in ("width", "height"):
            if img.get(dimension):
                continue
            match = PX_VALUE.match(styles.get(dimension, ""))
            if match:
                img[dimension] = f"{float(match.group(1)):g}"


def normalize_images(html: str) -> str:
    """Give every image border="0" and explicit pixel dimensions"""
    soup = BeautifulSoup(html, "lxml")
    _fix_images(soup)
    return str(soup)


def extract_table(
    inlined_html: str, template_id: str, signature_id: Optional[str] = None
) -> str:
    """
    Pull the single top-level table out of an inlined document.

    Everything outside the table is discarded. Images get ``border="0"`` and
    explicit width/height attributes copied from their pixel styles.
    """
    soup = BeautifulSoup(inlined_html, "lxml")
    tables = top_level_tables(soup)
    if len(tables) != 1:
        logger.error(
            f"❌ Expected one top-level table, found {len(tables)} "
            f"(template={template_id}, signature={signature_id})"
        )
        raise TableExtractionError(
            f"Expected exactly one top-level table, found {len(tables)}",
            template_id=template_id,
            signature_id=signature_id,
        )

    table = tables[0]
    table["cellpadding"] = "0"
    table["cellspacing"] = "0"
    table["border"] = "0"

    for leftover in table.find_all(["style", "link", "script"]):
        leftover.decompose()

    _fix_images(table)

    for element in [table, *table.find_all(True)]:
        if "class" in element.attrs:
            del element["class"]

    return str(table)


def validate_markup(html: str, require_single_table: bool = True) -> ValidationResult:
    """
    Report email client compatibility issues without touching the markup.

    With ``require_single_table=False`` (compiled MJML documents) the
    structural checks are skipped and only element level checks run.
    """
    soup = BeautifulSoup(html, "lxml")
    issues = []

    if require_single_table:
        tables = top_level_tables(soup)
        if len(tables) != 1:
            issues.append(f"{ISSUE_TABLE_COUNT} (found {len(tables)})")
        if soup.find(["style", "link"]):
            issues.append(ISSUE_STYLES)
        if tables:
            root = tables[0]
            if root.get("cellpadding") != "0" or root.get("cellspacing") != "0":
                issues.append(ISSUE_TABLE_ATTRS)

    if any(img.get("border") != "0" for img in soup.find_all("img")):
        issues.append(ISSUE_IMAGE_BORDER)

    styles = [parse_style(el.get("style")) for el in soup.find_all(style=True)]
    if any("clip-path" in s for s in styles):
        issues.append(ISSUE_CLIP_PATH)
    if any(s.get("position", "").lower() == "absolute" for s in styles):
        issues.append(ISSUE_ABSOLUTE)

    return ValidationResult(valid=not issues, issues=issues)
