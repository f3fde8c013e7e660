"""CSS inlining - move <style> rules into style attributes"""

import logging

from bs4 import BeautifulSoup
from premailer import Premailer

from .errors import CssInliningError

logger = logging.getLogger(__name__)


def inline_css(raw_html: str) -> str:
    """
    Inline every stylesheet rule into the elements it matches.

    Cascade and specificity follow standard CSS ordering. ``class`` attributes,
    ``<link>`` tags and all ``<style>`` blocks are gone from the result;
    ``@media`` and ``@keyframes`` rules have no inline form and are dropped.
    """
    soup = BeautifulSoup(raw_html, "lxml")
    for link in soup.find_all("link"):
        link.decompose()

    try:
        inlined = Premailer(
            str(soup),
            remove_classes=True,
            keep_style_tags=False,
            strip_important=False,
            disable_validation=True,
            allow_network=False,
            cssutils_logging_level=logging.CRITICAL,
        ).transform()
    except Exception as e:
        logger.error(f"❌ CSS inlining failed: {e}")
        raise CssInliningError(f"Failed to inline CSS: {e}") from e

    # Rules premailer could not inline (media queries, keyframes) come back in a <style> block
    result = BeautifulSoup(inlined, "lxml")
    for leftover in result.find_all(["style", "link"]):
        leftover.decompose()
    return str(result)
