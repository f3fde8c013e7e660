"""Layout registry - one generator per template id"""

import logging

from ..errors import InvalidTemplateError
from .base import LayoutContext, SignatureLayout, clamp_percent, position_transform, scaled
from .default import DefaultLayout
from .minimal import MinimalLayout
from .modern import ModernLayout
from .sales_professional import SalesProfessionalLayout

logger = logging.getLogger(__name__)

LAYOUTS: dict[str, SignatureLayout] = {
    "sales-professional": SalesProfessionalLayout(),
    "modern": ModernLayout(),
    "minimal": MinimalLayout(),
    "professional": DefaultLayout(),
    "creative": DefaultLayout(),
}

DEFAULT_LAYOUT = LAYOUTS["professional"]


def lookup_layout(template_id: str) -> SignatureLayout:
    """Return the layout for a template id, raising for unknown ids"""
    try:
        return LAYOUTS[template_id]
    except KeyError:
        raise InvalidTemplateError(template_id) from None


def get_layout(template_id: str) -> SignatureLayout:
    """Return the layout for a template id, falling back to the default layout"""
    try:
        return lookup_layout(template_id)
    except InvalidTemplateError as e:
        logger.warning(f"⚠️ {e.message}, using default layout")
        return DEFAULT_LAYOUT


__all__ = [
    "DEFAULT_LAYOUT",
    "LAYOUTS",
    "LayoutContext",
    "SignatureLayout",
    "clamp_percent",
    "get_layout",
    "lookup_layout",
    "position_transform",
    "scaled",
]
