"""Turn stored image references into absolute URLs email clients can fetch"""

import logging
import posixpath
from dataclasses import dataclass
from typing import Any, Optional, Union

from ...config import PUBLIC_BASE_URL
from .errors import ImageResolutionError

logger = logging.getLogger(__name__)

# Paths the file server already exposes verbatim
SERVED_PREFIXES = ("/api/files/", "/attached_assets/", "/objects/")
# Dev-server filesystem alias that leaks into stored references
FS_ALIAS_PREFIX = "/@fs/"
ATTACHED_ASSETS_SEGMENT = "/attached_assets/"
FILES_ROUTE = "/api/files/"


@dataclass(frozen=True)
class DirectUrl:
    url: str


@dataclass(frozen=True)
class StoredRef:
    path: str


ImageSource = Union[DirectUrl, StoredRef]


def classify_image(raw: Any) -> ImageSource:
    """Normalize a string or legacy ``{"url": ...}`` object into a tagged source"""
    if hasattr(raw, "url"):
        raw = raw.url
    elif isinstance(raw, dict):
        raw = raw.get("url")

    if not isinstance(raw, str) or not raw.strip():
        raise ImageResolutionError(f"Unusable image reference: {raw!r}")

    value = raw.strip()
    if value.lower().startswith(("http://", "https://")):
        return DirectUrl(value)
    return StoredRef(value)


def _stored_path(path: str) -> str:
    if path.startswith(SERVED_PREFIXES):
        return path
    if path.startswith(FS_ALIAS_PREFIX) and ATTACHED_ASSETS_SEGMENT in path:
        filename = posixpath.basename(path)
        if not filename:
            raise ImageResolutionError(f"Filesystem alias without a filename: {path}")
        return f"/attached_assets/{filename}"
    filename = path.lstrip("/")
    if not filename:
        raise ImageResolutionError("Empty stored image path")
    return f"{FILES_ROUTE}{filename}"


def resolve_image_url(image: Any, base_url: Optional[str] = None) -> Optional[str]:
    """
    Resolve an image reference to an absolute URL.

    Returns None when the reference cannot be resolved; callers omit the image.
    """
    if image is None:
        return None

    base = (base_url or PUBLIC_BASE_URL).rstrip("/")
    try:
        source = classify_image(image)
        if isinstance(source, DirectUrl):
            return source.url
        return f"{base}{_stored_path(source.path)}"
    except ImageResolutionError as e:
        logger.warning(f"⚠️ Image omitted from signature: {e}")
        return None
