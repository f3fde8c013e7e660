import html
import re
from typing import Optional

SAFE_URL_SCHEMES = ("http://", "https://", "mailto:", "tel:")


def sanitize_string(value: Optional[str]) -> Optional[str]:
    """
    Sanitize a string by escaping HTML special characters to prevent XSS.
    Returns None if input is None.
    """
    if value is None:
        return None
    if not isinstance(value, str):
        return value
    return html.escape(str(value), quote=True)


def sanitize_url(value: Optional[str]) -> Optional[str]:
    """
    Normalize a user supplied link for use as an href.

    Bare domains get an https:// scheme. Script and data URLs are rejected.
    Returns None for empty or unsafe input.
    """
    if not value or not isinstance(value, str):
        return None

    url = re.sub(r"[\x00-\x20\x7F]", "", value.strip())
    if not url:
        return None

    lowered = url.lower()
    if lowered.startswith(SAFE_URL_SCHEMES):
        return url
    if re.match(r"^[a-z][a-z0-9+.-]*:", lowered) and not lowered.startswith("www."):
        # javascript:, data:, vbscript: and friends
        return None
    return f"https://{url.lstrip('/')}"


def validate_and_sanitize_input(value: str, max_length: int = 500) -> str:
    """
    Validate and sanitize user input by removing potentially harmful content.

    Args:
        value: Input string to validate
        max_length: Maximum allowed length

    Returns:
        Sanitized string

    Raises:
        ValueError: If input is invalid
    """
    if not value:
        return ""

    value = str(value).strip()

    if len(value) > max_length:
        raise ValueError(f"Input exceeds maximum length of {max_length} characters")

    value = html.escape(value, quote=True)

    value = re.sub(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]", "", value)

    return value
