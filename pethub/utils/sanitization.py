import re
from typing import Any, Optional

_HTML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
}
_HTML_ESCAPE_PATTERN = re.compile(r'[&<>"]')


def escape_html(value: Any) -> str:
    """
    Escape text for inclusion in printed HTML documents.

    Only &, <, > and " are replaced, matching what the print templates need for
    element content and double-quoted attributes. None renders as an empty string.
    """
    if value is None:
        return ""
    return _HTML_ESCAPE_PATTERN.sub(lambda m: _HTML_ESCAPES[m.group(0)], str(value))


def strip_control_characters(value: str) -> str:
    """Remove ASCII control characters (keeps tab, newline and carriage return)"""
    return re.sub(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]", "", value)


def clean_text_input(value: Optional[str], max_length: int = 500) -> Optional[str]:
    """
    Trim free text from a form and drop control characters.

    Raises:
        ValueError: If input exceeds max_length
    """
    if value is None:
        return None

    value = str(value).strip()

    if len(value) > max_length:
        raise ValueError(f"Input exceeds maximum length of {max_length} characters")

    return strip_control_characters(value)
