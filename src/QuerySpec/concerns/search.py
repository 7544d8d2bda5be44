"""Free-text search input handling."""

from __future__ import annotations

import re
from collections.abc import Callable

Sanitizer = Callable[[str], str]

_RE_TAG = re.compile(r"<[^>]*>")
_RE_WS = re.compile(r"\s+")
_RE_CONTROL = re.compile(r"[\x00-\x1f\x7f]")


def sanitize_text(value: str) -> str:
    """Default sanitizer: strip markup tags, control characters and extra whitespace."""
    text = _RE_TAG.sub("", value)
    text = _RE_WS.sub(" ", text)
    text = _RE_CONTROL.sub("", text)
    return text.strip()


def resolve_search(value: str | None, sanitizer: Sanitizer | None = None) -> str | None:
    """Sanitize a search term.

    Args:
        value: Raw search input.
        sanitizer: Hook applied to the input; defaults to ``sanitize_text``.

    Returns:
        Sanitized term, or None when the input is None or blank afterwards.
    """
    if value is None:
        return None
    cleaned = (sanitizer or sanitize_text)(str(value))
    return cleaned or None
