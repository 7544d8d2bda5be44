"""Pagination value resolution."""

from __future__ import annotations

from QuerySpec.concerns.lists import to_int

UNLIMITED = -1


def clamp_page(page: int) -> int:
    """Clamp a page number to a minimum of 1."""
    return max(1, int(page))


def coerce_int(value: object, default: int) -> int:
    """Coerce a raw signal value to int, falling back to ``default``."""
    number = to_int(value)
    return default if number is None else number


def page_window(page: int, per_page: int) -> tuple[int, int]:
    """Return ``(number, offset)`` for a 1-based page.

    Both inputs are clamped to at least 1.
    """
    safe_page = max(1, int(page))
    safe_per_page = max(1, int(per_page))
    return safe_per_page, (safe_page - 1) * safe_per_page
