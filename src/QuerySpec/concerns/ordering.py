"""Ordering direction handling."""

from __future__ import annotations

from typing import Final

ASC: Final[str] = "ASC"
DESC: Final[str] = "DESC"

META_VALUE: Final[str] = "meta_value"
META_VALUE_NUM: Final[str] = "meta_value_num"


def normalise_order(order: object, default: str, method: str) -> tuple[str, str | None]:
    """Normalize a sort direction to ``ASC``/``DESC``.

    Args:
        order: Raw direction token.
        default: Direction used when ``order`` is not recognized.
        method: Calling method name, used in the advisory message.

    Returns:
        ``(direction, advisory)`` where ``advisory`` is None for valid input.
    """
    fallback = DESC if str(default).strip().upper() == DESC else ASC
    token = str(order).strip().upper() if order is not None else ""
    if token in (ASC, DESC):
        return token, None
    return fallback, f"Invalid order direction '{order}' in {method}(); defaulted to '{fallback}'."
