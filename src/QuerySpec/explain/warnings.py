"""Advisory diagnostics derived from a finished specification.

Warnings are informational only. They are computed from the specification
alone, so the same specification always yields the same list no matter which
call order produced it.
"""

from __future__ import annotations

from typing import Any, Mapping

from QuerySpec.concerns.ordering import META_VALUE, META_VALUE_NUM
from QuerySpec.concerns.pagination import UNLIMITED

UNLIMITED_WITH_PAGE = "Using posts_per_page=-1 with paged is usually conflicting and paged will be ignored."
HIDE_EMPTY_UNSET = (
    "hide_empty was not explicitly set; the engine defaults to true, which excludes terms with no posts."
)


def post_warnings(args: Mapping[str, Any]) -> list[str]:
    """Return warnings for a posts specification.

    Current warnings:
    - ``posts_per_page = -1`` together with ``paged``
    - value ordering (``meta_value``/``meta_value_num``) without ``meta_key``
    """
    warnings: list[str] = []
    if _is_unlimited(args.get("posts_per_page")) and "paged" in args:
        warnings.append(UNLIMITED_WITH_PAGE)
    warnings.extend(_ordering_warnings(args))
    return warnings


def term_warnings(args: Mapping[str, Any]) -> list[str]:
    """Return warnings for a terms specification."""
    warnings: list[str] = []
    if "hide_empty" not in args:
        warnings.append(HIDE_EMPTY_UNSET)
    warnings.extend(_ordering_warnings(args))
    return warnings


def _ordering_warnings(args: Mapping[str, Any]) -> list[str]:
    orderby = args.get("orderby")
    if orderby in (META_VALUE, META_VALUE_NUM) and not args.get("meta_key"):
        return [f"Using orderby={orderby} without meta_key will produce unreliable ordering."]
    return []


def _is_unlimited(value: object) -> bool:
    return not isinstance(value, bool) and value in (UNLIMITED, str(UNLIMITED))
