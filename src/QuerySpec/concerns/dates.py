"""Date-range filter clauses on ``date_query``."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Mapping

from dateutil import parser as dt_parser

from QuerySpec.core.args import ArgumentStore
from QuerySpec.core.clauses import AND, append_clause

DATE_QUERY = "date_query"

DateBoundary = str | date | datetime | Mapping[str, Any]


def render_boundary(value: DateBoundary) -> str | dict[str, Any]:
    """Render a boundary as the engine expects it.

    ``date``/``datetime`` values become ``YYYY-MM-DD``; strings and
    ``{year, month, day}`` mappings pass through.
    """
    if isinstance(value, (date, datetime)):
        return value.strftime("%Y-%m-%d")
    if isinstance(value, Mapping):
        return dict(value)
    return str(value)


def boundary_clause(edge: str, value: DateBoundary, inclusive: bool = True) -> dict[str, Any]:
    """Build an ``after``/``before`` clause."""
    return {edge: render_boundary(value), "inclusive": inclusive}


def append_date(store: ArgumentStore, clause: Mapping[str, Any]) -> None:
    """Append ``clause`` to the store's ``date_query`` group (default AND)."""
    group = append_clause(store.get(DATE_QUERY, {}), clause, AND)
    store.set(DATE_QUERY, group)


def parse_signal_date(value: object) -> date | None:
    """Parse a raw signal value into a date.

    Args:
        value: Raw value; strings are parsed with python-dateutil.

    Returns:
        Parsed date, or None when the value is absent or unparseable.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return dt_parser.parse(value.strip()).date()
    except (ValueError, OverflowError):
        return None
