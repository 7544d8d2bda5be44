"""Meta (field/value range) filter clauses on ``meta_query``."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Mapping

from QuerySpec.core.args import ArgumentStore
from QuerySpec.core.clauses import AND, append_clause

META_QUERY = "meta_query"


def meta_clause(key: str, value: Any, compare: str = "=", type_: str = "CHAR") -> dict[str, Any]:
    """Build one ``{key, value, compare, type}`` clause."""
    return {
        "key": key,
        "value": value,
        "compare": compare,
        "type": type_.upper(),
    }


def presence_clause(key: str, compare: str) -> dict[str, Any]:
    """Build a value-less clause such as ``EXISTS`` / ``NOT EXISTS``."""
    return {"key": key, "compare": compare}


def append_meta(
    store: ArgumentStore,
    clause: Mapping[str, Any],
    default_relation: str = AND,
    forced_relation: str | None = None,
) -> None:
    """Append ``clause`` to the store's ``meta_query`` group."""
    group = append_clause(store.get(META_QUERY, {}), clause, default_relation, forced_relation)
    store.set(META_QUERY, group)


def resolve_date_value(value: str | date | datetime | None, *, today: date | None = None) -> str:
    """Resolve a meta date value to ``YYYYMMDD``.

    Args:
        value: Explicit value; ``None`` means today.
        today: Override for the current date.

    Returns:
        Date string. Strings are passed through unchanged.
    """
    if value is None:
        return (today or date.today()).strftime("%Y%m%d")
    if isinstance(value, (date, datetime)):
        return value.strftime("%Y%m%d")
    return str(value)
