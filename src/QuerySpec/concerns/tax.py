"""Categorical (taxonomy) filter clauses on ``tax_query``."""

from __future__ import annotations

from typing import Any, Mapping

from QuerySpec.core.args import ArgumentStore
from QuerySpec.core.clauses import AND, append_clause

TAX_QUERY = "tax_query"


def normalize_terms(terms: object) -> list[Any]:
    """Drop ``None`` and blank-string members from candidate terms.

    A scalar is treated as a one-element list. Surviving strings are kept as
    given.
    """
    if terms is None:
        return []
    if isinstance(terms, (str, bytes, int, float)):
        candidates: list[Any] = [terms]
    elif isinstance(terms, Mapping):
        candidates = list(terms.values())
    else:
        try:
            candidates = list(terms)  # type: ignore[call-overload]
        except TypeError:
            candidates = [terms]

    out: list[Any] = []
    for term in candidates:
        if term is None:
            continue
        if isinstance(term, str) and not term.strip():
            continue
        out.append(term)
    return out


def tax_clause(taxonomy: str, terms: list[Any], field: str = "term_id", operator: str = "IN") -> dict[str, Any]:
    """Build one ``{taxonomy, field, terms, operator}`` clause."""
    return {
        "taxonomy": taxonomy,
        "field": field,
        "terms": list(terms),
        "operator": operator,
    }


def append_tax(
    store: ArgumentStore,
    clause: Mapping[str, Any],
    default_relation: str = AND,
    forced_relation: str | None = None,
) -> None:
    """Append ``clause`` to the store's ``tax_query`` group."""
    group = append_clause(store.get(TAX_QUERY, {}), clause, default_relation, forced_relation)
    store.set(TAX_QUERY, group)
