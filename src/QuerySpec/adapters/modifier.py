"""In-place modification of a query object the host already owns."""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Mapping, Protocol

from QuerySpec.concerns.dates import DATE_QUERY
from QuerySpec.concerns.meta import META_QUERY
from QuerySpec.concerns.tax import TAX_QUERY
from QuerySpec.core.clauses import AND, RELATION_KEY, append_clause, as_group, iter_clauses, normalize_relation

CLAUSE_KEYS = (TAX_QUERY, META_QUERY, DATE_QUERY)


class MutableQuery(Protocol):
    """Engine-native query object with get/set access to its variables."""

    def get(self, key: str, default: Any = None) -> Any:
        raise NotImplementedError

    def set(self, key: str, value: Any) -> None:
        raise NotImplementedError


class QueryVars:
    """Dict-backed ``MutableQuery``."""

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self.vars: dict[str, Any] = dict(values or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self.vars.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self.vars[key] = value


class QueryModifierAdapter:
    """Write a specification into an existing query object.

    Scalar keys are set directly. Clause groups are merged clause by clause
    into the query's current group, so filters added elsewhere survive.
    """

    def modify(
        self,
        query: MutableQuery,
        args: Mapping[str, Any],
        forced_relation: str | None = None,
    ) -> MutableQuery:
        """Apply ``args`` to ``query``.

        Args:
            query: Object to modify.
            args: Finished specification.
            forced_relation: Relation that overrides the query's own relation.
                When None, the query's relation wins and the incoming
                group's relation only applies if the query has none.

        Returns:
            The same ``query``.
        """
        for key, value in args.items():
            if key in CLAUSE_KEYS and isinstance(value, (Mapping, list, tuple)):
                query.set(key, merge_group(query.get(key), value, forced_relation))
                continue
            query.set(key, deepcopy(value))
        return query


def merge_group(existing: object, incoming: object, forced_relation: str | None = None) -> dict[Any, Any]:
    """Append every clause of ``incoming`` onto ``existing``.

    Either side may be a keyed group or a plain list of clauses.
    """
    group = as_group(existing)
    incoming = as_group(incoming)
    relation = normalize_relation(incoming.get(RELATION_KEY), AND)
    for _, clause in iter_clauses(incoming):
        group = append_clause(group, deepcopy(clause), relation, forced_relation)
    return group
