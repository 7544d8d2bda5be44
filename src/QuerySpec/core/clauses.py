"""Clause-tree model and composer.

A clause group is an ordered mapping. Each entry is either a clause (a mapping
of predicate fields), a nested group (also a mapping), or the reserved
``relation`` entry whose value is ``AND`` or ``OR``. Entry keys may be
positional integers or caller-supplied strings; both survive every append.

Canonical form
- exactly one clause entry: no ``relation`` entry
- two or more clause entries: exactly one ``relation`` entry at the top level
"""

from __future__ import annotations

from typing import Any, Final, Mapping, Sequence

RELATION_KEY: Final[str] = "relation"
AND: Final[str] = "AND"
OR: Final[str] = "OR"

ClauseGroup = dict[int | str, Any]


def normalize_relation(relation: object, fallback: str = AND) -> str:
    """Normalize a relation token to ``AND`` or ``OR``.

    Args:
        relation: Raw relation token, compared case-insensitively.
        fallback: Relation returned for anything other than ``AND``/``OR``.

    Returns:
        ``AND`` or ``OR``.
    """
    token = str(relation).strip().upper() if relation is not None else ""
    if token == OR:
        return OR
    if token == AND:
        return AND
    return fallback


def _is_group_like(value: object) -> bool:
    if isinstance(value, Mapping):
        return True
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def as_group(value: object) -> ClauseGroup:
    """Return a shallow copy of ``value`` as a clause group.

    A list or tuple of clauses is keyed by position. Absent or scalar values
    are treated as an empty group.
    """
    if isinstance(value, Mapping):
        return dict(value)
    if _is_group_like(value):
        return dict(enumerate(value))
    return {}


def is_clause(key: object, value: object) -> bool:
    """Return True if a group entry is a clause or nested group."""
    return key != RELATION_KEY and _is_group_like(value)


def clause_count(group: Mapping[Any, Any]) -> int:
    """Count clause-like entries in a group (the relation entry excluded)."""
    return sum(1 for key, value in group.items() if is_clause(key, value))


def iter_clauses(group: Mapping[Any, Any]) -> list[tuple[int | str, Any]]:
    """Return ``(key, clause)`` pairs in group order, skipping the relation entry."""
    return [(key, value) for key, value in group.items() if is_clause(key, value)]


def append_clause(
    group: object,
    clause: Mapping[str, Any],
    default_relation: str = AND,
    forced_relation: str | None = None,
) -> ClauseGroup:
    """Append one clause to a group and normalize its relation.

    The input group is never mutated. Existing entries keep their keys and
    order; the new clause takes the next positional index.

    Relation resolution when the group ends up with two or more clauses:
    forced relation, else the group's existing relation, else
    ``default_relation``.

    Args:
        group: Existing group; absent or scalar values count as empty.
        clause: Clause to append.
        default_relation: Relation used when the group has none yet.
        forced_relation: Relation that always wins when provided.

    Returns:
        The new group.
    """
    existing = as_group(group)
    existing_count = 0
    existing_relation: str | None = None

    for key, value in existing.items():
        if key == RELATION_KEY:
            existing_relation = normalize_relation(value, default_relation)
            continue
        if is_clause(key, value):
            existing_count += 1

    composed: ClauseGroup = {key: value for key, value in existing.items() if key != RELATION_KEY}
    composed[_next_index(existing)] = as_group(clause)

    if existing_count + 1 == 1:
        return composed

    if forced_relation is not None:
        relation = normalize_relation(forced_relation, default_relation)
    elif existing_relation is not None:
        relation = existing_relation
    else:
        relation = normalize_relation(default_relation, AND)

    if RELATION_KEY not in existing:
        composed[RELATION_KEY] = relation
        return composed

    # Keep the relation entry where it already sits.
    ordered: ClauseGroup = {}
    for key in existing:
        ordered[key] = relation if key == RELATION_KEY else composed[key]
    ordered.update(composed)
    return ordered


def _next_index(group: Mapping[Any, Any]) -> int:
    """Return the next free positional index for a group."""
    indexes = [key for key in group if isinstance(key, int) and not isinstance(key, bool)]
    if not indexes:
        return 0
    return max(max(indexes) + 1, 0)
