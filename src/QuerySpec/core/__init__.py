"""Core data shapes: clause groups, the argument store and log entries."""

from __future__ import annotations

from QuerySpec.core.args import ArgumentStore
from QuerySpec.core.clauses import AND, OR, RELATION_KEY, append_clause, normalize_relation
from QuerySpec.core.models import BindingLogEntry, CallLogEntry

__all__ = [
    "AND",
    "OR",
    "RELATION_KEY",
    "ArgumentStore",
    "BindingLogEntry",
    "CallLogEntry",
    "append_clause",
    "normalize_relation",
]
