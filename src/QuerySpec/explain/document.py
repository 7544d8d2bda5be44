"""Audit document assembly."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence

from QuerySpec.core.models import BindingLogEntry, CallLogEntry


def build_explain(
    *,
    specification: Mapping[str, Any],
    calls: Sequence[CallLogEntry],
    state_warnings: Iterable[str],
    recorded_warnings: Iterable[str] = (),
    bindings: Sequence[BindingLogEntry] = (),
) -> dict[str, Any]:
    """Build the exported audit document.

    Args:
        specification: Final specification (already copied by the caller).
        calls: Call log in chronological order.
        state_warnings: Warnings derived from ``specification``.
        recorded_warnings: Advisories recorded while calls ran.
        bindings: Binding outcomes of the last pipeline invocation.

    Returns:
        ``{specification, calls, warnings}`` plus ``bindings`` when any binding
        was evaluated.
    """
    document: dict[str, Any] = {
        "specification": dict(specification),
        "calls": [entry.as_dict() for entry in calls],
        "warnings": _unique([*state_warnings, *recorded_warnings]),
    }
    if bindings:
        document["bindings"] = [entry.as_dict() for entry in bindings]
    return document


def _unique(items: Iterable[str]) -> list[str]:
    """De-duplicate while keeping first-seen order."""
    seen: set[str] = set()
    unique: list[str] = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        unique.append(item)
    return unique
