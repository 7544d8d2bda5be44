"""Binding execution: read signals, apply bindings, record redacted outcomes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from QuerySpec.bindings.source import SignalSource
from QuerySpec.core.models import BindingLogEntry
from QuerySpec.utils.log import get_logger

if TYPE_CHECKING:
    from QuerySpec.bindings.bind import Binding
    from QuerySpec.builders.base import BaseBuilder

logger = get_logger("bindings")

APPLIED = "applied"
EMPTY_NULL = "empty:null"
EMPTY_STRING = "empty:string"
EMPTY_ARRAY = "empty:array"
SKIPPED = "skipped"


def run_bindings(
    builder: BaseBuilder,
    bindings: Mapping[str, Binding],
    source: SignalSource,
) -> tuple[BaseBuilder, list[BindingLogEntry]]:
    """Evaluate each binding against its signal, in map order.

    Args:
        builder: Live builder the bindings mutate.
        bindings: Signal key -> binding.
        source: The only place signal values are read from.

    Returns:
        ``(builder, entries)`` where ``builder`` is the one returned by the last
        binding and ``entries`` holds one outcome per binding.

    Raises:
        TypeError: If a binding is not callable or returns something other than
            a builder of the same type.
    """
    builder_type = type(builder)
    entries: list[BindingLogEntry] = []

    for key, binding in bindings.items():
        if not callable(binding):
            raise TypeError(f"Binding for signal [{key}] must be callable, got {type(binding).__name__}.")

        value = source.get(key, None)
        before = builder.to_args()
        result = binding(builder, value, key)
        if not isinstance(result, builder_type):
            raise TypeError(
                f"Binding for signal [{key}] must return a {builder_type.__name__}, "
                f"got {type(result).__name__}."
            )
        builder = result

        applied = builder.to_args() != before
        reason = APPLIED if applied else classify_reason(value)
        summary = summarize_value(value)
        entries.append(BindingLogEntry(key=key, applied=applied, reason=reason, value=summary))
        logger.debug("Binding %s: %s value=%s", key, reason, summary)

    return builder, entries


def classify_reason(value: Any) -> str:
    """Classify why a binding left the specification unchanged."""
    if value is None:
        return EMPTY_NULL
    if isinstance(value, str):
        return EMPTY_STRING if not value.strip() else SKIPPED
    if isinstance(value, Mapping):
        value = list(value.values())
    if isinstance(value, (list, tuple, set, frozenset)):
        if all(_is_blank(item) for item in value):
            return EMPTY_ARRAY
    return SKIPPED


def summarize_value(value: Any) -> str:
    """Describe a signal value by type and size only, never by content."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        return "int"
    if isinstance(value, float):
        return "float"
    if isinstance(value, str):
        return f"string(len={len(value)})"
    if isinstance(value, (list, tuple, set, frozenset)):
        return f"array(len={len(value)})"
    if isinstance(value, Mapping):
        return f"mapping(len={len(value)})"
    return type(value).__name__


def _is_blank(item: Any) -> bool:
    return item is None or (isinstance(item, str) and not item.strip())
