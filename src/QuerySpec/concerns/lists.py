"""Integer-list normalization for ID membership filters."""

from __future__ import annotations

import re
from typing import Iterable, Mapping

_RE_INT = re.compile(r"^[+-]?\d+$")


def to_int(value: object) -> int | None:
    """Return ``value`` as int if it is integer-coercible, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        stripped = value.strip()
        return int(stripped) if _RE_INT.match(stripped) else None
    return None


def materialize(values: object) -> object:
    """Return one-shot iterables (generators, iterators, sets) as a list.

    Strings, mappings, lists, tuples and scalars are returned unchanged so a
    call can be logged and then normalized from the same value.
    """
    if isinstance(values, (str, bytes, Mapping, list, tuple)) or not isinstance(values, Iterable):
        return values
    return list(values)


def normalize_int_list(values: Iterable[object] | object) -> list[int]:
    """Keep the integer-coercible members of ``values`` in order.

    A scalar is treated as a one-element list.
    """
    if isinstance(values, (str, bytes, int, float)) or values is None:
        candidates: Iterable[object] = [values]
    else:
        try:
            candidates = list(values)  # type: ignore[call-overload]
        except TypeError:
            candidates = [values]

    normalized: list[int] = []
    for value in candidates:
        number = to_int(value)
        if number is not None:
            normalized.append(number)
    return normalized
