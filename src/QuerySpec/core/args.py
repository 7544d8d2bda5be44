"""Ordered argument store backing every builder."""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Mapping


class ArgumentStore:
    """Ordered key/value store for one builder's specification.

    The store never populates a key on its own: it holds exactly the seed it
    was given plus whatever callers set or merge.
    """

    __slots__ = ("_args",)

    def __init__(self, seed: Mapping[str, Any] | None = None) -> None:
        self._args: dict[str, Any] = deepcopy(dict(seed)) if seed else {}

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value for ``key``, or ``default`` if absent or None."""
        value = self._args.get(key)
        return default if value is None else value

    def has(self, key: str) -> bool:
        """Return True if ``key`` was explicitly set."""
        return key in self._args

    def set(self, key: str, value: Any) -> ArgumentStore:
        """Set one key, keeping its position if it already exists."""
        self._args[key] = value
        return self

    def merge(self, partial: Mapping[str, Any]) -> ArgumentStore:
        """Merge a partial mapping; later keys overwrite earlier ones."""
        for key, value in partial.items():
            self._args[key] = value
        return self

    def forget(self, key: str) -> ArgumentStore:
        """Remove ``key`` if present."""
        self._args.pop(key, None)
        return self

    def replace(self, args: Mapping[str, Any]) -> ArgumentStore:
        """Replace the whole specification."""
        self._args = dict(args)
        return self

    def to_specification(self) -> dict[str, Any]:
        """Return a deep copy of the accumulated specification."""
        return deepcopy(self._args)

    def __len__(self) -> int:
        return len(self._args)
