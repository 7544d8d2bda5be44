"""Registry of named, late-bound builder extensions.

Each builder type owns one registry for the life of the process. Registries
hold configuration only (name -> function) and are cleared explicitly, usually
between tests.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

Extension = Callable[..., Any]


class ExtensionRegistry:
    """Name -> function map for one builder type."""

    __slots__ = ("owner", "_extensions")

    def __init__(self, owner: str) -> None:
        self.owner = owner
        self._extensions: dict[str, Extension] = {}

    def register(self, name: str, fn: Extension) -> None:
        """Register or replace an extension.

        Raises:
            TypeError: If ``fn`` is not callable.
            ValueError: If ``name`` is empty.
        """
        if not callable(fn):
            raise TypeError(f"{self.owner} extension [{name}] must be callable")
        if not name or not name.strip():
            raise ValueError(f"{self.owner} extension name must not be empty")
        self._extensions[name] = fn

    def has(self, name: str) -> bool:
        return name in self._extensions

    def get(self, name: str) -> Extension:
        """Return a registered extension.

        Raises:
            AttributeError: If no extension is registered under ``name``.
        """
        fn = self._extensions.get(name)
        if fn is None:
            raise AttributeError(f"{self.owner} method [{name}] does not exist.")
        return fn

    def names(self) -> tuple[str, ...]:
        return tuple(self._extensions)

    def clear(self) -> None:
        self._extensions.clear()
