"""Signal sources: the only read path from external key/value input."""

from __future__ import annotations

import os
from typing import Any, Mapping, Protocol


class SignalSource(Protocol):
    """Protocol for an external key/value signal source.

    Reads must be synchronous and side-effect free.
    """

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value for ``key`` or ``default`` when absent."""
        raise NotImplementedError


class ArraySignalSource:
    """In-memory signal source, mainly for tests and the CLI."""

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self._values = dict(values or {})

    def get(self, key: str, default: Any = None) -> Any:
        value = self._values.get(key)
        return default if value is None else value


class EnvironmentSignalSource:
    """Signal source backed by environment variables.

    ``get("min_distance")`` reads ``<prefix>MIN_DISTANCE``.
    """

    def __init__(self, prefix: str = "", environ: Mapping[str, str] | None = None) -> None:
        self.prefix = prefix
        self._environ = environ if environ is not None else os.environ

    def get(self, key: str, default: Any = None) -> Any:
        value = self._environ.get(f"{self.prefix}{key.upper()}")
        return default if value is None else value


class ChainedSignalSource:
    """Read from several sources; the first non-None value wins."""

    def __init__(self, *sources: SignalSource) -> None:
        self.sources = sources

    def get(self, key: str, default: Any = None) -> Any:
        for source in self.sources:
            value = source.get(key, None)
            if value is not None:
                return value
        return default
