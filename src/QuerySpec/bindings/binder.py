"""Fluent configurator producing the same map as direct ``Bind`` calls."""

from __future__ import annotations

from typing import Mapping

from QuerySpec.bindings.bind import Bind, Binding


class MetaBinding:
    """Pending numeric meta binding, completed by ``to``."""

    def __init__(self, binder: Binder, signal: str) -> None:
        self._binder = binder
        self._signal = signal

    def to(self, meta_key: str, compare: str = ">=") -> Binder:
        """Bind the pending signal to ``meta_key`` and return the binder."""
        return self._binder.register(self._signal, Bind.meta_num(meta_key, compare))


class Binder:
    """Collects bindings keyed by signal name.

    Example:
        >>> q.bind_signals(lambda b: b.paged().tax("shape").meta_num("min_distance").to("distance"), source)
    """

    def __init__(self) -> None:
        self._bindings: dict[str, Binding] = {}

    def register(self, signal: str, binding: Binding) -> Binder:
        """Register a binding for ``signal``; a later registration replaces it."""
        self._bindings[signal] = binding
        return self

    def paged(self, signal: str = "paged") -> Binder:
        return self.register(signal, Bind.paged(signal))

    def search(self, signal: str = "search") -> Binder:
        return self.register(signal, Bind.search(signal))

    def tax(
        self,
        signal: str,
        taxonomy: str | None = None,
        field: str = "slug",
        operator: str = "IN",
    ) -> Binder:
        """Bind ``signal`` to a categorical clause; taxonomy defaults to the signal name."""
        return self.register(signal, Bind.tax(taxonomy or signal, field, operator))

    def order_by(
        self,
        signal: str = "orderby",
        default: str = "date",
        default_order: str = "DESC",
        overrides: Mapping[str, str] | None = None,
    ) -> Binder:
        return self.register(signal, Bind.order_by(default, default_order, overrides))

    def meta_num(self, signal: str) -> MetaBinding:
        return MetaBinding(self, signal)

    def date_after(self, signal: str, inclusive: bool = True) -> Binder:
        return self.register(signal, Bind.date_after(inclusive))

    def date_before(self, signal: str, inclusive: bool = True) -> Binder:
        return self.register(signal, Bind.date_before(inclusive))

    def ids(self, signal: str, method: str = "where_in_ids") -> Binder:
        return self.register(signal, Bind.ids(method))

    def to_map(self) -> dict[str, Binding]:
        """Return a copy of the configured signal -> binding map."""
        return dict(self._bindings)
