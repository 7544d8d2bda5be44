"""Binding factories: explicit signal -> fluent-call mappings.

A binding is a small frozen dataclass holding only static configuration. It is
called as ``binding(builder, raw_value, key)`` and returns the builder, either
unchanged (the signal was skipped) or after one fluent call. Bindings never
raise for an absent or empty signal.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Mapping

from QuerySpec.concerns.dates import parse_signal_date
from QuerySpec.concerns.lists import normalize_int_list, to_int
from QuerySpec.concerns.tax import normalize_terms

if TYPE_CHECKING:
    from QuerySpec.builders.base import BaseBuilder

Binding = Callable[["BaseBuilder", Any, str], "BaseBuilder"]

ID_LIST_METHODS = frozenset(
    {
        "where_in_ids",
        "exclude_ids",
        "where_parent_in",
        "where_author_in",
        "where_author_not_in",
        "include",
        "exclude",
    }
)


@dataclass(frozen=True, slots=True)
class PagedBinding:
    """Bind a signal to the page number."""

    signal: str = "paged"

    def __call__(self, q: BaseBuilder, value: Any, key: str) -> BaseBuilder:
        if key != self.signal:
            return q
        page = to_int(value)
        if page is None or page <= 0:
            return q
        return q.paged(None, page)


@dataclass(frozen=True, slots=True)
class TaxBinding:
    """Bind a signal to one categorical clause."""

    taxonomy: str
    field: str = "slug"
    operator: str = "IN"

    def __call__(self, q: BaseBuilder, value: Any, key: str) -> BaseBuilder:
        del key
        terms = normalize_terms(value)
        if not terms:
            return q
        return q.where_tax(self.taxonomy, terms, self.field, self.operator)


@dataclass(frozen=True, slots=True)
class OrderByBinding:
    """Bind a signal to ``order_by`` with a per-field sort direction."""

    default: str = "date"
    default_order: str = "DESC"
    overrides: tuple[tuple[str, str], ...] = ()

    def __call__(self, q: BaseBuilder, value: Any, key: str) -> BaseBuilder:
        del key
        orderby = str(value).strip() if value else ""
        orderby = orderby or self.default
        order = dict(self.overrides).get(orderby, self.default_order)
        return q.order_by(orderby, order)


@dataclass(frozen=True, slots=True)
class MetaNumBinding:
    """Bind a signal to one numeric meta clause."""

    meta_key: str
    compare: str
    signal: str | None = None

    def __call__(self, q: BaseBuilder, value: Any, key: str) -> BaseBuilder:
        if self.signal is not None and key != self.signal:
            return q
        if value is None or isinstance(value, bool):
            return q
        if isinstance(value, str) and not value.strip():
            return q
        try:
            number = float(value)
        except (TypeError, ValueError):
            return q
        return q.where_meta(self.meta_key, number, self.compare, "NUMERIC")


@dataclass(frozen=True, slots=True)
class SearchBinding:
    """Bind a signal to the free-text search term."""

    signal: str = "search"

    def __call__(self, q: BaseBuilder, value: Any, key: str) -> BaseBuilder:
        if key != self.signal or value is None:
            return q
        search = str(value).strip()
        if not search:
            return q
        return q.search(search)


@dataclass(frozen=True, slots=True)
class DateBinding:
    """Bind a signal to an ``after``/``before`` date clause."""

    edge: str = "after"
    inclusive: bool = True

    def __call__(self, q: BaseBuilder, value: Any, key: str) -> BaseBuilder:
        del key
        boundary = parse_signal_date(value)
        if boundary is None:
            return q
        if self.edge == "before":
            return q.where_date_before(boundary, self.inclusive)
        return q.where_date_after(boundary, self.inclusive)


@dataclass(frozen=True, slots=True)
class IdsBinding:
    """Bind a signal (list or comma-separated string) to an ID-list filter."""

    method: str = "where_in_ids"

    def __post_init__(self) -> None:
        if self.method not in ID_LIST_METHODS:
            raise ValueError(f"Unsupported ID list method for binding: {self.method}")

    def __call__(self, q: BaseBuilder, value: Any, key: str) -> BaseBuilder:
        del key
        if isinstance(value, str):
            value = [part for part in value.split(",") if part.strip()]
        ids = normalize_int_list(value) if value is not None else []
        if not ids:
            return q
        return getattr(q, self.method)(ids)


class Bind:
    """Factories for the bindings accepted by ``bind_signals``."""

    @staticmethod
    def paged(signal: str = "paged") -> PagedBinding:
        """Bind ``signal`` to the page number; non-positive values are skipped.

        Args:
            signal: Informational; the map key stays authoritative.
        """
        return PagedBinding(signal)

    @staticmethod
    def tax(taxonomy: str, field: str = "slug", operator: str = "IN") -> TaxBinding:
        """Bind a signal to one ``tax_query`` clause on ``taxonomy``."""
        return TaxBinding(taxonomy, field, operator)

    @staticmethod
    def order_by(
        default: str = "date",
        default_order: str = "DESC",
        overrides: Mapping[str, str] | None = None,
    ) -> OrderByBinding:
        """Bind a signal to ``order_by``.

        Args:
            default: Field used when the signal is empty.
            default_order: Direction used for fields not in ``overrides``.
            overrides: Field -> direction map, kept as sorted
                ``(field, direction)`` pairs.
        """
        return OrderByBinding(default, default_order, tuple(sorted((overrides or {}).items())))

    @staticmethod
    def meta_num(meta_key: str, compare: str, signal: str | None = None) -> MetaNumBinding:
        """Bind a signal to a ``NUMERIC`` meta clause on ``meta_key``."""
        return MetaNumBinding(meta_key, compare, signal)

    @staticmethod
    def search(signal: str = "search") -> SearchBinding:
        return SearchBinding(signal)

    @staticmethod
    def date_after(inclusive: bool = True) -> DateBinding:
        """Bind a date-like signal to ``where_date_after``; unparseable values are skipped."""
        return DateBinding("after", inclusive)

    @staticmethod
    def date_before(inclusive: bool = True) -> DateBinding:
        return DateBinding("before", inclusive)

    @staticmethod
    def ids(method: str = "where_in_ids") -> IdsBinding:
        """Bind a signal to an ID-list filter such as ``exclude_ids``."""
        return IdsBinding(method)
