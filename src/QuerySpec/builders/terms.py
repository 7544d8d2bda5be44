"""Terms query builder."""

from __future__ import annotations

from typing import Any, Mapping

from QuerySpec.builders.base import BaseBuilder
from QuerySpec.concerns.lists import materialize, normalize_int_list, to_int
from QuerySpec.concerns.ordering import ASC
from QuerySpec.concerns.pagination import coerce_int, page_window
from QuerySpec.concerns.search import resolve_search
from QuerySpec.explain.warnings import term_warnings

EMPTY_SEARCH = "search() received an empty value and was ignored."


class TermsQuery(BaseBuilder):
    """Builds a terms query specification."""

    @classmethod
    def prepare(cls, seed: str | list[str] | Mapping[str, Any] | None = None) -> TermsQuery:
        """Start a builder; a string or list seed is logged as a ``taxonomy`` call."""
        if seed is None:
            return cls()
        if isinstance(seed, Mapping):
            return cls(seed)
        return cls().taxonomy(seed)

    def _state_warnings(self, args: Mapping[str, Any]) -> list[str]:
        return term_warnings(args)

    def _set_ids(self, key: str, ids: Any) -> None:
        normalized = normalize_int_list(ids)
        if normalized:
            self._store.set(key, normalized)

    def taxonomy(self, taxonomy: str | list[str]) -> TermsQuery:
        taxonomy = materialize(taxonomy)
        self._record("taxonomy", taxonomy)
        self._store.set("taxonomy", taxonomy if isinstance(taxonomy, str) else list(taxonomy))
        return self

    def object_ids(self, ids: Any) -> TermsQuery:
        ids = materialize(ids)
        self._record("object_ids", ids)
        self._set_ids("object_ids", ids)
        return self

    def hide_empty(self, hide: bool = True) -> TermsQuery:
        self._record("hide_empty", hide)
        self._store.set("hide_empty", bool(hide))
        return self

    def slug(self, slug: str | list[str]) -> TermsQuery:
        self._record("slug", slug)
        self._store.set("slug", slug)
        return self

    def name(self, name: str | list[str]) -> TermsQuery:
        self._record("name", name)
        self._store.set("name", name)
        return self

    def fields(self, fields: str) -> TermsQuery:
        self._record("fields", fields)
        self._store.set("fields", fields)
        return self

    def include(self, ids: Any) -> TermsQuery:
        ids = materialize(ids)
        self._record("include", ids)
        self._set_ids("include", ids)
        return self

    def exclude(self, ids: Any) -> TermsQuery:
        ids = materialize(ids)
        self._record("exclude", ids)
        self._set_ids("exclude", ids)
        return self

    def exclude_tree(self, ids: Any) -> TermsQuery:
        ids = materialize(ids)
        self._record("exclude_tree", ids)
        self._set_ids("exclude_tree", ids)
        return self

    def parent(self, parent_id: Any) -> TermsQuery:
        self._record("parent", parent_id)
        number = to_int(parent_id)
        if number is not None:
            self._store.set("parent", number)
        return self

    def child_of(self, term_id: Any) -> TermsQuery:
        self._record("child_of", term_id)
        number = to_int(term_id)
        if number is not None:
            self._store.set("child_of", number)
        return self

    def childless(self, flag: bool = True) -> TermsQuery:
        self._record("childless", flag)
        self._store.set("childless", bool(flag))
        return self

    def search(self, text: str | None) -> TermsQuery:
        """Set the search term; blank input is ignored with an advisory."""
        self._record("search", text)
        term = resolve_search(text, self._sanitizer)
        if term is None:
            self._warn(EMPTY_SEARCH)
            return self
        self._store.set("search", term)
        return self

    def limit(self, count: int) -> TermsQuery:
        self._record("limit", count)
        self._store.set("number", coerce_int(count, 0))
        return self

    def offset(self, offset: int) -> TermsQuery:
        self._record("offset", offset)
        self._store.set("offset", max(0, coerce_int(offset, 0)))
        return self

    def page(self, page: int, per_page: int) -> TermsQuery:
        """Set ``number`` and ``offset`` for a 1-based page.

        Args:
            page: Page number, clamped to at least 1.
            per_page: Page size, clamped to at least 1.
        """
        self._record("page", page, per_page)
        number, offset = page_window(coerce_int(page, 1), coerce_int(per_page, 1))
        self._store.set("number", number)
        self._store.set("offset", offset)
        return self

    def order_by(self, field: str, order: str = ASC) -> TermsQuery:
        """Order by a term field; an invalid direction falls back to ``ASC``."""
        self._record("order_by", field, order)
        direction = self._direction(order, ASC, "order_by")
        self._store.set("orderby", field)
        self._store.set("order", direction)
        return self


def terms(seed: str | list[str] | Mapping[str, Any] | None = None) -> TermsQuery:
    """Shortcut for ``TermsQuery.prepare``."""
    return TermsQuery.prepare(seed)
