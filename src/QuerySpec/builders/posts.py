"""Posts query builder."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Mapping

from QuerySpec.adapters.modifier import MutableQuery, QueryModifierAdapter
from QuerySpec.bindings.source import SignalSource
from QuerySpec.builders.base import BaseBuilder
from QuerySpec.concerns.dates import DateBoundary, append_date, boundary_clause
from QuerySpec.concerns.lists import materialize, normalize_int_list, to_int
from QuerySpec.concerns.meta import append_meta, meta_clause, presence_clause, resolve_date_value
from QuerySpec.concerns.ordering import ASC, DESC, META_VALUE, META_VALUE_NUM
from QuerySpec.concerns.pagination import UNLIMITED, clamp_page, coerce_int
from QuerySpec.concerns.search import resolve_search
from QuerySpec.concerns.tax import append_tax, normalize_terms, tax_clause
from QuerySpec.core.clauses import AND, OR, normalize_relation
from QuerySpec.explain.warnings import post_warnings

DEFAULT_PER_PAGE = 10


class PostsQuery(BaseBuilder):
    """Builds a posts query specification.

    Example:
        >>> args = posts("event").where_tax("shape", ["round"], "slug").paged(12, 2).to_args()
    """

    @classmethod
    def prepare(cls, seed: str | list[str] | Mapping[str, Any] | None = None) -> PostsQuery:
        """Start a builder.

        Args:
            seed: Post type (string or list) or an initial specification.
        """
        if seed is None:
            return cls()
        if isinstance(seed, Mapping):
            return cls(seed)
        return cls({"post_type": seed if isinstance(seed, str) else list(seed)})

    def _state_warnings(self, args: Mapping[str, Any]) -> list[str]:
        return post_warnings(args)

    def _set_ids(self, key: str, ids: Any) -> None:
        normalized = normalize_int_list(ids)
        if normalized:
            self._store.set(key, normalized)

    # ------------------------------------------------------------------
    # Post and author constraints
    # ------------------------------------------------------------------

    def post_type(self, post_type: str | list[str]) -> PostsQuery:
        self._record("post_type", post_type)
        self._store.set("post_type", post_type)
        return self

    def status(self, status: str | list[str]) -> PostsQuery:
        self._record("status", status)
        self._store.set("post_status", status)
        return self

    def where_id(self, post_id: Any) -> PostsQuery:
        self._record("where_id", post_id)
        number = to_int(post_id)
        if number is not None:
            self._store.set("p", number)
        return self

    def where_in_ids(self, ids: Any) -> PostsQuery:
        """Restrict to ``ids``; non-integer members are dropped."""
        ids = materialize(ids)
        self._record("where_in_ids", ids)
        self._set_ids("post__in", ids)
        return self

    def exclude_ids(self, ids: Any) -> PostsQuery:
        ids = materialize(ids)
        self._record("exclude_ids", ids)
        self._set_ids("post__not_in", ids)
        return self

    def where_parent(self, parent_id: Any) -> PostsQuery:
        self._record("where_parent", parent_id)
        number = to_int(parent_id)
        if number is not None:
            self._store.set("post_parent", number)
        return self

    def where_parent_in(self, ids: Any) -> PostsQuery:
        ids = materialize(ids)
        self._record("where_parent_in", ids)
        self._set_ids("post_parent__in", ids)
        return self

    def where_author(self, author_id: Any) -> PostsQuery:
        self._record("where_author", author_id)
        number = to_int(author_id)
        if number is not None:
            self._store.set("author", number)
        return self

    def where_author_in(self, ids: Any) -> PostsQuery:
        ids = materialize(ids)
        self._record("where_author_in", ids)
        self._set_ids("author__in", ids)
        return self

    def where_author_not_in(self, ids: Any) -> PostsQuery:
        ids = materialize(ids)
        self._record("where_author_not_in", ids)
        self._set_ids("author__not_in", ids)
        return self

    # ------------------------------------------------------------------
    # Meta, taxonomy and date clauses
    # ------------------------------------------------------------------

    def where_meta_exists(self, key: str) -> PostsQuery:
        self._record("where_meta_exists", key)
        append_meta(self._store, presence_clause(key, "EXISTS"), AND)
        return self

    def where_meta_not_exists(self, key: str) -> PostsQuery:
        self._record("where_meta_not_exists", key)
        append_meta(self._store, presence_clause(key, "NOT EXISTS"), AND)
        return self

    def where_meta_date(self, key: str, compare: str, value: str | date | datetime | None = None) -> PostsQuery:
        """Append a ``DATE`` meta clause.

        Args:
            key: Meta key.
            compare: Comparison operator, e.g. ``>=``.
            value: ``YYYYMMDD`` string or date; ``None`` means today.
        """
        self._record("where_meta_date", key, compare, value)
        clause = meta_clause(key, resolve_date_value(value), compare, "DATE")
        append_meta(self._store, clause, AND)
        return self

    def where_tax(
        self,
        taxonomy: str,
        terms: Any,
        field: str = "term_id",
        operator: str = "IN",
        relation: str = AND,
    ) -> PostsQuery:
        """Append a taxonomy clause.

        Empty or blank terms leave the specification unchanged; the call is
        still logged.

        Args:
            taxonomy: Taxonomy name.
            terms: Term or list of terms.
            field: Term field the terms refer to (``term_id``, ``slug``, ``name``).
            operator: ``IN``, ``NOT IN``, ``AND``, ``EXISTS`` or ``NOT EXISTS``.
            relation: Relation used only when the group has none yet.
        """
        terms = materialize(terms)
        self._record("where_tax", taxonomy, terms, field, operator, relation)
        normalized = normalize_terms(terms)
        if normalized:
            clause = tax_clause(taxonomy, normalized, field, operator)
            append_tax(self._store, clause, normalize_relation(relation))
        return self

    def or_where_tax(self, taxonomy: str, terms: Any, field: str = "term_id", operator: str = "IN") -> PostsQuery:
        """Append a taxonomy clause and force the group relation to OR."""
        terms = materialize(terms)
        self._record("or_where_tax", taxonomy, terms, field, operator)
        normalized = normalize_terms(terms)
        if normalized:
            append_tax(self._store, tax_clause(taxonomy, normalized, field, operator), AND, OR)
        return self

    def where_date(self, clause: Mapping[str, Any]) -> PostsQuery:
        """Append a raw ``date_query`` clause such as ``{"year": 2024}``."""
        self._record("where_date", clause)
        append_date(self._store, dict(clause))
        return self

    def where_date_after(self, after: DateBoundary, inclusive: bool = True) -> PostsQuery:
        self._record("where_date_after", after, inclusive)
        append_date(self._store, boundary_clause("after", after, inclusive))
        return self

    def where_date_before(self, before: DateBoundary, inclusive: bool = True) -> PostsQuery:
        self._record("where_date_before", before, inclusive)
        append_date(self._store, boundary_clause("before", before, inclusive))
        return self

    # ------------------------------------------------------------------
    # Ordering
    # ------------------------------------------------------------------

    def order_by(self, field: str, order: str = DESC) -> PostsQuery:
        """Order by a field; an invalid direction falls back to ``DESC``."""
        self._record("order_by", field, order)
        direction = self._direction(order, DESC, "order_by")
        self._store.set("orderby", field)
        self._store.set("order", direction)
        return self

    def order_by_asc(self, field: str) -> PostsQuery:
        return self.order_by(field, ASC)

    def order_by_desc(self, field: str) -> PostsQuery:
        return self.order_by(field, DESC)

    def order_by_meta(self, meta_key: str, order: str = ASC, meta_type: str = "CHAR") -> PostsQuery:
        """Order by a meta value, typed with ``meta_type``."""
        self._record("order_by_meta", meta_key, order, meta_type)
        direction = self._direction(order, ASC, "order_by_meta")
        self._store.set("meta_key", meta_key)
        self._store.set("orderby", META_VALUE)
        self._store.set("order", direction)
        self._store.set("meta_type", meta_type.upper())
        return self

    def order_by_meta_asc(self, meta_key: str, meta_type: str = "CHAR") -> PostsQuery:
        return self.order_by_meta(meta_key, ASC, meta_type)

    def order_by_meta_desc(self, meta_key: str, meta_type: str = "CHAR") -> PostsQuery:
        return self.order_by_meta(meta_key, DESC, meta_type)

    def order_by_meta_numeric(self, meta_key: str, order: str = ASC) -> PostsQuery:
        self._record("order_by_meta_numeric", meta_key, order)
        direction = self._direction(order, ASC, "order_by_meta_numeric")
        self._store.set("meta_key", meta_key)
        self._store.set("orderby", META_VALUE_NUM)
        self._store.set("order", direction)
        return self

    def order_by_meta_numeric_asc(self, meta_key: str) -> PostsQuery:
        return self.order_by_meta_numeric(meta_key, ASC)

    def order_by_meta_numeric_desc(self, meta_key: str) -> PostsQuery:
        return self.order_by_meta_numeric(meta_key, DESC)

    # ------------------------------------------------------------------
    # Pagination
    # ------------------------------------------------------------------

    def paged(self, per_page: int | None = DEFAULT_PER_PAGE, page: int | None = None) -> PostsQuery:
        """Set the page size and page number.

        Args:
            per_page: Page size; ``None`` leaves ``posts_per_page`` untouched.
            page: 1-based page; ``None`` means 1. Clamped to at least 1.
        """
        self._record("paged", per_page, page)
        if per_page is not None:
            self._store.set("posts_per_page", coerce_int(per_page, DEFAULT_PER_PAGE))
        self._store.set("paged", clamp_page(coerce_int(page, 1)))
        return self

    def paged_from(
        self,
        source: SignalSource,
        per_page: int | None = None,
        page: int | None = None,
        per_page_key: str = "posts_per_page",
        page_key: str = "paged",
    ) -> PostsQuery:
        """Like ``paged`` but reads missing values from ``source``.

        Non-numeric signal values fall back to the page size default and page 1.
        """
        self._record("paged_from", per_page, page, per_page_key, page_key)
        if per_page is None:
            per_page = coerce_int(source.get(per_page_key, None), DEFAULT_PER_PAGE)
        if page is None:
            page = coerce_int(source.get(page_key, None), 1)
        self._store.set("posts_per_page", coerce_int(per_page, DEFAULT_PER_PAGE))
        self._store.set("paged", clamp_page(coerce_int(page, 1)))
        return self

    def limit(self, count: int) -> PostsQuery:
        self._record("limit", count)
        self._store.set("posts_per_page", coerce_int(count, DEFAULT_PER_PAGE))
        return self

    def all(self) -> PostsQuery:
        """Fetch every matching post; drops any page number."""
        self._record("all")
        self._store.set("posts_per_page", UNLIMITED)
        self._store.set("nopaging", True)
        self._store.forget("paged")
        return self

    def no_found_rows(self, enabled: bool = True) -> PostsQuery:
        self._record("no_found_rows", enabled)
        self._store.set("no_found_rows", bool(enabled))
        return self

    # ------------------------------------------------------------------
    # Search and query flags
    # ------------------------------------------------------------------

    def search(self, text: str | None) -> PostsQuery:
        """Set the search term; blank input after sanitizing is ignored."""
        self._record("search", text)
        term = resolve_search(text, self._sanitizer)
        if term is not None:
            self._store.set("s", term)
        return self

    def ids_only(self) -> PostsQuery:
        self._record("ids_only")
        self._store.set("fields", "ids")
        return self

    def with_meta_cache(self, enabled: bool = True) -> PostsQuery:
        self._record("with_meta_cache", enabled)
        self._store.set("update_post_meta_cache", bool(enabled))
        return self

    def with_term_cache(self, enabled: bool = True) -> PostsQuery:
        self._record("with_term_cache", enabled)
        self._store.set("update_post_term_cache", bool(enabled))
        return self

    # ------------------------------------------------------------------
    # In-place modification
    # ------------------------------------------------------------------

    def apply_to(self, query: MutableQuery, forced_relation: str | None = None) -> PostsQuery:
        """Write this specification into an existing query object.

        Clause groups are merged into the query's own groups; see
        ``QueryModifierAdapter.modify``.
        """
        self._record("apply_to", forced_relation)
        QueryModifierAdapter().modify(query, self.to_args(), forced_relation)
        return self


def posts(seed: str | list[str] | Mapping[str, Any] | None = None) -> PostsQuery:
    """Shortcut for ``PostsQuery.prepare``."""
    return PostsQuery.prepare(seed)
