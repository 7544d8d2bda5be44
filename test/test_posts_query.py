"""Tests for the posts query builder."""

import sys
import unittest
from datetime import date
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from QuerySpec import ArraySignalSource, EngineAdapter, PostsQuery, QueryVars, posts


def _tax(taxonomy: str, terms: list, field: str = "slug") -> dict:
    return {"taxonomy": taxonomy, "field": field, "terms": terms, "operator": "IN"}


class TestPostsEntry(unittest.TestCase):
    def test_fresh_builder_has_empty_specification(self) -> None:
        self.assertEqual(posts().to_args(), {})
        self.assertEqual(PostsQuery().to_args(), {})

    def test_string_seed_sets_post_type_without_logging(self) -> None:
        q = posts("event")

        self.assertEqual(q.to_args(), {"post_type": "event"})
        self.assertEqual(q.explain()["calls"], [])

    def test_mapping_seed_is_copied(self) -> None:
        seed = {"post_type": ["event", "page"], "posts_per_page": 3}

        q = posts(seed)
        seed["post_type"].append("post")

        self.assertEqual(q.to_args(), {"post_type": ["event", "page"], "posts_per_page": 3})


class TestPostsTaxonomy(unittest.TestCase):
    def test_single_clause_has_no_relation(self) -> None:
        args = posts().where_tax("color options", ["red", "blue"], "slug").to_args()

        self.assertEqual(args, {"tax_query": {0: _tax("color options", ["red", "blue"])}})

    def test_second_clause_adds_and_relation(self) -> None:
        args = (
            posts()
            .where_tax("color options", ["red", "blue"], "slug")
            .where_tax("size", ["xl"], "slug")
            .to_args()
        )

        self.assertEqual(
            args["tax_query"],
            {0: _tax("color options", ["red", "blue"]), 1: _tax("size", ["xl"]), "relation": "AND"},
        )

    def test_empty_terms_leave_specification_unchanged_but_are_logged(self) -> None:
        q = posts().where_tax("shape", [None, "", "  "])

        self.assertEqual(q.to_args(), {})
        self.assertEqual(
            q.explain()["calls"],
            [{"name": "where_tax", "params": ["shape", [None, "", "  "], "term_id", "IN", "AND"]}],
        )

    def test_scalar_term_becomes_list(self) -> None:
        args = posts().where_tax("shape", "round", "slug").to_args()

        self.assertEqual(args["tax_query"][0]["terms"], ["round"])

    def test_generator_terms(self) -> None:
        q = posts().where_tax("shape", (t for t in ["round", "square"]), "slug")

        self.assertEqual(q.to_args()["tax_query"], {0: _tax("shape", ["round", "square"])})
        self.assertEqual(q.explain()["calls"][0]["params"][1], ["round", "square"])

    def test_seeded_named_clause_survives_append(self) -> None:
        named = _tax("shape", ["round"])
        q = posts({"tax_query": {"named_entry": named}})

        group = q.where_tax("size", ["xl"], "slug").to_args()["tax_query"]

        self.assertEqual(list(group), ["named_entry", 0, "relation"])
        self.assertEqual(group["named_entry"], named)
        self.assertEqual(group[0], _tax("size", ["xl"]))
        self.assertEqual(group["relation"], "AND")

    def test_seeded_list_group_survives_append(self) -> None:
        q = posts({"meta_query": [{"key": "color", "value": "red"}]})

        group = q.where_meta("size", "xl").to_args()["meta_query"]

        self.assertEqual(
            group,
            {
                0: {"key": "color", "value": "red"},
                1: {"key": "size", "value": "xl", "compare": "=", "type": "CHAR"},
                "relation": "AND",
            },
        )

    def test_or_where_tax_forces_or(self) -> None:
        group = (
            posts()
            .where_tax("a", ["x"], "slug")
            .where_tax("b", ["y"], "slug")
            .or_where_tax("c", ["z"], "slug")
            .to_args()["tax_query"]
        )

        self.assertEqual(group["relation"], "OR")
        self.assertEqual(group[2], _tax("c", ["z"]))

    def test_relation_argument_is_only_a_default(self) -> None:
        group = (
            posts()
            .where_tax("a", ["x"], relation="OR")
            .where_tax("b", ["y"], relation="OR")
            .where_tax("c", ["z"], relation="AND")
            .to_args()["tax_query"]
        )

        self.assertEqual(group["relation"], "OR")


class TestPostsMeta(unittest.TestCase):
    def test_where_meta_upper_cases_type(self) -> None:
        args = posts().where_meta("distance", 5, ">=", "numeric").to_args()

        self.assertEqual(
            args["meta_query"],
            {0: {"key": "distance", "value": 5, "compare": ">=", "type": "NUMERIC"}},
        )

    def test_or_where_meta_forces_or(self) -> None:
        group = posts().where_meta("a", 1).or_where_meta("b", 2).to_args()["meta_query"]

        self.assertEqual(group["relation"], "OR")

    def test_meta_exists_clauses_have_no_value(self) -> None:
        group = posts().where_meta_exists("featured").where_meta_not_exists("hidden").to_args()["meta_query"]

        self.assertEqual(group[0], {"key": "featured", "compare": "EXISTS"})
        self.assertEqual(group[1], {"key": "hidden", "compare": "NOT EXISTS"})
        self.assertEqual(group["relation"], "AND")

    def test_where_meta_date_formats_dates(self) -> None:
        clause = posts().where_meta_date("start", ">=", date(2024, 5, 1)).to_args()["meta_query"][0]

        self.assertEqual(clause, {"key": "start", "value": "20240501", "compare": ">=", "type": "DATE"})

    def test_where_meta_date_defaults_to_today(self) -> None:
        clause = posts().where_meta_date("start", ">=").to_args()["meta_query"][0]

        self.assertEqual(clause["value"], date.today().strftime("%Y%m%d"))


class TestPostsConstraints(unittest.TestCase):
    def test_id_lists_drop_non_integer_members(self) -> None:
        args = posts().where_in_ids([1, "2", "x", None, True, 3.5]).to_args()

        self.assertEqual(args, {"post__in": [1, 2]})

    def test_generator_ids_are_logged_and_applied(self) -> None:
        q = posts().where_in_ids(i for i in [1, 2]).exclude_ids(iter(["3"]))

        self.assertEqual(q.to_args(), {"post__in": [1, 2], "post__not_in": [3]})
        self.assertEqual(
            q.explain()["calls"],
            [{"name": "where_in_ids", "params": [[1, 2]]}, {"name": "exclude_ids", "params": [["3"]]}],
        )

    def test_empty_id_list_leaves_key_unset(self) -> None:
        args = posts().exclude_ids(["a", None]).where_author_in([]).to_args()

        self.assertEqual(args, {})

    def test_scalar_constraints(self) -> None:
        args = (
            posts()
            .post_type("event")
            .status("publish")
            .where_id("12")
            .where_parent(3)
            .where_author(9)
            .where_author_not_in([4])
            .where_parent_in(["5"])
            .to_args()
        )

        self.assertEqual(
            args,
            {
                "post_type": "event",
                "post_status": "publish",
                "p": 12,
                "post_parent": 3,
                "author": 9,
                "author__not_in": [4],
                "post_parent__in": [5],
            },
        )

    def test_date_boundaries(self) -> None:
        group = (
            posts()
            .where_date_after(date(2024, 1, 1))
            .where_date_before("2024-12-31", False)
            .to_args()["date_query"]
        )

        self.assertEqual(
            group,
            {
                0: {"after": "2024-01-01", "inclusive": True},
                1: {"before": "2024-12-31", "inclusive": False},
                "relation": "AND",
            },
        )

    def test_query_flags(self) -> None:
        args = posts().ids_only().with_meta_cache(False).with_term_cache().no_found_rows().to_args()

        self.assertEqual(
            args,
            {
                "fields": "ids",
                "update_post_meta_cache": False,
                "update_post_term_cache": True,
                "no_found_rows": True,
            },
        )


class TestPostsOrdering(unittest.TestCase):
    def test_invalid_direction_defaults_and_warns(self) -> None:
        q = posts().order_by("title", "banana")

        self.assertEqual(q.to_args(), {"orderby": "title", "order": "DESC"})
        self.assertIn(
            "Invalid order direction 'banana' in order_by(); defaulted to 'DESC'.",
            q.explain()["warnings"],
        )

    def test_direction_is_case_insensitive(self) -> None:
        q = posts().order_by("title", "asc")

        self.assertEqual(q.to_args()["order"], "ASC")
        self.assertEqual(q.explain()["warnings"], [])

    def test_order_by_meta(self) -> None:
        args = posts().order_by_meta_desc("price", "numeric").to_args()

        self.assertEqual(
            args,
            {"meta_key": "price", "orderby": "meta_value", "order": "DESC", "meta_type": "NUMERIC"},
        )

    def test_order_by_meta_numeric(self) -> None:
        args = posts().order_by_meta_numeric("distance").to_args()

        self.assertEqual(args, {"meta_key": "distance", "orderby": "meta_value_num", "order": "ASC"})

    def test_meta_value_without_meta_key_warns(self) -> None:
        warnings = posts().order_by_asc("meta_value").explain()["warnings"]

        self.assertEqual(warnings, ["Using orderby=meta_value without meta_key will produce unreliable ordering."])


class TestPostsPagination(unittest.TestCase):
    def test_paged_defaults(self) -> None:
        self.assertEqual(posts().paged().to_args(), {"posts_per_page": 10, "paged": 1})

    def test_page_is_clamped(self) -> None:
        self.assertEqual(posts().paged(20, -3).to_args(), {"posts_per_page": 20, "paged": 1})

    def test_none_per_page_leaves_size_untouched(self) -> None:
        self.assertEqual(posts().paged(None, 3).to_args(), {"paged": 3})

    def test_all_removes_page(self) -> None:
        q = posts().paged(5, 2).all()

        self.assertEqual(q.to_args(), {"posts_per_page": -1, "nopaging": True})
        self.assertEqual(q.explain()["warnings"], [])

    def test_unlimited_with_page_warns(self) -> None:
        q = posts().all().paged(None, 2)

        self.assertIn(
            "Using posts_per_page=-1 with paged is usually conflicting and paged will be ignored.",
            q.explain()["warnings"],
        )

    def test_paged_from_reads_only_missing_values(self) -> None:
        source = ArraySignalSource({"paged": "3", "posts_per_page": "abc"})

        self.assertEqual(posts().paged_from(source).to_args(), {"posts_per_page": 10, "paged": 3})
        self.assertEqual(posts().paged_from(source, 25, 1).to_args(), {"posts_per_page": 25, "paged": 1})

    def test_limit(self) -> None:
        self.assertEqual(posts().limit(4).to_args(), {"posts_per_page": 4})


class TestPostsSearch(unittest.TestCase):
    def test_default_sanitizer(self) -> None:
        args = posts().search("  <b>hello</b>\n  world ").to_args()

        self.assertEqual(args, {"s": "hello world"})

    def test_blank_search_is_ignored_but_logged(self) -> None:
        q = posts().search("   ").search(None)

        self.assertEqual(q.to_args(), {})
        self.assertEqual([c["name"] for c in q.explain()["calls"]], ["search", "search"])

    def test_custom_sanitizer(self) -> None:
        q = PostsQuery(sanitizer=str.upper).search("abc")

        self.assertEqual(q.to_args(), {"s": "ABC"})


class TestPostsComposition(unittest.TestCase):
    def test_when_and_unless(self) -> None:
        q = (
            posts()
            .when(True, lambda b: b.limit(5))
            .when(False, lambda b: b.limit(6))
            .unless(True, lambda b: b.status("draft"), lambda b: b.status("publish"))
        )

        self.assertEqual(q.to_args(), {"posts_per_page": 5, "post_status": "publish"})
        self.assertEqual(
            [c["name"] for c in q.explain()["calls"]],
            ["when", "limit", "when", "unless", "status"],
        )
        self.assertEqual(q.explain()["calls"][0]["params"], [True])

    def test_tap_ignores_return_value(self) -> None:
        q = posts().tap(lambda b: "ignored")

        self.assertEqual(q.to_args(), {})

    def test_tap_args_replaces_specification(self) -> None:
        q = posts("event").tap_args(lambda args: {**args, "posts_per_page": 2})

        self.assertEqual(q.to_args(), {"post_type": "event", "posts_per_page": 2})

    def test_tap_args_requires_mapping(self) -> None:
        with self.assertRaises(TypeError):
            posts().tap_args(lambda args: None)

    def test_apply_merges_scope_result(self) -> None:
        q = posts("event").apply(lambda args, n: {"posts_per_page": n}, 7)

        self.assertEqual(q.to_args(), {"post_type": "event", "posts_per_page": 7})
        self.assertEqual(q.explain()["calls"], [{"name": "apply", "params": [7]}])

    def test_to_args_returns_copy(self) -> None:
        q = posts().where_tax("shape", ["round"], "slug")

        args = q.to_args()
        args["tax_query"][0]["terms"].append("square")

        self.assertEqual(q.to_args()["tax_query"][0]["terms"], ["round"])

    def test_call_log_snapshots_arguments(self) -> None:
        ids = [1, 2]
        q = posts().where_in_ids(ids)

        ids.append(3)

        self.assertEqual(q.explain()["calls"][0]["params"], [[1, 2]])


class TestPostsTerminal(unittest.TestCase):
    def test_run_hands_over_a_copy(self) -> None:
        q = posts("event")

        result = q.run(EngineAdapter(lambda args: args))
        result["post_type"] = "changed"

        self.assertEqual(q.to_args(), {"post_type": "event"})

    def test_apply_to_merges_with_existing_relation(self) -> None:
        existing = _tax("audience", ["kids"])
        query = QueryVars({"tax_query": {0: existing, "relation": "OR"}, "post_type": "page"})

        posts("event").where_tax("a", ["x"], "slug").where_tax("b", ["y"], "slug").apply_to(query)

        self.assertEqual(query.get("post_type"), "event")
        self.assertEqual(
            query.get("tax_query"),
            {0: existing, 1: _tax("a", ["x"]), 2: _tax("b", ["y"]), "relation": "OR"},
        )

    def test_apply_to_forced_relation(self) -> None:
        query = QueryVars({"tax_query": {0: _tax("audience", ["kids"]), "relation": "OR"}})

        q = posts().where_tax("a", ["x"], "slug").apply_to(query, "AND")

        self.assertEqual(query.get("tax_query")["relation"], "AND")
        self.assertEqual(q.explain()["calls"][-1], {"name": "apply_to", "params": ["AND"]})


if __name__ == "__main__":
    unittest.main()
