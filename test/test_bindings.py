"""Tests for the signal binding pipeline."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from QuerySpec import (
    ArraySignalSource,
    Bind,
    Binder,
    ChainedSignalSource,
    EnvironmentSignalSource,
    posts,
    terms,
)
from QuerySpec.bindings import classify_reason, summarize_value


class _CountingSource:
    def __init__(self, values: dict) -> None:
        self.values = values
        self.keys: list[str] = []

    def get(self, key, default=None):
        self.keys.append(key)
        return self.values.get(key, default)


class TestBindingOutcomes(unittest.TestCase):
    def test_empty_list_is_not_applied(self) -> None:
        q = posts().bind_signals({"shape": Bind.tax("shape")}, ArraySignalSource({"shape": []}))

        self.assertEqual(q.to_args(), {})
        self.assertEqual(
            q.explain()["bindings"],
            [{"key": "shape", "applied": False, "reason": "empty:array", "value": "array(len=0)"}],
        )

    def test_missing_signal_is_empty_null(self) -> None:
        q = posts().bind_signals({"shape": Bind.tax("shape")}, ArraySignalSource({}))

        self.assertEqual(
            q.explain()["bindings"],
            [{"key": "shape", "applied": False, "reason": "empty:null", "value": "null"}],
        )

    def test_blank_string_is_empty_string(self) -> None:
        q = posts().bind_signals({"search": Bind.search()}, ArraySignalSource({"search": "   "}))

        entry = q.explain()["bindings"][0]
        self.assertFalse(entry["applied"])
        self.assertEqual(entry["reason"], "empty:string")
        self.assertEqual(entry["value"], "string(len=3)")

    def test_list_of_blanks_is_empty_array(self) -> None:
        q = posts().bind_signals({"shape": Bind.tax("shape")}, ArraySignalSource({"shape": ["", None]}))

        self.assertEqual(q.explain()["bindings"][0]["reason"], "empty:array")
        self.assertEqual(q.to_args(), {})

    def test_empty_mapping_is_empty_array(self) -> None:
        q = posts().bind_signals({"shape": Bind.tax("shape")}, ArraySignalSource({"shape": {}}))

        self.assertEqual(q.explain()["bindings"][0]["reason"], "empty:array")
        self.assertEqual(q.to_args(), {})

    def test_applied_signal(self) -> None:
        q = posts().bind_signals({"shape": Bind.tax("shape")}, ArraySignalSource({"shape": ["round", "square"]}))

        self.assertEqual(
            q.to_args(),
            {"tax_query": {0: {"taxonomy": "shape", "field": "slug", "terms": ["round", "square"], "operator": "IN"}}},
        )
        self.assertEqual(
            q.explain()["bindings"],
            [{"key": "shape", "applied": True, "reason": "applied", "value": "array(len=2)"}],
        )

    def test_unusable_value_is_skipped(self) -> None:
        q = posts().bind_signals(
            {"paged": Bind.paged(), "min_distance": Bind.meta_num("distance", ">=")},
            ArraySignalSource({"paged": "abc", "min_distance": "far"}),
        )

        self.assertEqual(q.to_args(), {})
        self.assertEqual([e["reason"] for e in q.explain()["bindings"]], ["skipped", "skipped"])

    def test_summary_never_contains_raw_value(self) -> None:
        q = posts().bind_signals({"search": Bind.search()}, ArraySignalSource({"search": "secret-token"}))

        entry = q.explain()["bindings"][0]
        self.assertEqual(entry["value"], "string(len=12)")
        self.assertNotIn("secret", str(q.explain()["bindings"]))

    def test_only_configured_keys_are_read(self) -> None:
        source = _CountingSource({"shape": "round", "paged": "2", "other": "x"})

        posts().bind_signals({"shape": Bind.tax("shape")}, source)

        self.assertEqual(source.keys, ["shape"])

    def test_pipeline_call_is_logged_with_keys(self) -> None:
        q = posts().bind_signals({"shape": Bind.tax("shape"), "paged": Bind.paged()}, ArraySignalSource({}))

        self.assertEqual(q.explain()["calls"], [{"name": "bind_signals", "params": [["shape", "paged"]]}])

    def test_each_invocation_replaces_binding_log(self) -> None:
        q = posts().bind_signals({"shape": Bind.tax("shape")}, ArraySignalSource({}))
        q = q.bind_signals({"paged": Bind.paged()}, ArraySignalSource({"paged": 2}))

        self.assertEqual([e["key"] for e in q.explain()["bindings"]], ["paged"])


class TestBindingErrors(unittest.TestCase):
    def test_non_callable_binding(self) -> None:
        with self.assertRaises(TypeError):
            posts().bind_signals({"shape": "tax"}, ArraySignalSource({}))

    def test_binding_must_return_builder(self) -> None:
        with self.assertRaises(TypeError):
            posts().bind_signals({"shape": lambda q, value, key: None}, ArraySignalSource({}))

    def test_binding_must_return_same_builder_type(self) -> None:
        with self.assertRaises(TypeError):
            posts().bind_signals({"shape": lambda q, value, key: terms()}, ArraySignalSource({}))

    def test_bindings_argument_shape(self) -> None:
        with self.assertRaises(TypeError):
            posts().bind_signals(["shape"], ArraySignalSource({}))


class TestBindFactories(unittest.TestCase):
    def test_order_by_overrides(self) -> None:
        binding = Bind.order_by("date", "DESC", {"title": "ASC"})

        self.assertEqual(binding(posts(), "title", "orderby").to_args(), {"orderby": "title", "order": "ASC"})
        self.assertEqual(binding(posts(), "", "orderby").to_args(), {"orderby": "date", "order": "DESC"})

    def test_order_by_binding_is_hashable(self) -> None:
        first = Bind.order_by(overrides={"title": "ASC", "name": "ASC"})
        second = Bind.order_by(overrides={"name": "ASC", "title": "ASC"})

        self.assertEqual(first, second)
        self.assertEqual(hash(first), hash(second))
        self.assertEqual(len({first, second, Bind.order_by()}), 2)

    def test_meta_num_coerces_to_float(self) -> None:
        args = Bind.meta_num("distance", ">=")(posts(), "5", "min_distance").to_args()

        self.assertEqual(
            args["meta_query"][0],
            {"key": "distance", "value": 5.0, "compare": ">=", "type": "NUMERIC"},
        )

    def test_signal_name_must_match_key(self) -> None:
        binding = Bind.paged("page")

        self.assertEqual(binding(posts(), "2", "paged").to_args(), {})
        self.assertEqual(binding(posts(), "2", "page").to_args(), {"paged": 2})

    def test_non_positive_page_is_skipped(self) -> None:
        self.assertEqual(Bind.paged()(posts(), "0", "paged").to_args(), {})

    def test_date_bindings(self) -> None:
        after = Bind.date_after()(posts(), "2024-03-05", "after").to_args()
        before = Bind.date_before(False)(posts(), "not a date", "before").to_args()

        self.assertEqual(after["date_query"], {0: {"after": "2024-03-05", "inclusive": True}})
        self.assertEqual(before, {})

    def test_ids_binding_accepts_comma_string(self) -> None:
        args = Bind.ids("exclude_ids")(posts(), "1, 2,x", "exclude").to_args()

        self.assertEqual(args, {"post__not_in": [1, 2]})

    def test_ids_binding_rejects_unknown_method(self) -> None:
        with self.assertRaises(ValueError):
            Bind.ids("delete_everything")


class TestBinderEquivalence(unittest.TestCase):
    def _map(self) -> dict:
        return {
            "paged": Bind.paged(),
            "shape": Bind.tax("shape"),
            "orderby": Bind.order_by("date", "DESC", {"title": "ASC"}),
            "min_distance": Bind.meta_num("distance", ">="),
        }

    def _configure(self, binder: Binder) -> None:
        (
            binder.paged()
            .tax("shape")
            .order_by(overrides={"title": "ASC"})
            .meta_num("min_distance")
            .to("distance")
        )

    def test_binder_builds_same_map(self) -> None:
        binder = Binder()
        self._configure(binder)

        self.assertEqual(binder.to_map(), self._map())

    def test_map_and_binder_produce_identical_results(self) -> None:
        source = ArraySignalSource({"paged": "2", "shape": "round", "orderby": "title", "min_distance": "5.5"})

        by_map = posts("event").bind_signals(self._map(), source)
        by_binder = posts("event").bind_signals(self._configure, source)

        self.assertEqual(by_map.to_args(), by_binder.to_args())
        self.assertEqual(by_map.explain(), by_binder.explain())
        self.assertEqual(
            by_map.to_args(),
            {
                "post_type": "event",
                "paged": 2,
                "tax_query": {0: {"taxonomy": "shape", "field": "slug", "terms": ["round"], "operator": "IN"}},
                "orderby": "title",
                "order": "ASC",
                "meta_query": {0: {"key": "distance", "value": 5.5, "compare": ">=", "type": "NUMERIC"}},
            },
        )


class TestSignalSources(unittest.TestCase):
    def test_environment_source_reads_prefixed_upper_key(self) -> None:
        source = EnvironmentSignalSource("APP_", environ={"APP_SHAPE": "round"})

        self.assertEqual(source.get("shape"), "round")
        self.assertEqual(source.get("size", "m"), "m")

    def test_chained_source_first_value_wins(self) -> None:
        source = ChainedSignalSource(
            ArraySignalSource({"shape": None, "size": "xl"}),
            ArraySignalSource({"shape": "round", "size": "s"}),
        )

        self.assertEqual(source.get("shape"), "round")
        self.assertEqual(source.get("size"), "xl")
        self.assertIsNone(source.get("missing"))


class TestReasonAndSummary(unittest.TestCase):
    def test_classify_reason(self) -> None:
        self.assertEqual(classify_reason(None), "empty:null")
        self.assertEqual(classify_reason(" "), "empty:string")
        self.assertEqual(classify_reason(()), "empty:array")
        self.assertEqual(classify_reason("abc"), "skipped")
        self.assertEqual(classify_reason(0), "skipped")

    def test_blank_mappings_are_empty_arrays(self) -> None:
        self.assertEqual(classify_reason({}), "empty:array")
        self.assertEqual(classify_reason({"a": "", "b": None}), "empty:array")
        self.assertEqual(classify_reason({"a": "x"}), "skipped")

    def test_summarize_value(self) -> None:
        self.assertEqual(summarize_value(True), "bool")
        self.assertEqual(summarize_value(3), "int")
        self.assertEqual(summarize_value(3.0), "float")
        self.assertEqual(summarize_value({"a": 1}), "mapping(len=1)")
        self.assertEqual(summarize_value(object()), "object")


if __name__ == "__main__":
    unittest.main()
