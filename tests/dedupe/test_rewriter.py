"""Tests for deduplicate_one and deduplicate_all."""

from __future__ import annotations

import copy
import logging
from typing import Any
from unittest.mock import patch

import pytest

from jsonscope.config import DedupeConfig
from jsonscope.dedupe import rewriter
from jsonscope.dedupe.detector import find_duplicates
from jsonscope.dedupe.rewriter import (
    deduplicate_all,
    deduplicate_all_strings,
    deduplicate_one,
)

# ---------------------------------------------------------------------------
# deduplicate_one
# ---------------------------------------------------------------------------


class TestDeduplicateOne:
    def test_numbers_every_occurrence(self) -> None:
        doc = {"title": "Test", "name": "Test", "label": "Test"}
        assert deduplicate_one(doc, "Test") == {
            "title": "Test - 001",
            "name": "Test - 002",
            "label": "Test - 003",
        }

    def test_array(self) -> None:
        doc = {"tags": ["frontend", "backend", "frontend"]}
        assert deduplicate_one(doc, "frontend") == {
            "tags": ["frontend - 001", "backend", "frontend - 002"]
        }

    def test_nested(self) -> None:
        doc = {"user": {"name": "test", "profile": {"nickname": "test"}}}
        assert deduplicate_one(doc, "test") == {
            "user": {"name": "test - 001", "profile": {"nickname": "test - 002"}}
        }

    def test_already_numbered_values(self) -> None:
        doc = {"title": "Test - 001", "name": "Test - 001"}
        assert deduplicate_one(doc, "Test - 001") == {
            "title": "Test - 001 - 001",
            "name": "Test - 001 - 002",
        }

    def test_unique_value_returns_equal_copy(self) -> None:
        doc = {"title": "Unique"}
        result = deduplicate_one(doc, "Unique")
        assert result == doc
        assert result is not doc

    def test_absent_value_returns_equal_copy(self) -> None:
        doc = {"a": ["x"]}
        result = deduplicate_one(doc, "missing")
        assert result == doc
        assert result["a"] is not doc["a"]

    def test_three_digit_padding(self) -> None:
        doc = {key: "x" for key in "abcdefghijk"}
        result = deduplicate_one(doc, "x")
        assert result["a"] == "x - 001"
        assert result["j"] == "x - 010"
        assert result["k"] == "x - 011"

    def test_numbers_wider_than_padding_not_truncated(self) -> None:
        result = deduplicate_one(["x"] * 1000, "x")
        assert result[998] == "x - 999"
        assert result[999] == "x - 1000"

    def test_input_not_mutated(self) -> None:
        doc = {"a": "v", "b": ["v", {"c": "v"}]}
        snapshot = copy.deepcopy(doc)
        deduplicate_one(doc, "v")
        assert doc == snapshot

    def test_result_shares_nothing_with_input(self) -> None:
        doc = {"a": "v", "b": "v", "untouched": {"list": [1, 2]}}
        result = deduplicate_one(doc, "v")
        result["untouched"]["list"].append(3)
        assert doc["untouched"]["list"] == [1, 2]

    def test_aliased_input_containers_numbered_separately(self) -> None:
        shared = ["v"]
        doc = {"left": shared, "right": shared}
        assert deduplicate_one(doc, "v") == {"left": ["v - 001"], "right": ["v - 002"]}
        assert shared == ["v"]

    def test_custom_config(self) -> None:
        doc = ["v", "v"]
        result = deduplicate_one(doc, "v", DedupeConfig(separator="#", pad_width=2))
        assert result == ["v#01", "v#02"]

    def test_root_string_is_left_alone(self) -> None:
        assert deduplicate_one("v", "v") == "v"


class TestDeduplicateOneSkipsStaleOccurrences:
    def test_stale_path_skipped_with_warning(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        doc = {"a": "v", "b": "v", "c": "v"}
        real_collect = rewriter.collect_strings

        def stale_collect(value: Any) -> dict[str, list[str]]:
            collected = real_collect(value)
            collected["v"] = ["$.a", "$.gone", "$.c"]
            return collected

        with (
            patch.object(rewriter, "collect_strings", stale_collect),
            caplog.at_level(logging.WARNING, logger="jsonscope.dedupe.rewriter"),
        ):
            result = deduplicate_one(doc, "v")

        assert result == {"a": "v - 001", "b": "v", "c": "v - 003"}
        assert "$.gone" in caplog.text

    def test_changed_value_skipped(self) -> None:
        doc = {"a": "v", "b": "other"}
        real_collect = rewriter.collect_strings

        def stale_collect(value: Any) -> dict[str, list[str]]:
            collected = real_collect(value)
            collected["v"] = ["$.a", "$.b"]
            return collected

        with patch.object(rewriter, "collect_strings", stale_collect):
            result = deduplicate_one(doc, "v")

        assert result == {"a": "v - 001", "b": "other"}


# ---------------------------------------------------------------------------
# deduplicate_all
# ---------------------------------------------------------------------------


class TestDeduplicateAll:
    def test_every_group(self) -> None:
        doc = {"title": "Test", "name": "Test", "role": "Admin", "level": "Admin"}
        assert deduplicate_all(doc) == {
            "title": "Test - 001",
            "name": "Test - 002",
            "role": "Admin - 001",
            "level": "Admin - 002",
        }

    def test_unique_values_kept(self) -> None:
        doc = {"title": "Test", "name": "Test", "unique": "Unique"}
        assert deduplicate_all(doc) == {
            "title": "Test - 001",
            "name": "Test - 002",
            "unique": "Unique",
        }

    def test_complex_nesting(self) -> None:
        doc = {
            "users": [
                {"name": "John", "role": "Admin"},
                {"name": "Jane", "role": "Admin"},
            ],
            "config": {"title": "John"},
        }
        assert deduplicate_all(doc) == {
            "users": [
                {"name": "John - 001", "role": "Admin - 001"},
                {"name": "Jane", "role": "Admin - 002"},
            ],
            "config": {"title": "John - 002"},
        }

    def test_empty_object(self) -> None:
        assert deduplicate_all({}) == {}

    def test_alias(self) -> None:
        assert deduplicate_all_strings is deduplicate_all

    def test_byproduct_not_renumbered_unless_already_duplicated(self) -> None:
        doc = {"a": "foo", "b": "foo", "c": "foo - 001"}
        assert deduplicate_all(doc) == {
            "a": "foo - 001",
            "b": "foo - 002",
            "c": "foo - 001",
        }

    def test_preexisting_duplicate_of_byproduct(self) -> None:
        doc = {"a": "foo", "b": "foo", "c": "foo - 001", "d": "foo - 001"}
        assert deduplicate_all(doc) == {
            "a": "foo - 001 - 001",
            "b": "foo - 002",
            "c": "foo - 001 - 002",
            "d": "foo - 001 - 003",
        }

    def test_former_groups_become_distinct(self) -> None:
        doc = {
            "x": ["red", "red", "blue", {"y": "red", "z": "blue"}],
            "w": ["green", "green", "green"],
        }
        targets = {record.value for record in find_duplicates(doc)}
        result = deduplicate_all(doc)
        remaining = {record.value for record in find_duplicates(result)}
        assert not targets & remaining

    def test_input_not_mutated(self) -> None:
        doc = {"a": ["x", "x"], "b": {"c": "y", "d": "y"}}
        snapshot = copy.deepcopy(doc)
        deduplicate_all(doc)
        assert doc == snapshot

    def test_deterministic(self) -> None:
        doc = {"a": "p", "b": "q", "c": "p", "d": "q", "e": "q"}
        assert deduplicate_all(doc) == deduplicate_all(doc)

    def test_matches_chained_deduplicate_one(self) -> None:
        doc = {
            "a": ["p", "q", "p - 001"],
            "b": {"c": "q", "d": "p", "e": "p - 001"},
            "f": ["q", "r"],
        }
        chained = doc
        for record in find_duplicates(doc):
            chained = deduplicate_one(chained, record.value)
        assert deduplicate_all(doc) == chained


class TestDeduplicateAllScaling:
    @staticmethod
    def _work(groups: int) -> tuple[int, int, int, int]:
        doc = {f"k{i}": [f"v{i}", f"v{i}"] for i in range(groups)}
        with (
            patch.object(rewriter, "clone", wraps=rewriter.clone) as clone_spy,
            patch.object(
                rewriter, "collect_occurrences", wraps=rewriter.collect_occurrences
            ) as walk_spy,
            patch.object(
                rewriter, "collect_strings", wraps=rewriter.collect_strings
            ) as collect_spy,
            patch.object(rewriter, "write", wraps=rewriter.write) as write_spy,
        ):
            result = deduplicate_all(doc)
        assert result["k0"] == ["v0 - 001", "v0 - 002"]
        return (
            clone_spy.call_count,
            walk_spy.call_count,
            collect_spy.call_count,
            write_spy.call_count,
        )

    def test_tree_copied_and_walked_once(self) -> None:
        clones, walks, collects, _ = self._work(50)
        assert (clones, walks, collects) == (1, 1, 0)

    def test_work_grows_linearly(self) -> None:
        small = self._work(100)
        large = self._work(200)
        assert large[:3] == small[:3]
        assert large[3] == 2 * small[3]
