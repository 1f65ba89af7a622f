"""Tests for find_duplicates, DuplicateRecord and filter_duplicates."""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from jsonscope.dedupe.detector import DuplicateRecord, filter_duplicates, find_duplicates


class TestFindDuplicates:
    def test_simple_object(self) -> None:
        records = find_duplicates({"name": "John", "title": "Developer", "role": "Developer"})
        assert records == [
            DuplicateRecord(value="Developer", count=2, paths=("$.title", "$.role"))
        ]

    def test_array(self) -> None:
        records = find_duplicates({"tags": ["frontend", "backend", "frontend"]})
        assert records == [
            DuplicateRecord(value="frontend", count=2, paths=("$.tags[0]", "$.tags[2]"))
        ]

    def test_nested(self) -> None:
        doc = {"user": {"name": "test", "profile": {"nickname": "test"}}}
        (record,) = find_duplicates(doc)
        assert record.paths == ("$.user.name", "$.user.profile.nickname")

    def test_no_duplicates(self) -> None:
        assert find_duplicates({"name": "John", "title": "Developer", "role": "Engineer"}) == []

    def test_empty_document(self) -> None:
        assert find_duplicates({}) == []

    def test_sorted_by_descending_count(self) -> None:
        doc = {"a": "common", "b": "rare", "c": "common", "d": "rare", "e": "common"}
        records = find_duplicates(doc)
        assert [(r.value, r.count) for r in records] == [("common", 3), ("rare", 2)]

    def test_ties_keep_first_seen_order(self) -> None:
        doc = {"a": "beta", "b": "alpha", "c": "alpha", "d": "beta", "e": "gamma", "f": "gamma"}
        assert [r.value for r in find_duplicates(doc)] == ["beta", "alpha", "gamma"]

    def test_higher_count_overtakes_earlier_value(self) -> None:
        doc = ["a", "a", "b", "b", "b"]
        assert [r.value for r in find_duplicates(doc)] == ["b", "a"]

    def test_non_string_values_ignored(self) -> None:
        doc = {"name": "John", "age": 30, "active": True, "score": None, "another_name": "John"}
        (record,) = find_duplicates(doc)
        assert record.value == "John"
        assert record.count == 2

    def test_count_matches_paths(self) -> None:
        doc = {"x": ["a", "a", "b", {"y": "a", "z": "b"}], "w": "c"}
        for record in find_duplicates(doc):
            assert record.count == len(record.paths)
            assert record.count >= 2


class TestDuplicateRecord:
    def test_frozen(self) -> None:
        record = DuplicateRecord(value="x", count=2, paths=("$.a", "$.b"))
        with pytest.raises(FrozenInstanceError):
            record.count = 3  # type: ignore[misc]

    def test_count_must_match_paths(self) -> None:
        with pytest.raises(ValueError, match="must equal"):
            DuplicateRecord(value="x", count=3, paths=("$.a", "$.b"))

    def test_single_occurrence_rejected(self) -> None:
        with pytest.raises(ValueError, match="at least 2"):
            DuplicateRecord(value="x", count=1, paths=("$.a",))


class TestFilterDuplicates:
    RECORDS = [
        DuplicateRecord(value="Frontend", count=3, paths=("$[0]", "$[1]", "$[2]")),
        DuplicateRecord(value="backend", count=2, paths=("$[3]", "$[4]")),
    ]

    def test_empty_query_keeps_all(self) -> None:
        assert filter_duplicates(self.RECORDS, "") == self.RECORDS

    def test_case_insensitive_substring(self) -> None:
        assert [r.value for r in filter_duplicates(self.RECORDS, "FRONT")] == ["Frontend"]

    def test_order_preserved(self) -> None:
        assert [r.value for r in filter_duplicates(self.RECORDS, "end")] == ["Frontend", "backend"]

    def test_no_match(self) -> None:
        assert filter_duplicates(self.RECORDS, "zzz") == []
