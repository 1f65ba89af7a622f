"""Tests for inline node editing: editable_text, coerce_edit and apply_edit."""

from __future__ import annotations

import copy
from typing import Any

import pytest

from jsonscope.edit import apply_edit, coerce_edit, editable_text
from jsonscope.errors import PathNotFoundError
from jsonscope.result import EditResult


@pytest.fixture
def doc() -> dict[str, Any]:
    return {
        "name": "Ada",
        "age": 36,
        "ratio": 0.5,
        "active": True,
        "note": None,
        "tags": ["a", "b"],
        "meta": {"k": "v"},
    }


class TestEditableText:
    @pytest.mark.parametrize(
        ("path", "text"),
        [
            ("$.name", "Ada"),
            ("$.age", "36"),
            ("$.ratio", "0.5"),
            ("$.active", "true"),
            ("$.note", "null"),
            ("$.tags[1]", "b"),
        ],
    )
    def test_primitives(self, doc: dict[str, Any], path: str, text: str) -> None:
        assert editable_text(doc, path) == text

    @pytest.mark.parametrize("path", ["$", "$.tags", "$.meta"])
    def test_containers_not_editable(self, doc: dict[str, Any], path: str) -> None:
        assert editable_text(doc, path) is None

    def test_missing_path(self, doc: dict[str, Any]) -> None:
        with pytest.raises(PathNotFoundError):
            editable_text(doc, "$.missing")


class TestCoerceEdit:
    def test_string_kept_verbatim(self) -> None:
        assert coerce_edit("old", "  new ") == EditResult(valid=True, value="  new ")

    @pytest.mark.parametrize(
        ("text", "value"),
        [("42", 42), (" -7 ", -7), ("1.25", 1.25), ("1e3", 1000.0), ("+3", 3)],
    )
    def test_number(self, text: str, value: float) -> None:
        result = coerce_edit(1, text)
        assert result.valid
        assert result.value == value
        assert type(result.value) is type(value)

    @pytest.mark.parametrize("text", ["", "  ", "abc", "nan", "inf", "-Infinity", "1_000", "١٢"])
    def test_invalid_number(self, text: str) -> None:
        assert coerce_edit(1.5, text) == EditResult(valid=False)

    @pytest.mark.parametrize(("text", "value"), [("true", True), ("FALSE", False), ("True", True)])
    def test_boolean(self, text: str, value: bool) -> None:
        assert coerce_edit(False, text) == EditResult(valid=True, value=value)

    def test_invalid_boolean(self) -> None:
        assert not coerce_edit(True, "yes").valid

    def test_boolean_not_treated_as_number(self) -> None:
        assert not coerce_edit(True, "1").valid

    def test_null_stays_null(self) -> None:
        assert coerce_edit(None, "null") == EditResult(valid=True, value=None)

    def test_null_parses_json(self) -> None:
        assert coerce_edit(None, '{"a": [1]}') == EditResult(valid=True, value={"a": [1]})
        assert coerce_edit(None, "12") == EditResult(valid=True, value=12)

    def test_null_falls_back_to_string(self) -> None:
        assert coerce_edit(None, "hello") == EditResult(valid=True, value="hello")

    @pytest.mark.parametrize("current", [{}, [], {"a": 1}])
    def test_containers_invalid(self, current: Any) -> None:
        assert not coerce_edit(current, "x").valid


class TestApplyEdit:
    def test_returns_updated_document(self, doc: dict[str, Any]) -> None:
        result = apply_edit(doc, "$.age", "37")
        assert result.valid
        assert result.value == 37
        assert result.document["age"] == 37

    def test_input_not_mutated(self, doc: dict[str, Any]) -> None:
        snapshot = copy.deepcopy(doc)
        apply_edit(doc, "$.tags[0]", "z")
        assert doc == snapshot

    def test_nested_array_element(self, doc: dict[str, Any]) -> None:
        result = apply_edit(doc, "$.tags[0]", "z")
        assert result.document["tags"] == ["z", "b"]
        assert result.document["meta"] is doc["meta"]

    def test_invalid_edit_has_no_document(self, doc: dict[str, Any]) -> None:
        result = apply_edit(doc, "$.active", "maybe")
        assert result == EditResult(valid=False)

    def test_root_primitive_document(self) -> None:
        result = apply_edit("old", "$", "new")
        assert result.document == "new"

    def test_missing_path(self, doc: dict[str, Any]) -> None:
        with pytest.raises(PathNotFoundError):
            apply_edit(doc, "$.missing", "x")
