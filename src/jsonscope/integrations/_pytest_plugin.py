"""Fixture for asserting that a JSON document repeats no string value.

Registered under the ``jsonscope`` name in the ``pytest11`` entry-point group,
so ``assert_no_duplicate_strings`` is available in any test session of a
project that has jsonscope installed.  Failures list each repeated value with
its count and canonical paths, the same data ``find_duplicates`` returns.
"""

from __future__ import annotations

from typing import Any

import pytest

from jsonscope import find_duplicates


@pytest.fixture(scope="session")
def assert_no_duplicate_strings() -> Any:
    """Fixture that returns a callable asserting a document has no repeated strings.

    Useful for fixtures and generated documents whose string values (labels,
    titles, identifiers) must be unique.

    Usage in tests::

        def test_labels_unique(assert_no_duplicate_strings):
            assert_no_duplicate_strings({"a": "x", "b": "y"})

        def test_labels_repeat(assert_no_duplicate_strings):
            with pytest.raises(AssertionError, match=r"duplicated"):
                assert_no_duplicate_strings({"a": "x", "b": "x"})

    Returns:
        A callable ``_assert(document, ignore=()) -> None`` that raises
        ``AssertionError`` listing every duplicated value and its paths.
    """

    def _assert(document: Any, ignore: tuple[str, ...] = ()) -> None:
        """Assert that no string value occurs more than once in *document*.

        Args:
            document: The JSON value to check.
            ignore:   String values allowed to repeat (e.g. ``""``).

        Raises:
            AssertionError: When any other string value occurs twice or more.
        """
        records = [r for r in find_duplicates(document) if r.value not in ignore]
        if records:
            details = "\n".join(
                f"  {r.value!r} x{r.count}: {', '.join(r.paths)}" for r in records
            )
            raise AssertionError(
                f"{len(records)} duplicated string value(s) found:\n{details}"
            )

    return _assert
