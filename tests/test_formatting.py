"""Tests for pairs_to_string."""

from __future__ import annotations

import pytest

from sqlite_helper.database import pairs_to_string


@pytest.mark.unit
def test_empty_input_returns_two_empty_strings() -> None:
    assert pairs_to_string([]) == ("", "")


@pytest.mark.unit
def test_names_and_values_keep_input_order() -> None:
    names, values = pairs_to_string([("name", "'Ada'"), ("age", 36), ("score", 1.5)])

    assert names == "name,age,score"
    assert values == "'Ada',36,1.5"


@pytest.mark.unit
@pytest.mark.parametrize("length", [1, 2, 5])
def test_segment_counts_match_input_length(length: int) -> None:
    pairs = [(f"c{i}", i) for i in range(length)]

    names, values = pairs_to_string(pairs)

    assert len(names.split(",")) == length
    assert len(values.split(",")) == length


@pytest.mark.unit
def test_single_none_value_is_empty_segment() -> None:
    names, values = pairs_to_string([("name", None)])

    assert names == "name"
    assert values == ""
    assert "null" not in values.lower()


@pytest.mark.unit
def test_interior_none_leaves_dangling_comma() -> None:
    _, values = pairs_to_string([("a", 1), ("b", None), ("c", 3)])

    assert values == "1,,3"
    assert len(values.split(",")) == 3
