"""Tests for the filter builder."""

import pytest

from casbin_segment_adapter import FilterCriteria, InvalidArgumentError, build_filter


def test_ptype_only():
    criteria = build_filter("p", 0, [])
    assert criteria == FilterCriteria(ptype="p")
    assert criteria.as_fields() == {"ptype": "p"}


def test_offset_maps_to_fields():
    criteria = build_filter("p", 1, ["data2"])
    assert criteria.as_fields() == {"ptype": "p", "v1": "data2"}


def test_multiple_values():
    criteria = build_filter("p", 0, ["alice", "data1", "read"])
    assert criteria.constraints == (("v0", "alice"), ("v1", "data1"), ("v2", "read"))


def test_empty_values_are_wildcards():
    criteria = build_filter("p", 0, ["", "data2", ""])
    assert criteria.as_fields() == {"ptype": "p", "v1": "data2"}


def test_all_wildcards_match_whole_ptype():
    assert build_filter("g", 2, ["", ""]).as_fields() == {"ptype": "g"}


def test_last_field():
    assert build_filter("p", 5, ["allow"]).as_fields() == {"ptype": "p", "v5": "allow"}


def test_full_width():
    criteria = build_filter("p", 0, ["a", "b", "c", "d", "e", "f"])
    assert len(criteria.constraints) == 6


@pytest.mark.parametrize(
    ("field_index", "field_values"),
    [
        (6, ["x"]),
        (4, ["x", "y", "z"]),
        (0, ["a", "b", "c", "d", "e", "f", "g"]),
        (-1, ["x"]),
    ],
)
def test_out_of_range_raises(field_index, field_values):
    with pytest.raises(InvalidArgumentError):
        build_filter("p", field_index, field_values)


def test_invalid_argument_is_value_error():
    with pytest.raises(ValueError):
        build_filter("p", 7, [])
