"""Tests for policy_id."""

import hashlib

from casbin_segment_adapter import policy_id


def test_deterministic():
    assert policy_id("p", ["alice", "data1", "read"]) == policy_id("p", ["alice", "data1", "read"])


def test_lowercase_hex_128_bit():
    key = policy_id("p", ["alice", "data1", "read"])
    assert len(key) == 32
    assert key == key.lower()
    int(key, 16)


def test_pinned_algorithm():
    expected = hashlib.blake2b(b"p,alice,data1,read", digest_size=16).hexdigest()
    assert policy_id("p", ["alice", "data1", "read"]) == expected


def test_ptype_participates():
    assert policy_id("p", ["alice", "data1"]) != policy_id("g", ["alice", "data1"])


def test_order_is_significant():
    assert policy_id("p", ["alice", "data1", "read"]) != policy_id("p", ["data1", "alice", "read"])


def test_trailing_empty_value_changes_id():
    assert policy_id("p", ["alice"]) != policy_id("p", ["alice", ""])


def test_no_values():
    assert policy_id("p", []) == hashlib.blake2b(b"p", digest_size=16).hexdigest()


def test_values_past_sixth_participate():
    base = ["a", "b", "c", "d", "e", "f"]
    assert policy_id("p", [*base, "g"]) != policy_id("p", base)


def test_non_ascii():
    assert policy_id("p", ["zoë", "données"]) == policy_id("p", ["zoë", "données"])
    assert policy_id("p", ["zoë"]) != policy_id("p", ["zoe"])
