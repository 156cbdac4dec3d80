"""Tests for InMemorySegmentStore."""

import pytest

from casbin_segment_adapter import StoreError
from casbin_segment_adapter.schema import policy_index_definition
from casbin_segment_adapter.stores import InMemorySegmentStore


@pytest.fixture
def store():
    return InMemorySegmentStore()


@pytest.fixture
async def index(store):
    return await store.create_index(policy_index_definition("rules"))


def seg(key, ptype="p", *values):
    segment = {"id": key, "ptype": ptype}
    segment.update({f"v{i}": v for i, v in enumerate(values)})
    return segment


async def test_get_nonexistent_index(store):
    assert await store.get_index("rules") is None


async def test_create_and_get_index(store, index):
    assert await store.get_index("rules") is index
    assert index.name == "rules"


async def test_create_duplicate_index(store, index):
    with pytest.raises(StoreError):
        await store.create_index(policy_index_definition("rules"))


async def test_insert_returns_key(index):
    assert await index.insert_segment(seg("k1", "p", "alice")) == "k1"


async def test_insert_fills_missing_fields(index):
    await index.insert_segment(seg("k1", "p", "alice"))
    [segment] = [s async for s in index.segments()]
    assert segment == {
        "id": "k1",
        "ptype": "p",
        "v0": "alice",
        "v1": "",
        "v2": "",
        "v3": "",
        "v4": "",
        "v5": "",
    }


async def test_insert_overwrites_same_key(index):
    await index.insert_segment(seg("k1", "p", "alice"))
    await index.insert_segment(seg("k1", "p", "bob"))
    segments = [s async for s in index.segments()]
    assert len(segments) == 1
    assert segments[0]["v0"] == "bob"


async def test_insert_unknown_field(index):
    with pytest.raises(StoreError):
        await index.insert_segment({"id": "k1", "ptype": "p", "v9": "x"})


async def test_insert_missing_primary_key(index):
    with pytest.raises(StoreError):
        await index.insert_segment({"ptype": "p"})


async def test_delete(index):
    await index.insert_segment(seg("k1"))
    await index.delete_segment("k1")
    assert [s async for s in index.segments()] == []


async def test_delete_nonexistent(index):
    await index.delete_segment("nope")  # should not raise


async def test_truncate(index):
    await index.insert_segment(seg("k1"))
    await index.insert_segment(seg("k2"))
    await index.truncate()
    assert len(index) == 0


async def test_lookup(index):
    await index.insert_segment(seg("k1", "p", "alice", "data1"))
    await index.insert_segment(seg("k2", "p", "bob", "data1"))
    await index.insert_segment(seg("k3", "g", "alice", "data1"))

    keys = [k async for k in index.lookup({"ptype": "p", "v1": "data1"})]
    assert sorted(keys) == ["k1", "k2"]
    keys = [k async for k in index.lookup({"ptype": "p", "v0": "alice"})]
    assert keys == ["k1"]


async def test_lookup_unknown_field(index):
    with pytest.raises(StoreError):
        [k async for k in index.lookup({"nope": "x"})]


async def test_delete_while_iterating_lookup(index):
    for key in ("k1", "k2", "k3"):
        await index.insert_segment(seg(key, "p", "alice"))
    async for key in index.lookup({"ptype": "p"}):
        await index.delete_segment(key)
    assert len(index) == 0


async def test_index_isolation(store, index):
    other = await store.create_index(policy_index_definition("other"))
    await index.insert_segment(seg("k1"))
    assert [s async for s in other.segments()] == []
