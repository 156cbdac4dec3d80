"""Storage backends for casbin rule segments."""

from casbin_segment_adapter.stores.base import SegmentIndex, SegmentStore
from casbin_segment_adapter.stores.memory import InMemorySegmentIndex, InMemorySegmentStore
from casbin_segment_adapter.stores.sqlite import SQLiteSegmentIndex, SQLiteSegmentStore

__all__ = [
    "InMemorySegmentIndex",
    "InMemorySegmentStore",
    "SQLiteSegmentIndex",
    "SQLiteSegmentStore",
    "SegmentIndex",
    "SegmentStore",
]
