"""casbin_segment_adapter — casbin policy persistence on an indexed segment store.

Each policy rule is stored as one 8-field segment keyed by a hash of its
content.  The adapter supports full load/save, single-rule add/remove, and
filtered bulk removal.
"""

from casbin_segment_adapter.adapter import SegmentAdapter
from casbin_segment_adapter.codec import Record, decode, encode
from casbin_segment_adapter.config import (
    DEFAULT_INDEX_NAME,
    AdapterConfig,
    StoreConfig,
    create_store,
)
from casbin_segment_adapter.exceptions import (
    AdapterError,
    DecodeError,
    InvalidArgumentError,
    StoreError,
)
from casbin_segment_adapter.filter import FilterCriteria, build_filter
from casbin_segment_adapter.identifier import policy_id

__all__ = [
    "DEFAULT_INDEX_NAME",
    "AdapterConfig",
    "AdapterError",
    "DecodeError",
    "FilterCriteria",
    "InvalidArgumentError",
    "Record",
    "SegmentAdapter",
    "StoreConfig",
    "StoreError",
    "build_filter",
    "create_store",
    "decode",
    "encode",
    "policy_id",
]
