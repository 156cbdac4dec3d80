"""Configuration objects for the adapter and its store.

Both models validate from plain dicts or JSON, so they can be embedded in
whatever configuration file the host application already loads.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from casbin_segment_adapter.exceptions import InvalidArgumentError
from casbin_segment_adapter.stores import InMemorySegmentStore, SegmentStore, SQLiteSegmentStore

DEFAULT_INDEX_NAME = "casbin_rule"


class AdapterConfig(BaseModel):
    """Adapter configuration.

    Attributes:
        index_name: Name of the index holding the rules
        trim_trailing_empty_only: Decode policy lines keeping interior empty
            values (only trailing empties are dropped).  Off by default,
            which stops each line at its first empty value.
    """

    index_name: str = Field(default=DEFAULT_INDEX_NAME, pattern=r"^[A-Za-z_][A-Za-z0-9_]*$")
    trim_trailing_empty_only: bool = False


class StoreConfig(BaseModel):
    """Store backend configuration.

    Attributes:
        type: Store type ("memory" or "sqlite")
        path: Path to SQLite database file (for sqlite type)
    """

    type: Literal["memory", "sqlite"] = "memory"
    path: str = ""


def create_store(config: StoreConfig) -> SegmentStore:
    """Create store from configuration.

    Raises:
        InvalidArgumentError: If a sqlite store is requested without a path.
    """
    if config.type == "sqlite":
        if not config.path:
            raise InvalidArgumentError("SQLite store requires 'path' configuration")
        return SQLiteSegmentStore(config.path)
    return InMemorySegmentStore()
