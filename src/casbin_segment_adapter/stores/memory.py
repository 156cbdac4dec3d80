"""InMemorySegmentStore — zero-config, dict-backed storage for development and testing."""

from __future__ import annotations

from collections.abc import AsyncGenerator, Mapping

from casbin_segment_adapter.exceptions import StoreError
from casbin_segment_adapter.schema import IndexDefinition
from casbin_segment_adapter.stores.base import SegmentIndex, SegmentStore, check_fields


class InMemorySegmentIndex(SegmentIndex):
    """In-memory index keyed by primary key.  Data is lost on process exit."""

    def __init__(self, definition: IndexDefinition) -> None:
        self._definition = definition
        self._data: dict[str, dict[str, str]] = {}

    @property
    def definition(self) -> IndexDefinition:
        return self._definition

    def __len__(self) -> int:
        return len(self._data)

    async def truncate(self) -> None:
        self._data.clear()

    async def insert_segment(self, segment: Mapping[str, str]) -> str:
        check_fields(self._definition, segment, "insert_segment")
        key = segment.get(self._definition.primary_key)
        if not key:
            raise StoreError("insert_segment", f"missing primary key '{self._definition.primary_key}'")
        row = {name: "" for name in self._definition.field_names}
        row.update(segment)
        self._data[key] = row
        return key

    async def delete_segment(self, key: str) -> None:
        self._data.pop(key, None)

    async def lookup(self, fields: Mapping[str, str]) -> AsyncGenerator[str, None]:
        check_fields(self._definition, fields, "lookup")
        matches = [
            key
            for key, row in self._data.items()
            if all(row[name] == value for name, value in fields.items())
        ]
        for key in matches:
            yield key

    async def segments(self) -> AsyncGenerator[dict[str, str], None]:
        for row in list(self._data.values()):
            yield dict(row)


class InMemorySegmentStore(SegmentStore):
    """In-memory store holding one :class:`InMemorySegmentIndex` per name."""

    def __init__(self) -> None:
        self._indexes: dict[str, InMemorySegmentIndex] = {}

    async def get_index(self, name: str) -> InMemorySegmentIndex | None:
        return self._indexes.get(name)

    async def create_index(self, definition: IndexDefinition) -> InMemorySegmentIndex:
        if definition.name in self._indexes:
            raise StoreError("create_index", f"index '{definition.name}' already exists")
        index = InMemorySegmentIndex(definition)
        self._indexes[definition.name] = index
        return index
