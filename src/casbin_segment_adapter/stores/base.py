"""Store protocol — indexed segment persistence for policy records."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncGenerator, Mapping

from casbin_segment_adapter.exceptions import StoreError
from casbin_segment_adapter.schema import IndexDefinition


class SegmentIndex(ABC):
    """A named collection of segments sharing one :class:`IndexDefinition`.

    A segment is a flat ``dict[str, str]`` keyed by field name.  The index
    is agnostic to what the fields mean; it only knows which one is primary.
    """

    @property
    @abstractmethod
    def definition(self) -> IndexDefinition:
        """The schema this index was created with."""
        ...

    @property
    def name(self) -> str:
        return self.definition.name

    @abstractmethod
    async def truncate(self) -> None:
        """Delete every segment in the index."""
        ...

    @abstractmethod
    async def insert_segment(self, segment: Mapping[str, str]) -> str:
        """Create or overwrite a segment and return its primary key."""
        ...

    @abstractmethod
    async def delete_segment(self, key: str) -> None:
        """Delete a segment by primary key.  No-op if it does not exist."""
        ...

    @abstractmethod
    def lookup(self, fields: Mapping[str, str]) -> AsyncGenerator[str, None]:
        """Yield the primary key of every segment whose fields equal *fields*.

        The matching keys are fixed when iteration starts, so callers may
        delete segments while iterating.
        """
        ...

    @abstractmethod
    def segments(self) -> AsyncGenerator[dict[str, str], None]:
        """Yield every segment.  Each call starts a fresh scan."""
        ...


class SegmentStore(ABC):
    """Abstract base for all storage backends: a catalogue of named indexes."""

    @abstractmethod
    async def get_index(self, name: str) -> SegmentIndex | None:
        """Return the index called *name*, or ``None`` if not found."""
        ...

    @abstractmethod
    async def create_index(self, definition: IndexDefinition) -> SegmentIndex:
        """Create a new index.  Raises ``StoreError`` if the name is taken."""
        ...

    async def close(self) -> None:
        """Release backend resources.  The default is a no-op."""


def check_fields(definition: IndexDefinition, fields: Mapping[str, str], operation: str) -> None:
    """Raise ``StoreError`` if *fields* names anything outside *definition*."""
    unknown = sorted(set(fields) - set(definition.field_names))
    if unknown:
        raise StoreError(operation, f"index '{definition.name}' has no fields {unknown}")
