"""SegmentAdapter — casbin persistence on top of an indexed segment store."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from contextlib import aclosing
from typing import TYPE_CHECKING

from casbin.persist import load_policy_line
from casbin.persist.adapters.asyncio import AsyncAdapter

from casbin_segment_adapter.codec import decode, encode
from casbin_segment_adapter.config import AdapterConfig
from casbin_segment_adapter.exceptions import StoreError
from casbin_segment_adapter.filter import build_filter
from casbin_segment_adapter.identifier import policy_id
from casbin_segment_adapter.schema import policy_index_definition

if TYPE_CHECKING:
    from casbin.model import Model

    from casbin_segment_adapter.stores.base import SegmentIndex, SegmentStore

logger = logging.getLogger(__name__)

# Rule families persisted by save_policy: permissions and role assignments.
SAVED_SECTIONS = ("p", "g")


class SegmentAdapter(AsyncAdapter):
    """Stores casbin rules as 8-field segments (``id``, ``ptype``, ``v0``..``v5``).

    Every rule is keyed by :func:`policy_id` of its content, so saving the
    same rule twice overwrites one segment instead of adding another.  The
    adapter holds no rules itself; the only state it keeps between calls is
    the resolved index handle.

    Operations run their store calls one after another.  Nothing is retried
    or rolled back: the first store error reaches the caller unchanged.

    Parameters:
        store:  Backend holding the index.
        config: Adapter configuration.  Defaults to :class:`AdapterConfig`
                (index ``"casbin_rule"``) when omitted.
    """

    def __init__(self, store: SegmentStore, config: AdapterConfig | None = None) -> None:
        self._store = store
        self._config = config or AdapterConfig()
        self._index: SegmentIndex | None = None

    @classmethod
    async def create(cls, store: SegmentStore, config: AdapterConfig | None = None) -> SegmentAdapter:
        """Build an adapter and resolve (or create) its index immediately."""
        adapter = cls(store, config)
        await adapter._get_index()
        return adapter

    async def _get_index(self) -> SegmentIndex:
        if self._index is not None:
            return self._index

        expected = policy_index_definition(self._config.index_name)
        index = await self._store.get_index(expected.name)
        if index is None:
            logger.info(f"Creating index '{expected.name}'")
            index = await self._store.create_index(expected)
        elif (
            index.definition.field_names != expected.field_names
            or index.definition.primary_key != expected.primary_key
        ):
            raise StoreError(
                "get_index",
                f"index '{expected.name}' has fields {index.definition.field_names}, "
                f"expected {expected.field_names}",
            )

        self._index = index
        return index

    # ── full table ───────────────────────────────────────────

    async def load_policy(self, model: Model) -> None:
        """Load every stored rule into *model*.

        Stops at the first segment that fails to decode or load; rules
        loaded before it stay in the model.
        """
        index = await self._get_index()
        count = 0
        async with aclosing(index.segments()) as segments:
            async for segment in segments:
                line = decode(segment, trim_trailing_only=self._config.trim_trailing_empty_only)
                load_policy_line(line, model)
                count += 1
        logger.debug(f"Loaded {count} rules from index '{index.name}'")

    async def save_policy(self, model: Model) -> bool:
        """Replace the index contents with every ``p`` and ``g`` rule of *model*.

        The index is truncated before the first insert.  If an insert fails
        the index is left holding only the rules written before it.
        """
        records = [
            encode(ptype, rule)
            for sec in SAVED_SECTIONS
            for ptype, ast in model.model.get(sec, {}).items()
            for rule in ast.policy
        ]

        index = await self._get_index()
        await index.truncate()
        for record in records:
            await index.insert_segment(record.to_segment())
        logger.debug(f"Saved {len(records)} rules to index '{index.name}'")
        return True

    # ── single rule ──────────────────────────────────────────

    async def add_policy(self, sec: str, ptype: str, rule: Sequence[str]) -> bool:
        """Insert one rule.  Re-adding an existing rule overwrites it."""
        record = encode(ptype, rule)
        index = await self._get_index()
        await index.insert_segment(record.to_segment())
        logger.debug(f"Added {ptype} rule {record.id}")
        return True

    async def remove_policy(self, sec: str, ptype: str, rule: Sequence[str]) -> bool:
        """Delete one rule.  Removing a rule that is not stored is a no-op."""
        key = policy_id(ptype, rule)
        index = await self._get_index()
        await index.delete_segment(key)
        logger.debug(f"Removed {ptype} rule {key}")
        return True

    async def add_policies(self, sec: str, ptype: str, rules: Iterable[Sequence[str]]) -> bool:
        """Insert several rules in order, stopping at the first failure."""
        for rule in rules:
            await self.add_policy(sec, ptype, rule)
        return True

    async def remove_policies(self, sec: str, ptype: str, rules: Iterable[Sequence[str]]) -> bool:
        """Delete several rules in order, stopping at the first failure."""
        for rule in rules:
            await self.remove_policy(sec, ptype, rule)
        return True

    # ── filtered ─────────────────────────────────────────────

    async def remove_filtered_policy(
        self,
        sec: str,
        ptype: str,
        field_index: int,
        *field_values: str,
    ) -> bool:
        """Delete every *ptype* rule whose values match *field_values* from *field_index* on.

        Empty strings in *field_values* match anything.  Deletions made
        before a failure are kept.

        Raises:
            InvalidArgumentError: If the filter reaches past ``v5``, before
                the store is touched.
        """
        criteria = build_filter(ptype, field_index, field_values)
        index = await self._get_index()
        removed = 0
        async with aclosing(index.lookup(criteria.as_fields())) as keys:
            async for key in keys:
                await index.delete_segment(key)
                removed += 1
        logger.debug(f"Removed {removed} {ptype} rules matching {dict(criteria.constraints)}")
        return True

    # ── introspection ────────────────────────────────────────

    @property
    def store(self) -> SegmentStore:
        return self._store

    @property
    def config(self) -> AdapterConfig:
        return self._config
