"""SQLiteSegmentStore — durable, single-file storage backend using aiosqlite."""

from __future__ import annotations

from collections.abc import AsyncGenerator, Mapping

import aiosqlite
from pydantic import ValidationError

from casbin_segment_adapter.exceptions import StoreError
from casbin_segment_adapter.schema import IndexDefinition
from casbin_segment_adapter.stores.base import SegmentIndex, SegmentStore, check_fields

_CREATE_CATALOGUE = """
CREATE TABLE IF NOT EXISTS segment_indexes (
    name       TEXT NOT NULL PRIMARY KEY,
    definition TEXT NOT NULL
)
"""


def _quote(identifier: str) -> str:
    # Names are already restricted to [A-Za-z_][A-Za-z0-9_]* by IndexDefinition.
    return f'"{identifier}"'


class SQLiteSegmentIndex(SegmentIndex):
    """One SQLite table per index, one ``TEXT`` column per field."""

    def __init__(self, store: SQLiteSegmentStore, definition: IndexDefinition) -> None:
        self._store = store
        self._definition = definition
        self._table = _quote(definition.name)

    @property
    def definition(self) -> IndexDefinition:
        return self._definition

    async def truncate(self) -> None:
        db = await self._store._connect()
        try:
            await db.execute(f"DELETE FROM {self._table}")
            await db.commit()
        except aiosqlite.Error as exc:
            raise StoreError("truncate", str(exc)) from exc

    async def insert_segment(self, segment: Mapping[str, str]) -> str:
        check_fields(self._definition, segment, "insert_segment")
        primary = self._definition.primary_key
        key = segment.get(primary)
        if not key:
            raise StoreError("insert_segment", f"missing primary key '{primary}'")

        row = {name: segment.get(name, "") for name in self._definition.field_names}
        columns = ", ".join(_quote(name) for name in row)
        placeholders = ", ".join("?" for _ in row)
        db = await self._store._connect()
        try:
            await db.execute(
                f"INSERT OR REPLACE INTO {self._table} ({columns}) VALUES ({placeholders})",
                tuple(row.values()),
            )
            await db.commit()
        except aiosqlite.Error as exc:
            raise StoreError("insert_segment", str(exc)) from exc
        return key

    async def delete_segment(self, key: str) -> None:
        db = await self._store._connect()
        try:
            await db.execute(
                f"DELETE FROM {self._table} WHERE {_quote(self._definition.primary_key)} = ?",
                (key,),
            )
            await db.commit()
        except aiosqlite.Error as exc:
            raise StoreError("delete_segment", str(exc)) from exc

    async def lookup(self, fields: Mapping[str, str]) -> AsyncGenerator[str, None]:
        check_fields(self._definition, fields, "lookup")
        sql = f"SELECT {_quote(self._definition.primary_key)} FROM {self._table}"
        if fields:
            sql += " WHERE " + " AND ".join(f"{_quote(name)} = ?" for name in fields)

        db = await self._store._connect()
        try:
            cursor = await db.execute(sql, tuple(fields.values()))
            rows = await cursor.fetchall()
        except aiosqlite.Error as exc:
            raise StoreError("lookup", str(exc)) from exc

        for row in rows:
            yield row[0]

    async def segments(self) -> AsyncGenerator[dict[str, str], None]:
        names = self._definition.field_names
        columns = ", ".join(_quote(name) for name in names)
        db = await self._store._connect()
        try:
            async with db.execute(f"SELECT {columns} FROM {self._table}") as cursor:
                async for row in cursor:
                    yield dict(zip(names, row, strict=True))
        except aiosqlite.Error as exc:
            raise StoreError("segments", str(exc)) from exc


class SQLiteSegmentStore(SegmentStore):
    """Persistent store backed by a single SQLite file.

    Index definitions are kept as JSON in a ``segment_indexes`` table so that
    :meth:`get_index` resolves indexes created by earlier processes.

    Parameters:
        db_path: Path to the SQLite database file.  Use ``":memory:"``
                 for an in-memory database (useful for testing).
    """

    def __init__(self, db_path: str = "casbin_rules.db") -> None:
        self._db_path = db_path
        self._db: aiosqlite.Connection | None = None

    async def _connect(self) -> aiosqlite.Connection:
        if self._db is None:
            db: aiosqlite.Connection | None = None
            try:
                db = await aiosqlite.connect(self._db_path)
                await db.execute(_CREATE_CATALOGUE)
                await db.commit()
            except aiosqlite.Error as exc:
                if db is not None:
                    await db.close()
                raise StoreError("connect", str(exc)) from exc
            self._db = db
        return self._db

    async def close(self) -> None:
        if self._db:
            await self._db.close()
            self._db = None

    # ── SegmentStore protocol ────────────────────────────────

    async def get_index(self, name: str) -> SQLiteSegmentIndex | None:
        db = await self._connect()
        try:
            cursor = await db.execute(
                "SELECT definition FROM segment_indexes WHERE name = ?",
                (name,),
            )
            row = await cursor.fetchone()
        except aiosqlite.Error as exc:
            raise StoreError("get_index", str(exc)) from exc
        if row is None:
            return None
        try:
            definition = IndexDefinition.model_validate_json(row[0])
        except ValidationError as exc:
            raise StoreError("get_index", f"corrupt definition for index '{name}': {exc}") from exc
        return SQLiteSegmentIndex(self, definition)

    async def create_index(self, definition: IndexDefinition) -> SQLiteSegmentIndex:
        if await self.get_index(definition.name) is not None:
            raise StoreError("create_index", f"index '{definition.name}' already exists")

        columns = ", ".join(
            f"{_quote(f.name)} TEXT NOT NULL DEFAULT ''" for f in definition.fields
        )
        db = await self._connect()
        try:
            await db.execute(
                f"CREATE TABLE {_quote(definition.name)} "
                f"({columns}, PRIMARY KEY ({_quote(definition.primary_key)}))"
            )
            await db.execute(
                "INSERT INTO segment_indexes (name, definition) VALUES (?, ?)",
                (definition.name, definition.model_dump_json()),
            )
            await db.commit()
        except aiosqlite.Error as exc:
            raise StoreError("create_index", str(exc)) from exc
        return SQLiteSegmentIndex(self, definition)
