"""Index definitions — the persisted shape of a segment index."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

POLICY_FIELD_COUNT = 6
VALUE_FIELDS: tuple[str, ...] = tuple(f"v{i}" for i in range(POLICY_FIELD_COUNT))
RECORD_FIELDS: tuple[str, ...] = ("id", "ptype", *VALUE_FIELDS)

_NAME_PATTERN = r"^[A-Za-z_][A-Za-z0-9_]*$"


class FieldDefinition(BaseModel):
    """A single named column of an index.

    Attributes:
        name: Field name, also used as the storage column name
        data_type: Scalar type of the field (only ``"string"`` is supported)
        is_primary: Whether the field is the index's primary key
    """

    name: str = Field(pattern=_NAME_PATTERN)
    data_type: Literal["string"] = "string"
    is_primary: bool = False


class IndexDefinition(BaseModel):
    """A named index and its ordered fields.

    Attributes:
        name: Index name, resolved by ``SegmentStore.get_index``
        fields: Field definitions; exactly one must be primary
    """

    name: str = Field(pattern=_NAME_PATTERN)
    fields: list[FieldDefinition]

    @field_validator("fields")
    @classmethod
    def _one_primary(cls, fields: list[FieldDefinition]) -> list[FieldDefinition]:
        primaries = [f.name for f in fields if f.is_primary]
        if len(primaries) != 1:
            raise ValueError(f"exactly one primary field required, got {primaries}")
        names = [f.name for f in fields]
        if len(set(names)) != len(names):
            raise ValueError(f"duplicate field names: {names}")
        return fields

    @property
    def primary_key(self) -> str:
        return next(f.name for f in self.fields if f.is_primary)

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]


def policy_index_definition(name: str) -> IndexDefinition:
    """Return the 8-field casbin rule schema: ``id`` (primary), ``ptype``, ``v0``..``v5``."""
    return IndexDefinition(
        name=name,
        fields=[FieldDefinition(name=field, is_primary=field == "id") for field in RECORD_FIELDS],
    )
