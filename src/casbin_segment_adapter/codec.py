"""Record codec — policy rules to stored segments and back."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import asdict, dataclass
from typing import Any

from casbin_segment_adapter.exceptions import DecodeError, InvalidArgumentError
from casbin_segment_adapter.identifier import policy_id
from casbin_segment_adapter.schema import POLICY_FIELD_COUNT, RECORD_FIELDS, VALUE_FIELDS

logger = logging.getLogger(__name__)

LINE_SEPARATOR = ", "


@dataclass(frozen=True)
class Record:
    """The fixed 8-field storable form of one policy rule.

    Attributes:
        id:    Content-derived primary key (see :func:`policy_id`).
        ptype: Policy type, e.g. ``"p"`` or ``"g"``.
        v0-v5: Positional rule values; unused positions hold ``""``.
    """

    id: str
    ptype: str
    v0: str = ""
    v1: str = ""
    v2: str = ""
    v3: str = ""
    v4: str = ""
    v5: str = ""

    @property
    def values(self) -> tuple[str, ...]:
        return tuple(getattr(self, name) for name in VALUE_FIELDS)

    def to_segment(self) -> dict[str, str]:
        return asdict(self)

    @classmethod
    def from_segment(cls, segment: Mapping[str, Any]) -> Record:
        """Validate a raw segment and build a record from it.

        Raises:
            DecodeError: On unknown fields, non-string values, or a missing id or ptype.
        """
        unknown = sorted(set(segment) - set(RECORD_FIELDS))
        if unknown:
            raise DecodeError(segment, f"unexpected fields {unknown}")
        for name, value in segment.items():
            if not isinstance(value, str):
                raise DecodeError(segment, f"field '{name}' is {type(value).__name__}, not str")
        for name in ("id", "ptype"):
            if not segment.get(name):
                raise DecodeError(segment, f"missing {name}")
        return cls(**segment)


def encode(ptype: str, rule: Sequence[str]) -> Record:
    """Build the record for ``(ptype, rule)``.

    Rules shorter than six values are padded with ``""``; values past the
    sixth are dropped.  The id is computed over the full, untruncated rule.

    Raises:
        InvalidArgumentError: If *ptype* is empty.
    """
    if not ptype:
        raise InvalidArgumentError("ptype must be a non-empty string")
    if len(rule) > POLICY_FIELD_COUNT:
        logger.debug(
            f"Rule for ptype '{ptype}' has {len(rule)} values, "
            f"keeping the first {POLICY_FIELD_COUNT}"
        )
    values = {name: rule[i] if i < len(rule) else "" for i, name in enumerate(VALUE_FIELDS)}
    return Record(id=policy_id(ptype, rule), ptype=ptype, **values)


def decode(segment: Record | Mapping[str, Any], *, trim_trailing_only: bool = False) -> str:
    """Render a stored segment as a casbin policy line (``"p, alice, data1, read"``).

    By default values are appended until the first empty one, so an empty
    interior value also hides everything after it.  With
    ``trim_trailing_only=True`` only the trailing run of empty values is
    dropped and interior empties are kept.

    Raises:
        DecodeError: If *segment* is not a well-formed record.
    """
    record = segment if isinstance(segment, Record) else Record.from_segment(segment)
    values = list(record.values)

    if trim_trailing_only:
        while values and values[-1] == "":
            values.pop()
    elif "" in values:
        values = values[: values.index("")]

    return LINE_SEPARATOR.join([record.ptype, *values])
