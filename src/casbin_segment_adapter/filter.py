"""Filter builder — partial rule matches as store lookup criteria."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from casbin_segment_adapter.exceptions import InvalidArgumentError
from casbin_segment_adapter.schema import POLICY_FIELD_COUNT, VALUE_FIELDS


@dataclass(frozen=True)
class FilterCriteria:
    """Exact-match constraints selecting records for bulk deletion.

    Attributes:
        ptype:       Policy type every match must have.
        constraints: ``(field, value)`` pairs over ``v0``..``v5``.  Empty
                     means every record of ``ptype`` matches.
    """

    ptype: str
    constraints: tuple[tuple[str, str], ...] = ()

    def as_fields(self) -> dict[str, str]:
        """Return the field -> value mapping handed to ``SegmentIndex.lookup``."""
        return {"ptype": self.ptype, **dict(self.constraints)}


def build_filter(ptype: str, field_index: int, field_values: Sequence[str]) -> FilterCriteria:
    """Translate casbin's ``(field_index, *field_values)`` filter into criteria.

    ``field_values[0]`` is matched against ``v{field_index}``, the next value
    against the following field, and so on.  Empty values are wildcards.

    Raises:
        InvalidArgumentError: If the filter reaches outside ``v0``..``v5``.
    """
    end = field_index + len(field_values)
    if field_index < 0 or end > POLICY_FIELD_COUNT:
        raise InvalidArgumentError(
            f"Filter covers fields {field_index}..{end - 1}, "
            f"only 0..{POLICY_FIELD_COUNT - 1} exist"
        )

    constraints = tuple(
        (VALUE_FIELDS[i], field_values[i - field_index])
        for i in range(field_index, end)
        if field_values[i - field_index] != ""
    )
    return FilterCriteria(ptype=ptype, constraints=constraints)
