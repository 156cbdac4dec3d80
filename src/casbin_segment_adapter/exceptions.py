"""Custom exceptions for the casbin_segment_adapter package."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


class AdapterError(Exception):
    """Base exception for all adapter-related errors."""


class StoreError(AdapterError):
    """Raised when a segment store operation fails.

    The adapter never wraps or retries these; they reach the caller as the
    store raised them.
    """

    def __init__(self, operation: str, detail: str = "") -> None:
        self.operation = operation
        self.detail = detail
        msg = f"Store error during '{operation}'"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)


class DecodeError(AdapterError):
    """Raised when a stored segment cannot be turned back into a policy line."""

    def __init__(self, segment: Mapping[str, Any], detail: str) -> None:
        self.segment = dict(segment)
        super().__init__(f"Cannot decode segment {self.segment.get('id', '?')!r}: {detail}")


class InvalidArgumentError(AdapterError, ValueError):
    """Raised when a request is malformed before reaching the store."""
