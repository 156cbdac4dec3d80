"""Content-addressed identifiers for policy rules."""

from __future__ import annotations

import hashlib
from collections.abc import Sequence

ID_DELIMITER = ","
ID_DIGEST_SIZE = 16


def policy_id(ptype: str, rule: Sequence[str]) -> str:
    """Return the stable primary key for ``(ptype, rule)``.

    The key is the 128-bit BLAKE2b digest of ``ptype`` and every value of
    *rule* joined by commas, rendered as lowercase hex.  Identical input
    always produces the same key, which is what lets a re-save overwrite
    instead of duplicating.
    """
    data = ID_DELIMITER.join([ptype, *rule]).encode("utf-8")
    return hashlib.blake2b(data, digest_size=ID_DIGEST_SIZE).hexdigest()
