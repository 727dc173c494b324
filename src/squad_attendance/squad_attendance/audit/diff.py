from __future__ import annotations

from typing import Optional

from ..common.serialization import canonical_json


def changed_fields(before: Optional[dict], after: Optional[dict]) -> list[str]:
    """Names of the fields whose values differ between two snapshots.

    Values are compared through canonical JSON, so nested objects are equal
    regardless of key order. A missing side means every field of the other
    side changed.
    """

    if not before and not after:
        return []
    if not before:
        return list(after or {})
    if not after:
        return list(before)

    keys = list(before) + [k for k in after if k not in before]
    return [k for k in keys if canonical_json(before.get(k)) != canonical_json(after.get(k))]
