"""Record Lookup — collection + raw foreign-key value → record, tolerating id type drift.

Invariants:
    - Lookup order: native value, str(value), number(value) — first hit wins
    - Booleans are never coerced (True is not id 1)
    - Not found is a skip (RECORD_NOT_FOUND), never an exception
    - Returns the store's record as-is; callers copy before attaching
"""

from typing import Any

from jsonexpand.core.domain_types import Record, Resolution, SkipReason
from jsonexpand.core.store_protocols import CollectionLike


def coerce_to_number(value: Any) -> int | float | None:
    """Numeric form of `value`, or None when it has none."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return float(text)
        except ValueError:
            return None
    return None


def _find_by_id(collection: CollectionLike, target: Any) -> Record | None:
    return collection.find(
        lambda record: not isinstance(record.get("id"), bool)
        and record.get("id") == target,
    )


def lookup_record(collection: CollectionLike, raw_id: Any) -> Resolution[Record]:
    """Find the record whose `id` matches `raw_id` under any tolerated coercion."""
    if isinstance(raw_id, bool) or raw_id is None:
        return Resolution.skip(SkipReason.RECORD_NOT_FOUND)

    record = collection.get_by_id(raw_id)
    if record is not None:
        return Resolution.hit(record)

    record = _find_by_id(collection, str(raw_id))
    if record is not None:
        return Resolution.hit(record)

    number = coerce_to_number(raw_id)
    if number is not None:
        record = _find_by_id(collection, number)
        if record is not None:
            return Resolution.hit(record)

    return Resolution.skip(SkipReason.RECORD_NOT_FOUND)
