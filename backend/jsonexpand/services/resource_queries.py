"""Resource Queries — list filtering and native single-level expansion for the router.

Invariants:
    - Query params starting with '_' are directives, never field filters
    - Field filters compare by string form (query strings carry no types)
    - Native expansion attaches ONE level only; deeper levels belong to the post-processing stage

Design Decisions:
    - Native expansion reuses the engine with bare relations and max_depth=1:
      one resolver, one lookup, no second pluralization code path
"""

from typing import Any, Iterable

from jsonexpand.core.domain_types import Record
from jsonexpand.core.expand_engine import expand_document
from jsonexpand.core.expand_paths import first_segments
from jsonexpand.core.store_protocols import RecordStore


def field_filters(params: Iterable[tuple[str, str]]) -> dict[str, list[str]]:
    """Group non-directive query params by field name."""
    filters: dict[str, list[str]] = {}
    for key, value in params:
        if key.startswith("_"):
            continue
        filters.setdefault(key, []).append(value)
    return filters


def matches_filters(record: Record, filters: dict[str, list[str]]) -> bool:
    """True when every filtered field equals one of its requested values."""
    for name, accepted in filters.items():
        if name not in record:
            return False
        value = record[name]
        rendered = _as_query_text(value)
        if rendered not in accepted:
            return False
    return True


def _as_query_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


def expand_single_level(
    data: Any,
    directives: Iterable[str],
    store: RecordStore,
    foreign_key_suffix: str,
) -> Any:
    """Attach the first segment of each directive, one level deep."""
    relations = first_segments(directives)
    if not relations:
        return data
    tree = {relation: [] for relation in relations}
    return expand_document(
        data, tree, store, depth=0,
        foreign_key_suffix=foreign_key_suffix, max_depth=1,
    )
