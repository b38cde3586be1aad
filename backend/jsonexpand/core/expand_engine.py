"""Expansion Engine — recursive, depth-bounded attachment of related records.

Invariants:
    - Input document and store are NEVER mutated: every record is deep-copied
      before attachment, every attached record is a deep copy of the stored one
    - Sequences expand element by element, order preserved, no cross-talk
    - A record reached at depth >= max_depth is returned unmodified
    - Unresolvable relations are skipped (absent from output, never null)
    - One failing relation never aborts siblings, sibling records, or the response
    - Fields that are not expansion targets are never touched

Design Decisions:
    - Depth bound is the only cycle guard: A→B→A stops after max_depth levels
      without a visited set (ADR: bounded branching per request is enough)
    - Case A (already expanded by the router) vs Case B (resolve via foreign key)
      decided per relation per record, so native single-level expansion composes
    - Each resolution step returns a Resolution; exceptions are caught once per
      relation and folded into SkipReason.RESOLUTION_ERROR
"""

import copy
import logging
from typing import Any

from jsonexpand.core.domain_types import (
    DEFAULT_FOREIGN_KEY_SUFFIX,
    DEFAULT_MAX_DEPTH,
    ExpansionTree,
    Record,
    Resolution,
    SkipReason,
)
from jsonexpand.core.expand_paths import narrow_tree
from jsonexpand.core.lookup_record import lookup_record
from jsonexpand.core.resolve_collection import resolve_collection
from jsonexpand.core.store_protocols import RecordStore

logger = logging.getLogger(__name__)


def expand_document(
    document: Any,
    tree: ExpansionTree,
    store: RecordStore,
    *,
    depth: int = 0,
    foreign_key_suffix: str = DEFAULT_FOREIGN_KEY_SUFFIX,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Any:
    """Return an independent copy of `document` with `tree` relations attached.

    `document` is a record, a list of records, or any other JSON value
    (returned as an unmodified copy).
    """
    if isinstance(document, list):
        return [
            expand_document(
                item, tree, store, depth=depth,
                foreign_key_suffix=foreign_key_suffix, max_depth=max_depth,
            )
            for item in document
        ]
    if not isinstance(document, dict):
        return copy.deepcopy(document)
    return expand_record(
        document, tree, store, depth=depth,
        foreign_key_suffix=foreign_key_suffix, max_depth=max_depth,
    )


def expand_record(
    record: Record,
    tree: ExpansionTree,
    store: RecordStore,
    *,
    depth: int = 0,
    foreign_key_suffix: str = DEFAULT_FOREIGN_KEY_SUFFIX,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Record:
    """Expand a single record. See expand_document."""
    result = copy.deepcopy(record)
    if not tree:
        return result
    if depth >= max_depth:
        _log_skip("*", depth, SkipReason.DEPTH_EXCEEDED)
        return result

    for relation in tree:
        try:
            outcome = _expand_relation(
                result, relation, tree, store, depth,
                foreign_key_suffix, max_depth,
            )
        except Exception as e:
            logger.warning(
                f"Expansion of '{relation}' failed: {e}",
                extra={"relation": relation, "depth": depth,
                       "skip_reason": SkipReason.RESOLUTION_ERROR.value},
                exc_info=True,
            )
            continue
        if not outcome.ok:
            _log_skip(relation, depth, outcome.skip_reason)
    return result


def _expand_relation(
    result: Record,
    relation: str,
    tree: ExpansionTree,
    store: RecordStore,
    depth: int,
    foreign_key_suffix: str,
    max_depth: int,
) -> Resolution[Record]:
    """Attach (or descend into) one relation on `result`, in place."""
    subtree = narrow_tree(tree, relation)

    # Case A: router already attached it
    existing = result.get(relation)
    if isinstance(existing, dict):
        if subtree:
            result[relation] = expand_record(
                existing, subtree, store, depth=depth + 1,
                foreign_key_suffix=foreign_key_suffix, max_depth=max_depth,
            )
        return Resolution.hit(result[relation])

    # Case B: resolve through the foreign key
    foreign_key = f"{relation}{foreign_key_suffix}"
    raw_id = result.get(foreign_key)
    if raw_id is None:
        return Resolution.skip(SkipReason.MISSING_FOREIGN_KEY)

    found_collection = resolve_collection(store, relation)
    if not found_collection.ok:
        return Resolution.skip(found_collection.skip_reason)

    found_record = lookup_record(found_collection.value.collection, raw_id)
    if not found_record.ok:
        return Resolution.skip(found_record.skip_reason)

    attached = copy.deepcopy(found_record.value)
    if subtree:
        attached = expand_record(
            attached, subtree, store, depth=depth + 1,
            foreign_key_suffix=foreign_key_suffix, max_depth=max_depth,
        )
    result[relation] = attached
    return Resolution.hit(attached)


def _log_skip(relation: str, depth: int, reason: SkipReason | None) -> None:
    logger.debug(
        "Skipped relation '%s' at depth %d: %s",
        relation, depth, reason.value if reason else "unknown",
        extra={"relation": relation, "depth": depth,
               "skip_reason": reason.value if reason else None},
    )
