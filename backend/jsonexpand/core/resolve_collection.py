"""Collection Resolver — relation name → backing collection, tolerating plural forms.

Invariants:
    - Candidates tried in fixed order: exact, +s, y→ies (only when ending in 'y')
    - First candidate that exists AND is non-empty wins — at most one per relation
    - Not found is a skip (COLLECTION_NOT_FOUND), never an exception

Design Decisions:
    - Naming strategies as an explicit ordered tuple of pure functions:
      testable on its own, no branching scattered through the engine
"""

from dataclasses import dataclass
from typing import Callable

from jsonexpand.core.domain_types import Resolution, SkipReason
from jsonexpand.core.store_protocols import CollectionLike, RecordStore


def _exact(relation: str) -> str | None:
    return relation


def _simple_plural(relation: str) -> str | None:
    return relation + "s"


def _irregular_plural(relation: str) -> str | None:
    if relation.endswith("y"):
        return relation[:-1] + "ies"
    return None


NAMING_STRATEGIES: tuple[Callable[[str], str | None], ...] = (
    _exact,
    _simple_plural,
    _irregular_plural,
)


@dataclass(frozen=True)
class ResolvedCollection:
    """A collection handle plus the name it was found under."""
    name: str
    collection: CollectionLike


def candidate_collection_names(relation: str) -> list[str]:
    """Ordered, de-duplicated collection names to try for `relation`."""
    names: list[str] = []
    for strategy in NAMING_STRATEGIES:
        name = strategy(relation)
        if name and name not in names:
            names.append(name)
    return names


def resolve_collection(
    store: RecordStore, relation: str,
) -> Resolution[ResolvedCollection]:
    """Locate the collection backing `relation`."""
    for name in candidate_collection_names(relation):
        collection = store.get_collection(name)
        if collection is not None and collection.size() > 0:
            return Resolution.hit(ResolvedCollection(name, collection))
    return Resolution.skip(SkipReason.COLLECTION_NOT_FOUND)
