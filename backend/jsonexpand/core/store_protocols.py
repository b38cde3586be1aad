"""Boundary Protocols — contracts between the expansion core and the record store.

Invariants:
    - Core NEVER imports from infrastructure — dependency arrows point inward only
    - All store reads accessed through Protocol types
    - Implementations provided by the shell (infrastructure/json_store.py)

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Synchronous methods: the store is in-memory and the engine has no suspension
      points, so expansion runs to completion once invoked
"""

from typing import Callable, Protocol

from jsonexpand.core.domain_types import Record, RecordId


class CollectionLike(Protocol):
    """Contract for a named, ordered sequence of records."""
    def size(self) -> int: ...
    def get_by_id(self, record_id: RecordId) -> Record | None: ...
    def find(self, predicate: Callable[[Record], bool]) -> Record | None: ...


class RecordStore(Protocol):
    """Contract for collection lookup by name — implemented by shell."""
    def get_collection(self, name: str) -> CollectionLike | None: ...
