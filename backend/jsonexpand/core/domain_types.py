"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - Record is a plain dict: schema-less, only `id` is assumed
    - ExpansionTree maps relation name → ordered, de-duplicated residual sub-paths
    - A Resolution carries EITHER a value OR a SkipReason, never both
    - All skip conditions encoded as Enums — no raw string matching

Design Decisions:
    - TypeAlias over dataclass for Record: records are untyped JSON objects (ADR: json-server parity)
    - Resolution as frozen generic dataclass: each resolution step returns a result,
      the engine treats every skip uniformly instead of catching exceptions at random points
    - str Enums: serialize to JSON/log extras without custom encoders
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeAlias, TypeVar


# ─── Identity Types ──────────────────────────────────────────────

RecordId: TypeAlias = int | str


# ─── Value Types ─────────────────────────────────────────────────

Record: TypeAlias = dict[str, Any]
ExpansionTree: TypeAlias = dict[str, list[str]]

DEFAULT_FOREIGN_KEY_SUFFIX = "Id"
DEFAULT_MAX_DEPTH = 5
DEFAULT_EXPAND_PARAM = "_expand"


# ─── Enums ───────────────────────────────────────────────────────

class SkipReason(str, Enum):
    """Why a relation was not attached — never surfaced to the client."""
    MISSING_FOREIGN_KEY = "missing_foreign_key"
    COLLECTION_NOT_FOUND = "collection_not_found"
    RECORD_NOT_FOUND = "record_not_found"
    DEPTH_EXCEEDED = "depth_exceeded"
    RESOLUTION_ERROR = "resolution_error"


# ─── Results ─────────────────────────────────────────────────────

T = TypeVar("T")


@dataclass(frozen=True)
class Resolution(Generic[T]):
    """Outcome of one resolution step: a hit with a value, or a skip with a reason."""
    value: T | None = None
    skip_reason: SkipReason | None = None

    @property
    def ok(self) -> bool:
        return self.skip_reason is None

    @classmethod
    def hit(cls, value: T) -> "Resolution[T]":
        return cls(value=value)

    @classmethod
    def skip(cls, reason: SkipReason) -> "Resolution[T]":
        return cls(skip_reason=reason)
