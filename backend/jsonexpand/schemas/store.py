"""Store Schemas — Pydantic validation of the JSON database document at load time.

Invariants:
    - Top level is an object keyed by collection/resource name
    - Each value is a list of objects (collection) or an object (singular resource)
    - Record contents are NOT validated beyond being objects (schema-less records)

Design Decisions:
    - RootModel over hand-written isinstance checks: one validation error type at the boundary
"""

from typing import Any

from pydantic import RootModel, field_validator


class StoreDocument(RootModel[dict[str, list[dict[str, Any]] | dict[str, Any]]]):
    """Whole database document — validated once when the store is loaded."""

    @field_validator("root")
    @classmethod
    def reject_blank_names(
        cls, v: dict[str, list[dict[str, Any]] | dict[str, Any]],
    ) -> dict[str, list[dict[str, Any]] | dict[str, Any]]:
        blank = [name for name in v if not name.strip()]
        if blank:
            raise ValueError("collection names cannot be empty or whitespace")
        return v
