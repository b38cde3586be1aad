"""JSON Record Store — in-memory collections loaded from a JSON document.

Invariants:
    - Document validated by StoreDocument on load; invalid → StoreLoadError
    - Only list-valued entries are collections; object-valued entries are singular resources
    - Stored `id` is immutable: replace/update always keep the original id
    - insert rejects duplicate ids and ids that are not int/str (InvalidRecordError)
    - Mutations and snapshots taken under one RLock; readers get list snapshots
    - save() is atomic (temp file + os.replace) and only runs when persist=True

Design Decisions:
    - Synchronous store: in-memory reads never block, satisfies core/store_protocols.py
    - get_by_id matches exact value first, then string-equal id (lowdb getById parity)
    - New ids: max int id + 1, or uuid4 hex when the collection uses string ids
"""

import copy
import json
import logging
import os
import tempfile
import threading
import uuid
from pathlib import Path
from typing import Any, Callable

from pydantic import ValidationError

from jsonexpand.core.domain_types import Record, RecordId
from jsonexpand.core.errors import (
    ErrorContext,
    InvalidRecordError,
    StoreLoadError,
    StorePersistError,
)
from jsonexpand.schemas.store import StoreDocument

logger = logging.getLogger(__name__)


class JsonCollection:
    """A named list of records inside a JsonStore."""

    def __init__(self, name: str, records: list[Record], lock: threading.RLock):
        self.name = name
        self._records = records
        self._lock = lock

    def size(self) -> int:
        return len(self._records)

    def all(self) -> list[Record]:
        with self._lock:
            return list(self._records)

    def get_by_id(self, record_id: RecordId) -> Record | None:
        """Exact id match first, then string-equal id."""
        with self._lock:
            for record in self._records:
                if record.get("id") == record_id and not isinstance(record.get("id"), bool):
                    return record
            wanted = str(record_id)
            for record in self._records:
                if "id" in record and str(record["id"]) == wanted:
                    return record
        return None

    def find(self, predicate: Callable[[Record], bool]) -> Record | None:
        with self._lock:
            return next((r for r in self._records if predicate(r)), None)

    def filter(self, predicate: Callable[[Record], bool]) -> list[Record]:
        with self._lock:
            return [r for r in self._records if predicate(r)]

    def insert(self, data: Record) -> Record:
        """Append a copy of `data`, generating an id when it has none."""
        record = copy.deepcopy(data)
        with self._lock:
            record_id = record.get("id")
            if record_id is None:
                record["id"] = self._next_id()
            elif isinstance(record_id, bool) or not isinstance(record_id, (int, str)):
                raise InvalidRecordError(
                    "id must be an integer or a string",
                    ErrorContext(collection=self.name),
                )
            elif self.get_by_id(record_id) is not None:
                raise InvalidRecordError(
                    f"Duplicate id '{record_id}'",
                    ErrorContext(collection=self.name, record_id=str(record_id)),
                )
            self._records.append(record)
        return record

    def replace(self, record_id: RecordId, data: Record) -> Record | None:
        with self._lock:
            index = self._index_of(record_id)
            if index is None:
                return None
            record = copy.deepcopy(data)
            record["id"] = self._records[index]["id"]
            self._records[index] = record
            return record

    def update(self, record_id: RecordId, changes: Record) -> Record | None:
        with self._lock:
            index = self._index_of(record_id)
            if index is None:
                return None
            record = self._records[index]
            record.update(
                {k: copy.deepcopy(v) for k, v in changes.items() if k != "id"},
            )
            return record

    def remove(self, record_id: RecordId) -> Record | None:
        with self._lock:
            index = self._index_of(record_id)
            if index is None:
                return None
            return self._records.pop(index)

    def _index_of(self, record_id: RecordId) -> int | None:
        target = self.get_by_id(record_id)
        if target is None:
            return None
        for index, record in enumerate(self._records):
            if record is target:
                return index
        return None

    def _next_id(self) -> RecordId:
        ids = [r.get("id") for r in self._records]
        if any(isinstance(i, str) for i in ids):
            return uuid.uuid4().hex
        numeric = [i for i in ids if isinstance(i, int) and not isinstance(i, bool)]
        return max(numeric, default=0) + 1


class JsonStore:
    """Whole database: collections and singular resources keyed by name."""

    def __init__(
        self,
        document: dict[str, Any] | None = None,
        path: Path | None = None,
        persist: bool = False,
    ):
        self._data: dict[str, Any] = document if document is not None else {}
        self.path = path
        self.persist = persist
        self._lock = threading.RLock()

    @classmethod
    def from_file(cls, path: str | Path, persist: bool = True) -> "JsonStore":
        """Load and validate a JSON document. Missing file → empty store."""
        path = Path(path)
        if not path.exists():
            logger.warning(f"Database {path} not found, starting with an empty store")
            return cls({}, path=path, persist=persist)
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
            document = StoreDocument.model_validate(raw).root
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            raise StoreLoadError(str(e), str(path)) from e
        logger.info(
            f"Loaded database {path} ({len(document)} resources)",
            extra={"path": str(path)},
        )
        return cls(document, path=path, persist=persist)

    def names(self) -> list[str]:
        return list(self._data)

    def get_collection(self, name: str) -> JsonCollection | None:
        value = self._data.get(name)
        if not isinstance(value, list):
            return None
        return JsonCollection(name, value, self._lock)

    def get_resource(self, name: str) -> list[Record] | Record | None:
        """List snapshot, singular object, or None when the name is unknown."""
        with self._lock:
            value = self._data.get(name)
            if isinstance(value, list):
                return list(value)
            return value

    def set_resource(self, name: str, value: Record) -> Record:
        """Replace a singular (object-valued) resource."""
        with self._lock:
            self._data[name] = copy.deepcopy(value)
            return self._data[name]

    def snapshot(self) -> dict[str, Any]:
        with self._lock:
            return copy.deepcopy(self._data)

    def save(self) -> None:
        """Write the document back to `path` when persistence is enabled."""
        if not self.persist or self.path is None:
            return
        content = json.dumps(self.snapshot(), indent=2, ensure_ascii=False)
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp",
            )
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                tmp.write(content)
            os.replace(tmp_name, self.path)
        except OSError as e:
            logger.error(f"Failed to persist {self.path}: {e}", exc_info=True)
            raise StorePersistError(str(e), str(self.path)) from e
