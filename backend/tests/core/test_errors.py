"""Error Hierarchy — status codes, codes, and REST envelope.

Tests cover:
    - each subclass maps to its HTTP status and code
    - to_response() envelope shape with collection/record context
    - storage errors are critical
"""

from jsonexpand.core.errors import (
    CollectionNotFoundError,
    ErrorCategory,
    ErrorSeverity,
    InvalidRecordError,
    JsonExpandError,
    ReadOnlyError,
    ResourceNotFoundError,
    StoreLoadError,
    StorePersistError,
)


def test_resource_not_found_envelope():
    err = ResourceNotFoundError("people", "42")
    body = err.to_response()["error"]
    assert err.http_status == 404
    assert body["code"] == "RESOURCE_NOT_FOUND"
    assert body["category"] == ErrorCategory.RESOURCE_NOT_FOUND.value
    assert body["context"] == {"collection": "people", "record_id": "42"}
    assert "timestamp" in body


def test_collection_not_found():
    err = CollectionNotFoundError("planets")
    assert err.http_status == 404
    assert err.context.collection == "planets"
    assert "planets" in err.message


def test_read_only_is_405():
    err = ReadOnlyError("DELETE")
    assert err.http_status == 405
    assert err.code == "READ_ONLY"
    assert err.method == "DELETE"


def test_invalid_record_is_400():
    assert InvalidRecordError("bad").http_status == 400


def test_storage_errors_are_critical():
    load = StoreLoadError("boom", "db.json")
    persist = StorePersistError("disk full", "db.json")
    assert load.severity == persist.severity == ErrorSeverity.CRITICAL
    assert load.http_status == 500
    assert persist.http_status == 503
    assert load.path == "db.json"


def test_all_errors_share_base():
    for err in (
        InvalidRecordError("x"), CollectionNotFoundError("x"),
        ResourceNotFoundError("x", "1"), ReadOnlyError("POST"),
        StoreLoadError("x", "p"), StorePersistError("x", "p"),
    ):
        assert isinstance(err, JsonExpandError)
        assert str(err) == err.message
