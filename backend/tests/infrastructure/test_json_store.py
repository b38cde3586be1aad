"""JSON Record Store — tests for loading, lookup, mutation, and persistence.

Tests cover:
    - from_file: valid document, missing file, malformed JSON, invalid shape
    - get_collection only for list-valued entries
    - get_by_id exact and string-equal matching
    - insert id generation (int and string ids), replace/update keep id, remove
    - save() writes atomically only when persist=True
"""

import json

import pytest

from jsonexpand.core.errors import InvalidRecordError, StoreLoadError
from jsonexpand.infrastructure.json_store import JsonStore


# ─── Loading ─────────────────────────────────────────────────────

def test_from_file_loads_document(tmp_path):
    path = tmp_path / "db.json"
    path.write_text(json.dumps({"people": [{"id": 1}], "profile": {"name": "x"}}))
    store = JsonStore.from_file(path, persist=False)
    assert store.names() == ["people", "profile"]
    assert store.get_collection("people").size() == 1


def test_from_file_missing_gives_empty_store(tmp_path):
    store = JsonStore.from_file(tmp_path / "nope.json")
    assert store.names() == []


def test_from_file_malformed_json_raises(tmp_path):
    path = tmp_path / "db.json"
    path.write_text("{not json")
    with pytest.raises(StoreLoadError) as exc_info:
        JsonStore.from_file(path)
    assert exc_info.value.code == "STORE_LOAD_ERROR"


def test_from_file_invalid_shape_raises(tmp_path):
    path = tmp_path / "db.json"
    path.write_text(json.dumps({"people": [1, 2, 3]}))
    with pytest.raises(StoreLoadError):
        JsonStore.from_file(path)


# ─── Lookup ──────────────────────────────────────────────────────

def test_singular_resource_is_not_a_collection():
    store = JsonStore({"profile": {"name": "me"}})
    assert store.get_collection("profile") is None
    assert store.get_resource("profile") == {"name": "me"}


def test_unknown_name_returns_none():
    store = JsonStore({})
    assert store.get_collection("people") is None
    assert store.get_resource("people") is None


def test_get_by_id_matches_string_form(people_store):
    people = people_store.get_collection("people")
    assert people.get_by_id("1")["name"] == "John Smith"
    assert people.get_by_id(1)["name"] == "John Smith"
    assert people.get_by_id(99) is None


def test_find_and_filter(people_store):
    cities = people_store.get_collection("cities")
    assert cities.find(lambda r: r["stateId"] == 23)["name"] == "New York"
    assert len(cities.filter(lambda r: r["id"] > 0)) == 2


def test_get_resource_returns_snapshot(people_store):
    people = people_store.get_resource("people")
    people.append({"id": 3})
    assert people_store.get_collection("people").size() == 2


# ─── Mutation ────────────────────────────────────────────────────

def test_insert_generates_next_int_id(people_store):
    record = people_store.get_collection("people").insert({"name": "New"})
    assert record["id"] == 3


def test_insert_generates_string_id_for_string_collections():
    store = JsonStore({"tags": [{"id": "a1"}]})
    record = store.get_collection("tags").insert({"label": "x"})
    assert isinstance(record["id"], str)
    assert record["id"] != "a1"


def test_insert_keeps_given_id(people_store):
    record = people_store.get_collection("people").insert({"id": 50})
    assert record["id"] == 50


def test_insert_rejects_duplicate_id(people_store):
    with pytest.raises(InvalidRecordError) as exc_info:
        people_store.get_collection("people").insert({"id": "1"})
    assert exc_info.value.http_status == 400
    assert people_store.get_collection("people").size() == 2


def test_insert_rejects_non_scalar_id(people_store):
    with pytest.raises(InvalidRecordError):
        people_store.get_collection("people").insert({"id": {"nested": 1}})


def test_replace_keeps_stored_id(people_store):
    people = people_store.get_collection("people")
    record = people.replace("1", {"id": 77, "name": "Replaced"})
    assert record == {"id": 1, "name": "Replaced"}
    assert people.get_by_id(1)["name"] == "Replaced"


def test_update_merges_and_keeps_id(people_store):
    people = people_store.get_collection("people")
    record = people.update(1, {"id": 77, "name": "Updated"})
    assert record == {"id": 1, "name": "Updated", "cityId": 4}


def test_remove_deletes_record(people_store):
    people = people_store.get_collection("people")
    assert people.remove(1)["id"] == 1
    assert people.get_by_id(1) is None
    assert people.remove(1) is None


# ─── Persistence ─────────────────────────────────────────────────

def test_save_writes_document_when_persist(tmp_path):
    path = tmp_path / "db.json"
    store = JsonStore({"people": []}, path=path, persist=True)
    store.get_collection("people").insert({"name": "Saved"})
    store.save()
    assert json.loads(path.read_text()) == {"people": [{"name": "Saved", "id": 1}]}


def test_save_is_noop_without_persist(tmp_path):
    path = tmp_path / "db.json"
    JsonStore({"people": []}, path=path, persist=False).save()
    assert not path.exists()
