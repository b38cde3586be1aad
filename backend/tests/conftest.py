"""Root conftest — shared test configuration and sample data."""

import os

import pytest

# Ensure tests never write to a real database file
os.environ.setdefault("DB_PATH", "test-db.json")
os.environ.setdefault("DB_PERSIST", "false")
os.environ.setdefault("LOG_FORMAT", "text")

from jsonexpand.infrastructure.json_store import JsonStore  # noqa: E402


def people_document() -> dict:
    """People → cities → states → countries, ids stored as ints."""
    return {
        "people": [
            {"id": 1, "name": "John Smith", "cityId": 4},
            {"id": 2, "name": "Jane Doe", "cityId": 5},
        ],
        "cities": [
            {"id": 4, "name": "Pittsburgh", "stateId": 22},
            {"id": 5, "name": "New York", "stateId": 23},
        ],
        "states": [
            {"id": 22, "name": "Pennsylvania", "countryId": 1},
            {"id": 23, "name": "New York", "countryId": 1},
        ],
        "countries": [
            {"id": 1, "name": "USA"},
        ],
    }


@pytest.fixture
def people_store() -> JsonStore:
    return JsonStore(people_document())
