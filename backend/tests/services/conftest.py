"""Service test fixtures — in-memory JsonStore + FastAPI test client.

Invariants:
    - Every test gets a fresh JsonStore (never touches a database file)
    - app.state.store restored after each test
    - Settings cache cleared around env overrides

Design Decisions:
    - Store injected through app.state: ASGITransport does not run the lifespan,
      so the file-backed store is never loaded in tests
"""

import pytest
from httpx import ASGITransport, AsyncClient

from jsonexpand.config import get_settings
from jsonexpand.infrastructure.json_store import JsonStore
from jsonexpand.main import app


@pytest.fixture
def scenario_store() -> JsonStore:
    """People/cities/states without any country collection."""
    return JsonStore({
        "people": [
            {"id": 1, "name": "John Smith", "cityId": 4},
            {"id": 2, "name": "Jane Doe", "cityId": 5},
            {"id": 3, "name": "Invalid Person", "cityId": 999},
        ],
        "cities": [
            {"id": 4, "name": "Pittsburgh", "stateId": 22},
            {"id": 5, "name": "Columbus", "stateId": 23},
        ],
        "states": [
            {"id": 22, "name": "Pennsylvania"},
            {"id": 23, "name": "Ohio"},
        ],
        "profile": {"name": "typicode"},
    })


@pytest.fixture
async def client_for():
    """Factory: AsyncClient bound to the app with the given store attached."""
    original = getattr(app.state, "store", None)
    clients: list[AsyncClient] = []

    async def _make(store: JsonStore | None) -> AsyncClient:
        app.state.store = store
        c = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        clients.append(c)
        return c

    yield _make

    for c in clients:
        await c.aclose()
    app.state.store = original


@pytest.fixture
async def client(client_for, scenario_store):
    return await client_for(scenario_store)


@pytest.fixture
def settings_env(monkeypatch):
    """Apply env overrides and rebuild the cached Settings."""
    def _apply(**env):
        for key, value in env.items():
            monkeypatch.setenv(key.upper(), str(value))
        get_settings.cache_clear()

    yield _apply
    get_settings.cache_clear()
