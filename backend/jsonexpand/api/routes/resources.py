"""Resource Routes — json-server style REST over the in-memory JSON store.

Invariants:
    - GET /{name} lists a collection (field filters + native `_expand`) or returns a singular resource
    - GET /{name}/{record_id} returns one record or 404
    - Writes (POST/PUT/PATCH/DELETE) raise ReadOnlyError (405) when settings.read_only
    - Every successful write calls store.save()
    - Native `_expand` attaches one level; nested levels are added by api/expand_middleware.py

Design Decisions:
    - Store pulled from app.state via Depends(get_store): tests inject a JsonStore without lifespan
    - Routes stay thin: filtering and expansion live in services/resource_queries.py
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Request, status

from jsonexpand.config import get_settings
from jsonexpand.core.errors import (
    CollectionNotFoundError,
    ReadOnlyError,
    ResourceNotFoundError,
    StoreLoadError,
)
from jsonexpand.infrastructure.json_store import JsonCollection, JsonStore
from jsonexpand.services.resource_queries import (
    expand_single_level,
    field_filters,
    matches_filters,
)

logger = logging.getLogger(__name__)
router = APIRouter(tags=["resources"])


def get_store(request: Request) -> JsonStore:
    """Store attached by the lifespan (or by a test)."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise StoreLoadError("store not initialized", get_settings().db_path)
    return store


def require_writable(request: Request) -> None:
    if get_settings().read_only:
        raise ReadOnlyError(request.method)


def _collection_or_404(store: JsonStore, name: str) -> JsonCollection:
    collection = store.get_collection(name)
    if collection is None:
        raise CollectionNotFoundError(name)
    return collection


def _native_expand(request: Request, data: Any, store: JsonStore) -> Any:
    settings = get_settings()
    directives = request.query_params.getlist(settings.expand_param)
    if not directives:
        return data
    return expand_single_level(
        data, directives, store, settings.foreign_key_suffix,
    )


@router.get("/{name}")
async def list_resource(
    name: str, request: Request, store: JsonStore = Depends(get_store),
):
    """List a collection, or return a singular resource."""
    resource = store.get_resource(name)
    if resource is None:
        raise CollectionNotFoundError(name)
    if isinstance(resource, dict):
        return _native_expand(request, resource, store)
    filters = field_filters(request.query_params.multi_items())
    records = [r for r in resource if matches_filters(r, filters)]
    return _native_expand(request, records, store)


@router.get("/{name}/{record_id}")
async def get_record(
    name: str, record_id: str, request: Request,
    store: JsonStore = Depends(get_store),
):
    """Get one record by id."""
    record = _collection_or_404(store, name).get_by_id(record_id)
    if record is None:
        raise ResourceNotFoundError(name, record_id)
    return _native_expand(request, record, store)


@router.post(
    "/{name}", status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_writable)],
)
async def create_record(
    name: str,
    body: dict[str, Any] = Body(...),
    store: JsonStore = Depends(get_store),
):
    """Append a record; an id is generated when the body has none."""
    record = _collection_or_404(store, name).insert(body)
    store.save()
    logger.info(
        f"Created {name}/{record['id']}", extra={"collection": name},
    )
    return record


@router.put("/{name}", dependencies=[Depends(require_writable)])
async def replace_singular(
    name: str,
    body: dict[str, Any] = Body(...),
    store: JsonStore = Depends(get_store),
):
    """Replace a singular (object-valued) resource."""
    if not isinstance(store.get_resource(name), dict):
        raise CollectionNotFoundError(name)
    resource = store.set_resource(name, body)
    store.save()
    return resource


@router.put("/{name}/{record_id}", dependencies=[Depends(require_writable)])
async def replace_record(
    name: str,
    record_id: str,
    body: dict[str, Any] = Body(...),
    store: JsonStore = Depends(get_store),
):
    """Replace a record; its id is kept."""
    record = _collection_or_404(store, name).replace(record_id, body)
    if record is None:
        raise ResourceNotFoundError(name, record_id)
    store.save()
    return record


@router.patch("/{name}/{record_id}", dependencies=[Depends(require_writable)])
async def update_record(
    name: str,
    record_id: str,
    body: dict[str, Any] = Body(...),
    store: JsonStore = Depends(get_store),
):
    """Merge fields into a record; its id is kept."""
    record = _collection_or_404(store, name).update(record_id, body)
    if record is None:
        raise ResourceNotFoundError(name, record_id)
    store.save()
    return record


@router.delete("/{name}/{record_id}", dependencies=[Depends(require_writable)])
async def delete_record(
    name: str, record_id: str, store: JsonStore = Depends(get_store),
):
    """Remove a record."""
    removed = _collection_or_404(store, name).remove(record_id)
    if removed is None:
        raise ResourceNotFoundError(name, record_id)
    store.save()
    logger.info(f"Deleted {name}/{record_id}", extra={"collection": name})
    return {}
