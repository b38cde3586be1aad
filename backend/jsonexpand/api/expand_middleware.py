"""Expand Middleware — HTTP post-processing stage for nested `_expand` directives.

Invariants:
    - Only GET requests carrying the expand param are intercepted; all others pass through untouched
    - Before routing, expand values are rewritten to their distinct first segments
      so the router performs native single-level expansion only
    - Full directives kept on request.state.expand_directives
    - Status code and headers preserved; only Content-Length recomputed
    - Expansion failure degrades to the original body, never to an error response

Design Decisions:
    - Function middleware via @app.middleware("http") over a raw ASGI class:
      body is small JSON, buffering it is fine (ADR: simplicity)
    - Store and settings read per request from app.state / get_settings so tests can swap them
"""

import logging
from urllib.parse import parse_qsl, urlencode

from fastapi import FastAPI, Request
from fastapi.responses import Response

from jsonexpand.config import get_settings
from jsonexpand.core.expand_paths import first_segments
from jsonexpand.services.expand_response import expand_response_body

logger = logging.getLogger(__name__)


def rewrite_expand_query(
    query_string: bytes, expand_param: str,
) -> tuple[bytes, list[str]]:
    """Collapse expand values to first segments. Returns (new query, original directives)."""
    pairs = parse_qsl(query_string.decode("latin-1"), keep_blank_values=True)
    directives = [value for key, value in pairs if key == expand_param]
    if not directives:
        return query_string, []
    kept = [(key, value) for key, value in pairs if key != expand_param]
    kept.extend((expand_param, relation) for relation in first_segments(directives))
    return urlencode(kept).encode("latin-1"), directives


def register_expand_middleware(app: FastAPI) -> None:
    """Install the nested expansion post-processing stage on `app`."""

    @app.middleware("http")
    async def nested_expand(request: Request, call_next):
        settings = get_settings()
        if request.method != "GET":
            return await call_next(request)

        query, directives = rewrite_expand_query(
            request.scope.get("query_string", b""), settings.expand_param,
        )
        if not directives:
            return await call_next(request)

        request.scope["query_string"] = query
        request.state.expand_directives = directives
        response = await call_next(request)

        body = b"".join([chunk async for chunk in response.body_iterator])
        store = getattr(request.app.state, "store", None)
        if store is None:
            logger.warning(
                "No store attached to app, skipping nested expansion",
                extra={"path": request.url.path},
            )
            new_body = body
        else:
            new_body = expand_response_body(
                body,
                response.headers.get("content-type"),
                directives,
                store,
                foreign_key_suffix=settings.foreign_key_suffix,
                max_depth=settings.expand_max_depth,
            )

        headers = {
            key: value for key, value in response.headers.items()
            if key.lower() != "content-length"
        }
        return Response(
            content=new_body,
            status_code=response.status_code,
            headers=headers,
        )
