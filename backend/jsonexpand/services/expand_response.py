"""Expand Response — post-processing stage that expands a serialized JSON body.

Invariants:
    - Transforms ONLY when content is JSON-typed AND at least one directive is present
    - Any failure (malformed JSON, unexpected error) → original bytes returned unchanged
    - Fresh Expansion Tree per call, depth starts at 0
    - Output serialized exactly like FastAPI's JSONResponse (compact, UTF-8, no ASCII escaping)

Design Decisions:
    - Bytes in, bytes out: independent of Starlette, testable without an app
    - Errors logged and swallowed here: expansion is enrichment, availability wins over completeness
"""

import json
import logging
from typing import Sequence

from jsonexpand.core.domain_types import DEFAULT_FOREIGN_KEY_SUFFIX, DEFAULT_MAX_DEPTH
from jsonexpand.core.expand_engine import expand_document
from jsonexpand.core.expand_paths import parse_expand_directives
from jsonexpand.core.store_protocols import RecordStore

logger = logging.getLogger(__name__)


def is_json_content(content_type: str | None) -> bool:
    """True for application/json and any +json media type."""
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


def render_json(data: object) -> bytes:
    """Serialize the way starlette.responses.JSONResponse.render does."""
    return json.dumps(
        data,
        ensure_ascii=False,
        allow_nan=False,
        indent=None,
        separators=(",", ":"),
    ).encode("utf-8")


def expand_response_body(
    body: bytes,
    content_type: str | None,
    directives: Sequence[str],
    store: RecordStore,
    *,
    foreign_key_suffix: str = DEFAULT_FOREIGN_KEY_SUFFIX,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> bytes:
    """Return `body` with nested relations attached, or `body` itself on passthrough."""
    if not is_json_content(content_type) or not directives:
        return body
    try:
        data = json.loads(body)
        tree = parse_expand_directives(directives)
        if not tree:
            return body
        expanded = expand_document(
            data, tree, store, depth=0,
            foreign_key_suffix=foreign_key_suffix, max_depth=max_depth,
        )
        return render_json(expanded)
    except Exception as e:
        logger.error(
            f"Nested expansion failed, sending original body: {e}",
            extra={"error_code": "EXPAND_FAILED"},
            exc_info=True,
        )
        return body
