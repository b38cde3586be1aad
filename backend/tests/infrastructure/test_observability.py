"""Structured Logging — JSONFormatter output shape.

Tests:
    - base fields always present
    - expansion extras (relation, depth, skip_reason) surfaced when set
    - None extras omitted
    - exception text included
"""

import json
import logging
import sys

from jsonexpand.infrastructure.observability import JSONFormatter


def _record(msg="hello", exc_info=None, **extra):
    record = logging.LogRecord(
        "jsonexpand.core.expand_engine", logging.DEBUG, __file__, 1,
        msg, None, exc_info,
    )
    record.__dict__.update(extra)
    return record


def test_base_fields():
    out = json.loads(JSONFormatter().format(_record()))
    assert out["level"] == "DEBUG"
    assert out["logger"] == "jsonexpand.core.expand_engine"
    assert out["message"] == "hello"
    assert "timestamp" in out


def test_expansion_extras_surfaced():
    out = json.loads(JSONFormatter().format(
        _record(relation="city", depth=2, skip_reason="record_not_found"),
    ))
    assert out["relation"] == "city"
    assert out["depth"] == 2
    assert out["skip_reason"] == "record_not_found"


def test_none_extras_omitted():
    out = json.loads(JSONFormatter().format(_record(skip_reason=None)))
    assert "skip_reason" not in out


def test_exception_included():
    try:
        raise ValueError("bad body")
    except ValueError:
        out = json.loads(JSONFormatter().format(_record(exc_info=sys.exc_info())))
    assert "ValueError: bad body" in out["exception"]
