"""Infrastructure Layer — record storage and cross-cutting concerns.

Invariants:
    - Infrastructure implements core/store_protocols.py, never the other way round
    - Storage failures mapped to core/errors.py types

Design Decisions:
    - One module per concern: json_store (data), observability (logging)
"""
