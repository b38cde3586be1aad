"""jsonexpand — JSON REST server with nested `_expand` resolution.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports (ADR: explicit over convention)
"""
