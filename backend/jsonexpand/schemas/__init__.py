"""Pydantic Schemas — validation at the system boundary.

Invariants:
    - Schemas validate the database document when it enters the process

Design Decisions:
    - Records themselves stay schema-less dicts (ADR: json-server parity)
"""
