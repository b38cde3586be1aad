"""Core Layer — pure expansion logic, no HTTP, no async, no file IO.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - Store access only through core/store_protocols.py

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""
