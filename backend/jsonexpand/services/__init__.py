"""Services Layer — orchestration between HTTP and the expansion core.

Invariants:
    - Services never raise into the HTTP layer for expansion problems

Design Decisions:
    - One file per stage for locality (ADR: no god objects)
"""
