"""Pydantic Schemas — validation for metadata supplied by the metadata registry.

Invariants:
    - Schemas validate at system boundary (metadata arrives from outside this package)
    - Models are frozen: metadata is referenced, never owned or mutated

Design Decisions:
    - Separate from core: schemas are input contracts, core holds the rules (ADR: DDD boundary)
"""
