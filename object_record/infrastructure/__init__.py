"""Infrastructure Layer — concrete cache store and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from core/ domain logic (types and errors only)
    - Store internals never escape: every read and write goes through a copy

Design Decisions:
    - Plain in-process implementations behind core protocols (ADR: ExMA single responsibility)
"""
