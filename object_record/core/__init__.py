"""Core Layer — pure record logic, no IO, no logging, no global state.

Invariants:
    - No module in core/ imports from services/ or infrastructure/
    - The cache is only reached through the CacheStore protocol
    - All functions are deterministic given the same cache contents

Design Decisions:
    - Functional core separated from imperative shell (ADR: ExMA impureim sandwich)
"""
