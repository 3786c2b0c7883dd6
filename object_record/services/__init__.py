"""Services Layer — entry points that wrap the pure core with config and logging.

Invariants:
    - Services own logging; core functions never log
    - Errors from core are logged once here and re-raised unchanged

Design Decisions:
    - One module per entry point, named after the operation it exposes
"""
