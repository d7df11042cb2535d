"""Core Layer — the document tree, its traversal, folds and validation. No IO, no logging.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/ or cli
    - All functions are pure and deterministic; every operation returns a new value
    - Failures surface as values (Err, None) or typed exceptions, never as log lines

Design Decisions:
    - Functional core separated from imperative shell (services, api, cli)
"""
