"""Infrastructure Layer — logging, request metrics and health checks.

Invariants:
    - Infrastructure may call core/ functions but core/ never imports infrastructure
    - Mutable process state (request counters) lives here and nowhere else
"""
