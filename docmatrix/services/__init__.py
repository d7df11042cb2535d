"""Services Layer — orchestrates core document operations for the API and CLI.

Invariants:
    - Services log; core does not
    - Services raise DocMatrixError subclasses; routes translate them via error handlers
"""
