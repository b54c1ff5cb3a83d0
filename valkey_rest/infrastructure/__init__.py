"""Infrastructure Layer - store client and cross-cutting concerns.

Invariants:
    - Every store call maps driver exceptions to StoreError (core/errors.py)
    - Infrastructure never decides HTTP status codes
"""
