"""Pydantic Schemas - request/response contracts for the HTTP surface.

Invariants:
    - Schemas validate at the system boundary (request bodies, response bodies)

Design Decisions:
    - Response models double as OpenAPI documentation for the routes
"""
