"""API Layer - FastAPI routes, authorization dependency and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return JSON bodies, errors as {"error": "<message>"}

Design Decisions:
    - Thin routes delegate to services (ADR: impureim sandwich)
"""
