"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses
    - Identity is resolved per request and passed into services as arguments

Design Decisions:
    - Thin routes delegate to services
"""
