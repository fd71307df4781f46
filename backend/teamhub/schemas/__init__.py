"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - Wire format is camelCase; Python attributes stay snake_case
    - Role/status/priority inputs are plain strings: the services own enum validation

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
