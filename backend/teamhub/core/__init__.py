"""Core Layer — pure domain logic, no IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, db/ or models/
    - Functions here are pure and deterministic; IO reaches core only via repository_protocols

Design Decisions:
    - Functional core separated from imperative shell: tenant, role and quota rules
      are testable without a database
"""
