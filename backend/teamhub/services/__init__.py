"""Services Layer — tenant-scoped business operations over the repository protocols.

Invariants:
    - Services depend only on core/ and on each other; never on api/ or infrastructure/
    - Identity arrives as explicit arguments (user id, organization id), never ambient state

Design Decisions:
    - One service per aggregate (organization, member, project, task) plus the
      BillingPolicy and ArchiveEngine they share; wiring lives in container.py
"""
