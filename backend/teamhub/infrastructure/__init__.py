"""Infrastructure Layer — Store, Authenticator, Notifier and logging implementations.

Invariants:
    - Implements the protocols declared in core/repository_protocols.py
    - All SQLAlchemy errors are mapped to DatabaseError before leaving this layer
"""
