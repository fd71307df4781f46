"""Role Hierarchy — strict ordering of member roles.

Invariants:
    - VIEWER < MEMBER < ADMIN < OWNER
    - outranks(r, r) is False for every role (strict order)
    - Used only as a guard; never to compute stored data
"""

from teamhub.core.domain_types import Role

_RANK: dict[Role, int] = {
    Role.VIEWER: 0,
    Role.MEMBER: 1,
    Role.ADMIN: 2,
    Role.OWNER: 3,
}


def rank(role: Role) -> int:
    return _RANK[role]


def outranks(first: Role, second: Role) -> bool:
    """True iff first is strictly higher than second."""
    return _RANK[first] > _RANK[second]


# Roles that may be handed out through invite / update-role.
ASSIGNABLE_ROLES = frozenset(r for r in Role if r is not Role.OWNER)
