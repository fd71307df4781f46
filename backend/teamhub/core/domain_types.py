"""Domain Types — identity aliases and closed enums shared across the codebase.

Invariants:
    - Entity ids are opaque strings (UUID4 text when minted by the Store)
    - All valid states encoded as Enums — no raw string matching in services
    - Enum values equal their names so stored rows and API payloads read the same

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

OrganizationId = NewType("OrganizationId", str)
MemberId = NewType("MemberId", str)
ProjectId = NewType("ProjectId", str)
TaskId = NewType("TaskId", str)
UserId = NewType("UserId", str)
PlanId = NewType("PlanId", str)

DEFAULT_PLAN_ID = PlanId("free")

# local@domain.tld, shared by the invite schema and bulk invite
EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"


# ─── Enums ───────────────────────────────────────────────────────

class Role(str, Enum):
    """Member role. Declaration order is the rank order (lowest first)."""
    VIEWER = "VIEWER"
    MEMBER = "MEMBER"
    ADMIN = "ADMIN"
    OWNER = "OWNER"


class ProjectStatus(str, Enum):
    """Two-state project lifecycle: ACTIVE <-> ARCHIVED."""
    ACTIVE = "ACTIVE"
    ARCHIVED = "ARCHIVED"


class TaskStatus(str, Enum):
    """Task workflow labels. Any transition between them is allowed."""
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    IN_REVIEW = "IN_REVIEW"
    DONE = "DONE"


class TaskPriority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"


class BillingTier(str, Enum):
    FREE = "FREE"
    STARTER = "STARTER"
    PROFESSIONAL = "PROFESSIONAL"
    ENTERPRISE = "ENTERPRISE"


class BulkItemStatus(str, Enum):
    """Per-item outcome of a bulk archive/restore/invite."""
    ARCHIVED = "archived"
    RESTORED = "restored"
    INVITED = "invited"
    SKIPPED = "skipped"
    FAILED = "failed"


def parse_enum(enum_cls: type[Enum], raw: str | None) -> Enum | None:
    """Return the member of enum_cls named raw, or None when unrecognized."""
    if raw is None:
        return None
    try:
        return enum_cls[raw]
    except KeyError:
        return None
