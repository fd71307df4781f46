"""ORM Models — SQLAlchemy declarative models for all persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Every tenant-owned row carries organization_id, directly or through its project
    - Soft delete: rows are marked with deleted_at, never physically removed

Design Decisions:
    - One file per entity for locality
    - Rows are mapped to core.entities dataclasses by the repositories; ORM objects
      never leave infrastructure/
    - All models imported here so Base.metadata is complete for create_all and alembic
"""

from teamhub.models.organization import OrganizationRow  # noqa: F401
from teamhub.models.member import MemberRow  # noqa: F401
from teamhub.models.project import ProjectRow  # noqa: F401
from teamhub.models.task import TaskRow  # noqa: F401
from teamhub.models.billing_plan import BillingPlanRow  # noqa: F401
from teamhub.models.api_key import ApiKeyRow  # noqa: F401
