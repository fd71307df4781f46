"""Organization ORM — the tenant row.

Invariants:
    - slug is unique (enforced by OrganizationService and a unique index)
    - billing_plan_id references billing_plans.id by value only; a dangling
      reference is tolerated (BillingPolicy falls back to FREE)
"""

from datetime import datetime

from sqlalchemy import String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from teamhub.db.base import Base
from teamhub.models._columns import new_id, utcnow


class OrganizationRow(Base):
    __tablename__ = "organizations"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)
    billing_plan_id: Mapped[str] = mapped_column(
        String(50), nullable=False, default="free",
    )
    settings: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow,
    )
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
