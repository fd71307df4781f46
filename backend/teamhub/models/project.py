"""Project ORM — tenant-owned container for tasks.

Invariants:
    - status is ACTIVE or ARCHIVED
    - member_ids is a JSON array seeded with the creator
    - archived_by/archived_at and restored_by/restored_at are written by bulk
      transitions only

Design Decisions:
    - member_ids as JSON array over a join table: membership is only read whole,
      to validate a task assignee
"""

from datetime import datetime

from sqlalchemy import Enum, String, Text, DateTime, JSON, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column

from teamhub.core.domain_types import ProjectStatus
from teamhub.db.base import Base
from teamhub.models._columns import new_id, utcnow


class ProjectRow(Base):
    __tablename__ = "projects"
    __table_args__ = (
        Index("ix_projects_org_status", "organization_id", "status"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    organization_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("organizations.id"), nullable=False,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    status: Mapped[ProjectStatus] = mapped_column(
        Enum(ProjectStatus, native_enum=False, length=20),
        nullable=False, default=ProjectStatus.ACTIVE,
    )
    member_ids: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    created_by: Mapped[str | None] = mapped_column(String(36), nullable=True)

    # Bulk transition audit
    archived_by: Mapped[str | None] = mapped_column(String(36), nullable=True)
    archived_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    restored_by: Mapped[str | None] = mapped_column(String(36), nullable=True)
    restored_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow,
    )
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
