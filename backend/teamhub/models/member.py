"""Member ORM — a person's membership in one organization.

Invariants:
    - organization_id never changes after insert
    - Email uniqueness per organization is checked by MemberService, not constrained
      (soft-deleted rows keep their email)
"""

from datetime import datetime

from sqlalchemy import Enum, String, DateTime, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column

from teamhub.core.domain_types import Role
from teamhub.db.base import Base
from teamhub.models._columns import new_id, utcnow


class MemberRow(Base):
    __tablename__ = "members"
    __table_args__ = (
        Index("ix_members_org_email", "organization_id", "email"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    organization_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("organizations.id"), nullable=False, index=True,
    )
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    role: Mapped[Role] = mapped_column(
        Enum(Role, native_enum=False, length=20), nullable=False,
    )
    invited_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    joined_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
