"""Initial schema — organizations, members, projects, tasks, billing_plans.

Seeds the billing plan catalogue (free, starter, professional, enterprise).

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
import sys
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

UNLIMITED = sys.maxsize


def upgrade() -> None:
    op.create_table(
        "organizations",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("slug", sa.String(200), nullable=False, unique=True),
        sa.Column("billing_plan_id", sa.String(50), nullable=False, server_default="free"),
        sa.Column("settings", sa.JSON, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        "members",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("organization_id", sa.String(36), sa.ForeignKey("organizations.id"), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("name", sa.String(200), nullable=False, server_default=""),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("invited_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("joined_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_members_organization_id", "members", ["organization_id"])
    op.create_index("ix_members_org_email", "members", ["organization_id", "email"])

    op.create_table(
        "projects",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("organization_id", sa.String(36), sa.ForeignKey("organizations.id"), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=False, server_default=""),
        sa.Column("status", sa.String(20), nullable=False, server_default="ACTIVE"),
        sa.Column("member_ids", sa.JSON, nullable=False),
        sa.Column("created_by", sa.String(36), nullable=True),
        sa.Column("archived_by", sa.String(36), nullable=True),
        sa.Column("archived_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("restored_by", sa.String(36), nullable=True),
        sa.Column("restored_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_projects_org_status", "projects", ["organization_id", "status"])

    op.create_table(
        "tasks",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("project_id", sa.String(36), sa.ForeignKey("projects.id"), nullable=False),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("description", sa.Text, nullable=False, server_default=""),
        sa.Column("status", sa.String(20), nullable=False, server_default="TODO"),
        sa.Column("priority", sa.String(20), nullable=False, server_default="MEDIUM"),
        sa.Column("assignee_id", sa.String(36), nullable=True),
        sa.Column("due_date", sa.Date, nullable=True),
        sa.Column("tags", sa.JSON, nullable=False),
        sa.Column("created_by", sa.String(36), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_tasks_project_id", "tasks", ["project_id"])
    op.create_index("ix_tasks_due_date", "tasks", ["due_date"])

    plans = op.create_table(
        "billing_plans",
        sa.Column("id", sa.String(50), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("tier", sa.String(20), nullable=False, unique=True),
        sa.Column("max_members", sa.BigInteger, nullable=False),
        sa.Column("max_projects", sa.BigInteger, nullable=False),
        sa.Column("price_per_month", sa.Float, nullable=False, server_default="0"),
        sa.Column("features", sa.JSON, nullable=False),
    )
    op.bulk_insert(plans, [
        {"id": "free", "name": "Free", "tier": "FREE", "max_members": 5,
         "max_projects": 3, "price_per_month": 0.0,
         "features": ["Basic project management", "Up to 5 members", "Up to 3 projects"]},
        {"id": "starter", "name": "Starter", "tier": "STARTER", "max_members": 15,
         "max_projects": 10, "price_per_month": 9.99,
         "features": ["Advanced project management", "Up to 15 members", "Up to 10 projects"]},
        {"id": "professional", "name": "Professional", "tier": "PROFESSIONAL",
         "max_members": 50, "max_projects": 50, "price_per_month": 29.99,
         "features": ["Full project management", "Up to 50 members", "Up to 50 projects", "Analytics"]},
        {"id": "enterprise", "name": "Enterprise", "tier": "ENTERPRISE",
         "max_members": UNLIMITED, "max_projects": UNLIMITED, "price_per_month": 99.99,
         "features": ["Unlimited members", "Unlimited projects", "Priority support", "SSO"]},
    ])


def downgrade() -> None:
    op.drop_table("billing_plans")
    op.drop_index("ix_tasks_due_date", "tasks")
    op.drop_index("ix_tasks_project_id", "tasks")
    op.drop_table("tasks")
    op.drop_index("ix_projects_org_status", "projects")
    op.drop_table("projects")
    op.drop_index("ix_members_org_email", "members")
    op.drop_index("ix_members_organization_id", "members")
    op.drop_table("members")
    op.drop_table("organizations")
