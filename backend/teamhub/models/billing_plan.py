"""BillingPlan ORM — stored plan catalogue, seeded by migration 001.

Invariants:
    - id is a short stable key ("free", "starter", ...), referenced by organizations
    - max_members/max_projects are BigInteger so "unlimited" (sys.maxsize) fits
"""

from sqlalchemy import BigInteger, Enum, Float, String, JSON
from sqlalchemy.orm import Mapped, mapped_column

from teamhub.core.domain_types import BillingTier
from teamhub.db.base import Base


class BillingPlanRow(Base):
    __tablename__ = "billing_plans"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    tier: Mapped[BillingTier] = mapped_column(
        Enum(BillingTier, native_enum=False, length=20), nullable=False, unique=True,
    )
    max_members: Mapped[int] = mapped_column(BigInteger, nullable=False)
    max_projects: Mapped[int] = mapped_column(BigInteger, nullable=False)
    price_per_month: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    features: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
