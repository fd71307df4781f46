"""Billing Schemas."""

from teamhub.core.domain_types import BillingTier
from teamhub.schemas.base import CamelModel


class BillingPlanResponse(CamelModel):
    id: str
    name: str
    tier: BillingTier
    max_members: int
    max_projects: int
    price_per_month: float
    features: list[str]


class UsageCounts(CamelModel):
    members: int
    max_members: int
    projects: int
    max_projects: int


class UsageResponse(CamelModel):
    plan: BillingPlanResponse
    usage: UsageCounts


class UpgradeCheckResponse(CamelModel):
    should_upgrade: bool


class PricingResponse(CamelModel):
    tier: BillingTier
    name: str
    price_per_month: float
    max_members: int
    max_projects: int
    features: list[str]
