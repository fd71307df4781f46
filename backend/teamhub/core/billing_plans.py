"""Billing Plan Tables — hard-coded fallbacks used when no stored plan matches.

Invariants:
    - FREE fallback: 5 members, 3 projects, $0 — never fails to build
    - STARTER 15/10/$9.99, PROFESSIONAL 50/50/$29.99, ENTERPRISE unbounded/$99.99
    - Unknown tier names fall back to FREE
    - Every call returns a fresh object (callers may mutate)
"""

import sys

from teamhub.core.domain_types import BillingTier, PlanId
from teamhub.core.entities import BillingPlan

# "Unbounded" ceiling for ENTERPRISE; counts are compared with >=.
UNLIMITED = sys.maxsize


def default_free_plan() -> BillingPlan:
    return BillingPlan(
        id=PlanId("free"),
        name="Free",
        tier=BillingTier.FREE,
        max_members=5,
        max_projects=3,
        price_per_month=0.0,
        features=["Basic project management", "Up to 5 members", "Up to 3 projects"],
    )


_TIER_DEFAULTS: dict[BillingTier, tuple[str, str, int, int, float, list[str]]] = {
    BillingTier.STARTER: (
        "starter", "Starter", 15, 10, 9.99,
        ["Advanced project management", "Up to 15 members", "Up to 10 projects"],
    ),
    BillingTier.PROFESSIONAL: (
        "professional", "Professional", 50, 50, 29.99,
        ["Full project management", "Up to 50 members", "Up to 50 projects", "Analytics"],
    ),
    BillingTier.ENTERPRISE: (
        "enterprise", "Enterprise", UNLIMITED, UNLIMITED, 99.99,
        ["Unlimited members", "Unlimited projects", "Priority support", "SSO"],
    ),
}


def default_plan_for_tier(tier: str) -> BillingPlan:
    """Canonical default for a tier name; FREE for anything unrecognized."""
    try:
        key = BillingTier(tier)
    except ValueError:
        return default_free_plan()
    if key not in _TIER_DEFAULTS:
        return default_free_plan()
    plan_id, name, max_members, max_projects, price, features = _TIER_DEFAULTS[key]
    return BillingPlan(
        id=PlanId(plan_id),
        name=name,
        tier=key,
        max_members=max_members,
        max_projects=max_projects,
        price_per_month=price,
        features=list(features),
    )


def has_reached_ceiling(count: int, ceiling: int) -> bool:
    """Quota check shared by member invite, project create and upgrade advice."""
    return count >= ceiling
