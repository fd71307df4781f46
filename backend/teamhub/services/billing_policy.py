"""Billing Policy — plan resolution, usage aggregation and quota ceilings.

Invariants:
    - resolve_plan fails only with NotFound (missing organization); a dangling
      plan reference falls back to the FREE defaults
    - Quota checks read live counts on every call (no caching of counts or plans)
    - should_upgrade is True once member count REACHES max_members
    - Ceiling checks and the subsequent insert are not atomic: concurrent creators
      can overshoot a ceiling by the number of racing callers

Design Decisions:
    - ensure_*_capacity live here so MemberService and ProjectService share one
      quota rule and one error message shape
"""

import asyncio
import logging
from dataclasses import dataclass

from teamhub.core.billing_plans import (
    default_free_plan, default_plan_for_tier, has_reached_ceiling,
)
from teamhub.core.domain_types import DEFAULT_PLAN_ID
from teamhub.core.entities import BillingPlan
from teamhub.core.errors import ForbiddenError, NotFoundError
from teamhub.core.repository_protocols import (
    BillingPlanRepository, MemberRepository, OrganizationRepository,
    ProjectRepository,
)

logger = logging.getLogger(__name__)


@dataclass
class PlanUsage:
    plan: BillingPlan
    member_count: int
    max_members: int
    project_count: int
    max_projects: int


class BillingPolicy:
    """Resolves a tenant's plan and enforces its resource ceilings."""

    def __init__(
        self,
        organizations: OrganizationRepository,
        plans: BillingPlanRepository,
        members: MemberRepository,
        projects: ProjectRepository,
    ):
        self._organizations = organizations
        self._plans = plans
        self._members = members
        self._projects = projects

    async def resolve_plan(self, organization_id: str) -> BillingPlan:
        organization = await self._organizations.get(organization_id)
        if organization is None:
            raise NotFoundError("Organization not found")

        plan_id = organization.billing_plan_id or DEFAULT_PLAN_ID
        plan = await self._plans.get(plan_id)
        if plan is None:
            logger.debug(
                f"Plan {plan_id} missing, using FREE defaults",
                extra={"organization_id": organization_id},
            )
            return default_free_plan()
        return plan

    async def usage(self, organization_id: str) -> PlanUsage:
        plan = await self.resolve_plan(organization_id)
        member_count, project_count = await asyncio.gather(
            self._members.count_by_organization(organization_id),
            self._projects.count_by_organization(organization_id),
        )
        return PlanUsage(
            plan=plan,
            member_count=member_count,
            max_members=plan.max_members,
            project_count=project_count,
            max_projects=plan.max_projects,
        )

    async def should_upgrade(self, organization_id: str) -> bool:
        plan = await self.resolve_plan(organization_id)
        member_count = await self._members.count_by_organization(organization_id)
        return has_reached_ceiling(member_count, plan.max_members)

    async def pricing_for_tier(self, tier: str) -> BillingPlan:
        plan = await self._plans.find_by_tier(tier)
        return plan if plan is not None else default_plan_for_tier(tier)

    async def ensure_member_capacity(self, organization_id: str) -> None:
        plan = await self.resolve_plan(organization_id)
        count = await self._members.count_by_organization(organization_id)
        if has_reached_ceiling(count, plan.max_members):
            raise ForbiddenError(
                "Member limit reached for current billing plan. "
                f"Max: {plan.max_members}",
            )

    async def ensure_project_capacity(self, organization_id: str) -> None:
        plan = await self.resolve_plan(organization_id)
        count = await self._projects.count_by_organization(organization_id)
        if has_reached_ceiling(count, plan.max_projects):
            raise ForbiddenError(
                "Project limit reached for current billing plan. "
                f"Max: {plan.max_projects}",
            )
