"""Billing Routes — current plan, usage against ceilings, upgrade advice, tier pricing."""

from fastapi import APIRouter, Depends

from teamhub.api.deps import get_identity, get_services, require_tenant
from teamhub.core.identity import RequestIdentity
from teamhub.schemas.billing import (
    BillingPlanResponse, PricingResponse, UpgradeCheckResponse, UsageResponse,
)
from teamhub.services.container import ServiceContainer

router = APIRouter(prefix="/api/v1/billing", tags=["billing"])


@router.get("/plan", response_model=BillingPlanResponse)
async def get_current_plan(
    identity: RequestIdentity = Depends(require_tenant),
    services: ServiceContainer = Depends(get_services),
):
    plan = await services.billing.resolve_plan(identity.organization_id)
    return BillingPlanResponse.model_validate(plan)


@router.get("/usage", response_model=UsageResponse)
async def get_usage(
    identity: RequestIdentity = Depends(require_tenant),
    services: ServiceContainer = Depends(get_services),
):
    usage = await services.billing.usage(identity.organization_id)
    return {
        "plan": BillingPlanResponse.model_validate(usage.plan),
        "usage": {
            "members": usage.member_count,
            "maxMembers": usage.max_members,
            "projects": usage.project_count,
            "maxProjects": usage.max_projects,
        },
    }


@router.get("/upgrade-check", response_model=UpgradeCheckResponse)
async def check_upgrade(
    identity: RequestIdentity = Depends(require_tenant),
    services: ServiceContainer = Depends(get_services),
):
    should = await services.billing.should_upgrade(identity.organization_id)
    return {"shouldUpgrade": should}


@router.get(
    "/pricing/{tier}", response_model=PricingResponse,
    dependencies=[Depends(get_identity)],
)
async def get_pricing(
    tier: str,
    services: ServiceContainer = Depends(get_services),
):
    plan = await services.billing.pricing_for_tier(tier.upper())
    return PricingResponse.model_validate(plan)
