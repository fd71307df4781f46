"""Analytics Routes — read-only figures for the caller's organization."""

from fastapi import APIRouter, Depends

from teamhub.api.deps import get_services, require_tenant
from teamhub.core.identity import RequestIdentity
from teamhub.schemas.analytics import (
    DashboardResponse, MemberActivityResponse, MemberAnalyticsResponse,
    TaskBreakdownResponse,
)
from teamhub.services.container import ServiceContainer

router = APIRouter(prefix="/api/v1/analytics", tags=["analytics"])


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    identity: RequestIdentity = Depends(require_tenant),
    services: ServiceContainer = Depends(get_services),
):
    dashboard = await services.analytics.get_dashboard(identity.organization_id)
    return DashboardResponse.model_validate(dashboard)


@router.get("/tasks", response_model=TaskBreakdownResponse)
async def get_task_analytics(
    identity: RequestIdentity = Depends(require_tenant),
    services: ServiceContainer = Depends(get_services),
):
    breakdown = await services.analytics.get_task_analytics(identity.organization_id)
    return TaskBreakdownResponse.model_validate(breakdown)


@router.get("/members", response_model=MemberAnalyticsResponse)
async def get_member_analytics(
    identity: RequestIdentity = Depends(require_tenant),
    services: ServiceContainer = Depends(get_services),
):
    members = await services.analytics.get_member_analytics(identity.organization_id)
    return {"data": [MemberActivityResponse.model_validate(m) for m in members]}
