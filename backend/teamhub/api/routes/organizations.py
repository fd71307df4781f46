"""Organization Routes — tenant creation and the caller's own tenant.

Invariants:
    - POST /organizations needs only an authenticated subject (no tenant yet)
    - /organizations/me/* always act on the token's organization id
    - bulk-invite reports per entry; only an empty or oversized batch fails the request
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, status

from teamhub.api.deps import get_identity, get_services, require_tenant
from teamhub.config import Settings, get_settings
from teamhub.core.identity import RequestIdentity
from teamhub.schemas.member import BulkInviteRequest, BulkInviteResponse
from teamhub.schemas.organization import (
    OrganizationCreate, OrganizationResponse, OrganizationUpdate,
)
from teamhub.services.container import ServiceContainer

router = APIRouter(prefix="/api/v1/organizations", tags=["organizations"])


@router.post(
    "", response_model=OrganizationResponse, status_code=status.HTTP_201_CREATED,
)
async def create_organization(
    body: OrganizationCreate,
    identity: RequestIdentity = Depends(get_identity),
    services: ServiceContainer = Depends(get_services),
):
    organization = await services.organizations.create(
        body.model_dump(), identity.user_id, identity.email,
    )
    return OrganizationResponse.model_validate(organization)


@router.get("/me", response_model=OrganizationResponse)
async def get_my_organization(
    identity: RequestIdentity = Depends(require_tenant),
    services: ServiceContainer = Depends(get_services),
):
    organization = await services.organizations.get(identity.organization_id)
    return OrganizationResponse.model_validate(organization)


@router.put("/me", response_model=OrganizationResponse)
async def update_my_organization(
    body: OrganizationUpdate,
    identity: RequestIdentity = Depends(require_tenant),
    services: ServiceContainer = Depends(get_services),
):
    organization = await services.organizations.update(
        identity.organization_id, body.model_dump(exclude_unset=True),
    )
    return OrganizationResponse.model_validate(organization)


@router.put("/me/settings", response_model=OrganizationResponse)
async def update_my_settings(
    settings: dict[str, Any] = Body(...),
    identity: RequestIdentity = Depends(require_tenant),
    services: ServiceContainer = Depends(get_services),
):
    organization = await services.organizations.update_settings(
        identity.organization_id, settings,
    )
    return OrganizationResponse.model_validate(organization)


@router.post("/me/bulk-invite", response_model=BulkInviteResponse)
async def bulk_invite_members(
    body: BulkInviteRequest,
    identity: RequestIdentity = Depends(require_tenant),
    services: ServiceContainer = Depends(get_services),
    settings: Settings = Depends(get_settings),
):
    entries = [entry.model_dump() for entry in body.invites or []]
    response = await services.members.bulk_invite(
        entries, identity.organization_id, identity.user_id, settings.max_bulk_size,
    )
    return {"organization_id": identity.organization_id, **response}
