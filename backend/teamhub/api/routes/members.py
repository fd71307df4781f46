"""Member Routes — list, read, invite, re-role and remove organization members."""

from fastapi import APIRouter, Depends, Response, status

from teamhub.api.deps import get_page_request, get_services, require_tenant
from teamhub.core.identity import RequestIdentity
from teamhub.core.pagination import PageRequest, pagination_meta
from teamhub.schemas.member import (
    MemberInvite, MemberPage, MemberResponse, RoleUpdate,
)
from teamhub.services.container import ServiceContainer

router = APIRouter(prefix="/api/v1/members", tags=["members"])


@router.get("", response_model=MemberPage)
async def list_members(
    page: PageRequest = Depends(get_page_request),
    identity: RequestIdentity = Depends(require_tenant),
    services: ServiceContainer = Depends(get_services),
):
    org_id = identity.organization_id
    members = await services.members.list_members(org_id, page.skip, page.page_size)
    total = await services.members.count_members(org_id)
    return {
        "data": [MemberResponse.model_validate(m) for m in members],
        "pagination": pagination_meta(page, total),
    }


@router.get("/{member_id}", response_model=MemberResponse)
async def get_member(
    member_id: str,
    identity: RequestIdentity = Depends(require_tenant),
    services: ServiceContainer = Depends(get_services),
):
    member = await services.members.get(member_id, identity.organization_id)
    return MemberResponse.model_validate(member)


@router.post(
    "/invite", response_model=MemberResponse, status_code=status.HTTP_201_CREATED,
)
async def invite_member(
    body: MemberInvite,
    identity: RequestIdentity = Depends(require_tenant),
    services: ServiceContainer = Depends(get_services),
):
    member = await services.members.invite(
        body.model_dump(), identity.organization_id, identity.user_id,
    )
    return MemberResponse.model_validate(member)


@router.put("/{member_id}/role", response_model=MemberResponse)
async def update_member_role(
    member_id: str,
    body: RoleUpdate,
    identity: RequestIdentity = Depends(require_tenant),
    services: ServiceContainer = Depends(get_services),
):
    member = await services.members.update_role(
        member_id, body.role, identity.organization_id, identity.user_id,
    )
    return MemberResponse.model_validate(member)


@router.delete("/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_member(
    member_id: str,
    identity: RequestIdentity = Depends(require_tenant),
    services: ServiceContainer = Depends(get_services),
):
    await services.members.remove(
        member_id, identity.organization_id, identity.user_id,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
