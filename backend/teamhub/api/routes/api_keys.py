"""API Key Routes — issue, list, read and revoke keys of the caller's organization.

Invariants:
    - The plaintext key is only in the 201 response of POST /api-keys
"""

from fastapi import APIRouter, Depends, Response, status

from teamhub.api.deps import get_services, require_tenant
from teamhub.core.identity import RequestIdentity
from teamhub.schemas.api_key import (
    ApiKeyCreate, ApiKeyCreatedResponse, ApiKeyList, ApiKeyResponse,
)
from teamhub.services.container import ServiceContainer

router = APIRouter(prefix="/api/v1/api-keys", tags=["api-keys"])


@router.post(
    "", response_model=ApiKeyCreatedResponse, status_code=status.HTTP_201_CREATED,
)
async def create_api_key(
    body: ApiKeyCreate,
    identity: RequestIdentity = Depends(require_tenant),
    services: ServiceContainer = Depends(get_services),
):
    issued = await services.api_keys.create(
        body.model_dump(), identity.organization_id, identity.user_id,
    )
    return ApiKeyCreatedResponse.model_validate(
        {**ApiKeyResponse.model_validate(issued.key).model_dump(), "secret_key": issued.secret},
    )


@router.get("", response_model=ApiKeyList)
async def list_api_keys(
    identity: RequestIdentity = Depends(require_tenant),
    services: ServiceContainer = Depends(get_services),
):
    keys = await services.api_keys.list_keys(identity.organization_id)
    return {"data": [ApiKeyResponse.model_validate(k) for k in keys]}


@router.get("/{key_id}", response_model=ApiKeyResponse)
async def get_api_key(
    key_id: str,
    identity: RequestIdentity = Depends(require_tenant),
    services: ServiceContainer = Depends(get_services),
):
    key = await services.api_keys.get(key_id, identity.organization_id)
    return ApiKeyResponse.model_validate(key)


@router.delete("/{key_id}", status_code=status.HTTP_204_NO_CONTENT)
async def revoke_api_key(
    key_id: str,
    identity: RequestIdentity = Depends(require_tenant),
    services: ServiceContainer = Depends(get_services),
):
    await services.api_keys.revoke(key_id, identity.organization_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
