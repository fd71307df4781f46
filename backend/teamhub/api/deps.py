"""Route Dependencies — identity resolution, service lookup, pagination parsing.

Invariants:
    - Every protected route resolves a RequestIdentity through get_identity();
      nothing reads identity from globals
    - require_tenant() fails Forbidden when the token carries no organization id
    - Services and the Authenticator are built once in the lifespan and read from
      app.state, so tests swap them through app.dependency_overrides
"""

from fastapi import Depends, Header, Query, Request

from teamhub.config import Settings, get_settings
from teamhub.core.errors import ForbiddenError
from teamhub.core.identity import RequestIdentity
from teamhub.core.pagination import PageRequest, clamp_page_request
from teamhub.infrastructure.authenticator import Authenticator
from teamhub.services.container import ServiceContainer


def get_services(request: Request) -> ServiceContainer:
    return request.app.state.services


def get_authenticator(request: Request) -> Authenticator:
    return request.app.state.authenticator


def get_identity(
    authorization: str | None = Header(None),
    authenticator: Authenticator = Depends(get_authenticator),
) -> RequestIdentity:
    return authenticator.authenticate(authorization)


def require_tenant(
    identity: RequestIdentity = Depends(get_identity),
) -> RequestIdentity:
    if not identity.organization_id:
        raise ForbiddenError("Token is not bound to an organization")
    return identity


def get_page_request(
    page: int | None = Query(None),
    page_size: int | None = Query(None, alias="pageSize"),
    settings: Settings = Depends(get_settings),
) -> PageRequest:
    return clamp_page_request(
        page, page_size, settings.default_page_size, settings.max_page_size,
    )
