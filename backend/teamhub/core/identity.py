"""Request Identity — the resolved caller, threaded explicitly into service calls.

Invariants:
    - Built once per request by the Authenticator; never stored in globals
    - organization_id may be None only for tokens issued before the user joined a tenant
"""

from dataclasses import dataclass

from teamhub.core.domain_types import OrganizationId, UserId


@dataclass(frozen=True)
class RequestIdentity:
    user_id: UserId
    email: str | None
    organization_id: OrganizationId | None
