"""Member Schemas — invite payload, bulk invite, role change, member view.

Invariants:
    - email must look like local@domain.tld (same rule as the invite form)
    - role stays a free string here so an unknown value reaches MemberService
      and fails with VALIDATION_ERROR instead of a schema error
    - Bulk invite entries are not pattern-checked here; each bad entry is reported
      in the results instead of failing the whole request
"""

from datetime import datetime

from pydantic import Field, field_validator

from teamhub.core.domain_types import EMAIL_PATTERN, Role
from teamhub.schemas.base import CamelModel, PaginationMeta


class MemberInvite(CamelModel):
    email: str = Field(pattern=EMAIL_PATTERN, max_length=320)
    name: str = Field("", max_length=200)
    role: str | None = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip()


class RoleUpdate(CamelModel):
    role: str


class MemberResponse(CamelModel):
    id: str
    organization_id: str
    email: str
    name: str
    role: Role
    invited_at: datetime | None = None
    joined_at: datetime | None = None
    created_at: datetime | None = None


class MemberPage(CamelModel):
    data: list[MemberResponse]
    pagination: PaginationMeta


class BulkInviteEntry(CamelModel):
    email: str | None = None
    name: str = Field("", max_length=200)
    role: str | None = None


class BulkInviteRequest(CamelModel):
    invites: list[BulkInviteEntry] | None = None


class BulkInviteItemResponse(CamelModel):
    email: str | None = None
    role: str | None = None
    status: str
    reason: str | None = None
    member_id: str | None = None


class BulkInviteResponse(CamelModel):
    organization_id: str
    results: list[BulkInviteItemResponse]
    summary: dict[str, int]
