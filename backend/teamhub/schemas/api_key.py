"""API Key Schemas.

Invariants:
    - hashed_key is never part of any response
    - secret_key appears only in the create response
"""

from datetime import datetime

from pydantic import Field

from teamhub.schemas.base import CamelModel


class ApiKeyCreate(CamelModel):
    name: str | None = Field(None, max_length=200)


class ApiKeyResponse(CamelModel):
    id: str
    name: str
    prefix: str
    created_by: str | None = None
    created_at: datetime | None = None
    last_used_at: datetime | None = None
    revoked_at: datetime | None = None


class ApiKeyCreatedResponse(ApiKeyResponse):
    secret_key: str


class ApiKeyList(CamelModel):
    data: list[ApiKeyResponse]
