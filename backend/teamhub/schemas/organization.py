"""Organization Schemas."""

from datetime import datetime
from typing import Any

from pydantic import Field

from teamhub.schemas.base import CamelModel


class OrganizationCreate(CamelModel):
    name: str = Field(min_length=1, max_length=200)
    owner_name: str | None = Field(None, max_length=200)


class OrganizationUpdate(CamelModel):
    name: str | None = Field(None, min_length=1, max_length=200)


class OrganizationResponse(CamelModel):
    id: str
    name: str
    slug: str
    billing_plan_id: str
    settings: dict[str, Any]
    created_at: datetime | None = None
    updated_at: datetime | None = None
