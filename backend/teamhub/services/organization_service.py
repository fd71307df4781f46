"""Organization Service — tenant creation and tenant-level settings.

Invariants:
    - slug is derived from name (core.slug) and unique across live organizations
    - A new organization starts on the "free" plan with empty settings
    - Creating an organization also creates the creator's OWNER member row,
      keyed by the creator's user id
"""

import logging
from datetime import datetime, timezone
from typing import Any

from teamhub.core.domain_types import DEFAULT_PLAN_ID, Role
from teamhub.core.entities import Organization
from teamhub.core.errors import BadRequestError, ConflictError, NotFoundError
from teamhub.core.repository_protocols import MemberRepository, OrganizationRepository
from teamhub.core.slug import generate_slug

logger = logging.getLogger(__name__)

SLUG_CONFLICT_MESSAGE = "An organization with a similar name already exists"


class OrganizationService:

    def __init__(
        self, organizations: OrganizationRepository, members: MemberRepository,
    ):
        self._organizations = organizations
        self._members = members

    async def create(
        self, payload: dict[str, Any], user_id: str, email: str | None,
    ) -> Organization:
        name = (payload.get("name") or "").strip()
        if not name:
            raise BadRequestError("Organization name is required")
        slug = generate_slug(name)
        if not slug:
            raise BadRequestError("Organization name must contain letters or digits")
        if await self._organizations.find_by_slug(slug) is not None:
            raise ConflictError(SLUG_CONFLICT_MESSAGE)
        # one membership per user id, since the member row is keyed by it
        if await self._members.get(user_id) is not None:
            raise ConflictError("User already belongs to an organization")

        organization = await self._organizations.insert({
            "name": name,
            "slug": slug,
            "billing_plan_id": DEFAULT_PLAN_ID,
            "settings": {},
        })
        now = datetime.now(timezone.utc)
        # owner's member id == user id, see MemberService
        await self._members.insert({
            "id": user_id,
            "organization_id": organization.id,
            "email": email or "",
            "name": payload.get("owner_name") or "",
            "role": Role.OWNER,
            "invited_at": now,
            "joined_at": now,
        })
        logger.info(
            f"Organization created: {organization.slug}",
            extra={"organization_id": organization.id, "user_id": user_id},
        )
        return organization

    async def get(self, organization_id: str) -> Organization:
        organization = await self._organizations.get(organization_id)
        if organization is None:
            raise NotFoundError("Organization not found")
        return organization

    async def update(
        self, organization_id: str, patch: dict[str, Any],
    ) -> Organization:
        current = await self.get(organization_id)
        changes: dict[str, Any] = {}
        if "name" in patch:
            name = (patch["name"] or "").strip()
            if not name:
                raise BadRequestError("Organization name cannot be empty")
            slug = generate_slug(name)
            if not slug:
                raise BadRequestError("Organization name must contain letters or digits")
            if slug != current.slug:
                clash = await self._organizations.find_by_slug(slug)
                if clash is not None and clash.id != organization_id:
                    raise ConflictError(SLUG_CONFLICT_MESSAGE)
            changes = {"name": name, "slug": slug}
        if changes:
            await self._organizations.update(organization_id, changes)
        return await self.get(organization_id)

    async def update_settings(
        self, organization_id: str, settings: dict[str, Any],
    ) -> Organization:
        await self.get(organization_id)
        await self._organizations.update(organization_id, {"settings": dict(settings)})
        logger.info(
            "Organization settings updated",
            extra={"organization_id": organization_id},
        )
        return await self.get(organization_id)
