"""Member Service — invite, list, re-role and remove organization members.

Invariants:
    - OWNER is never produced by invite or update_role
    - update_role: acting role > target's current role AND acting role > new role
    - remove: target is not OWNER AND acting role > target role; removal is a soft delete
    - A member read through get() always belongs to the caller's organization
    - Email is unique among live members of one organization (checked, not constrained)
    - bulk_invite() runs each entry through invite() in input order, so duplicates
      within one batch and the plan ceiling fail per entry; it never raises for an entry
    - Notifications carry the organization name, resolved before any write

Design Decisions:
    - The acting user is resolved by using the authenticated user id as a member id.
      Organization creation mints the owner's member row with id == user id so the
      two line up; a separate user -> membership mapping is not modelled
    - Ceiling check and insert are two Store calls, not one transaction
"""

import logging
import re
from datetime import datetime, timezone
from typing import Any

from teamhub.core.bulk_results import (
    INVALID_EMAIL_REASON, INVALID_ROLE_REASON, BulkInviteResult, build_bulk_response,
)
from teamhub.core.domain_types import EMAIL_PATTERN, BulkItemStatus, Role, parse_enum
from teamhub.core.entities import Member
from teamhub.core.errors import (
    BadRequestError, ConflictError, ForbiddenError, NotFoundError, TeamHubError,
    ValidationError,
)
from teamhub.core.repository_protocols import MemberRepository, OrganizationRepository
from teamhub.core.role_hierarchy import ASSIGNABLE_ROLES, outranks
from teamhub.services.billing_policy import BillingPolicy
from teamhub.services.notifications import NotificationDispatcher

logger = logging.getLogger(__name__)


def _parse_role(raw: str | None) -> Role:
    role = parse_enum(Role, raw)
    if role is None:
        raise ValidationError(f"Invalid role: {raw}", field="role")
    return role


class MemberService:
    """Member management guarded by tenant, role hierarchy and plan ceiling."""

    def __init__(
        self,
        members: MemberRepository,
        organizations: OrganizationRepository,
        billing: BillingPolicy,
        notifications: NotificationDispatcher,
    ):
        self._members = members
        self._organizations = organizations
        self._billing = billing
        self._notifications = notifications

    async def invite(
        self, payload: dict[str, Any], organization_id: str, invited_by: str,
    ) -> Member:
        email = payload.get("email")
        name = payload.get("name") or ""
        role = _parse_role(payload.get("role") or Role.MEMBER.value)

        if role not in ASSIGNABLE_ROLES:
            raise ForbiddenError("Cannot invite a member as OWNER")

        organization_name = await self._organization_name(organization_id)

        existing = await self._members.find_by_email(email, organization_id)
        if existing is not None:
            raise ConflictError("Member already exists in this organization")

        await self._billing.ensure_member_capacity(organization_id)

        now = datetime.now(timezone.utc)
        member = await self._members.insert({
            "email": email,
            "name": name,
            "role": role,
            "organization_id": organization_id,
            "invited_at": now,
            "joined_at": now,
        })
        logger.info(
            f"Member invited: {email} by {invited_by}",
            extra={"organization_id": organization_id, "member_id": member.id},
        )
        self._notifications.fire(
            "member_invited",
            self._notifications.notifier.member_invited(email, organization_name),
        )
        return member

    async def bulk_invite(
        self,
        invites: list[dict[str, Any]],
        organization_id: str,
        invited_by: str,
        max_size: int,
    ) -> dict:
        """Invite each entry in turn and fold the outcomes into {results, summary}.

        Batch-level problems (empty, oversized) raise BadRequest before any insert;
        anything wrong with a single entry is reported on that entry only.
        """
        if not invites:
            raise BadRequestError("At least one invite is required")
        if len(invites) > max_size:
            raise BadRequestError(f"Cannot invite more than {max_size} members at once")

        results = [
            await self._invite_one(entry, organization_id, invited_by)
            for entry in invites
        ]
        response = build_bulk_response(results, BulkItemStatus.INVITED)
        summary = response["summary"]
        logger.info(
            f"Bulk invite: {summary['invited']}/{summary['total']} invited",
            extra={"organization_id": organization_id, "user_id": invited_by},
        )
        return response

    async def _invite_one(
        self, entry: dict[str, Any], organization_id: str, invited_by: str,
    ) -> BulkInviteResult:
        email = entry.get("email")
        role = entry.get("role")
        if email is None or not re.match(EMAIL_PATTERN, email):
            return BulkInviteResult(email, role, BulkItemStatus.FAILED, INVALID_EMAIL_REASON)
        if parse_enum(Role, role) not in ASSIGNABLE_ROLES:
            return BulkInviteResult(email, role, BulkItemStatus.FAILED, INVALID_ROLE_REASON)
        try:
            member = await self.invite(entry, organization_id, invited_by)
        except TeamHubError as e:
            return BulkInviteResult(email, role, BulkItemStatus.FAILED, e.message)
        return BulkInviteResult(email, role, BulkItemStatus.INVITED, member_id=member.id)

    async def get(self, member_id: str, organization_id: str) -> Member:
        member = await self._members.get(member_id)
        if member is None:
            raise NotFoundError("Member not found")
        if member.organization_id != organization_id:
            raise ForbiddenError("Access denied to this member")
        return member

    async def list_members(
        self, organization_id: str, skip: int, limit: int,
    ) -> list[Member]:
        return await self._members.list_by_organization(organization_id, skip, limit)

    async def count_members(self, organization_id: str) -> int:
        return await self._members.count_by_organization(organization_id)

    async def update_role(
        self,
        member_id: str,
        new_role: str,
        organization_id: str,
        acting_user_id: str,
    ) -> Member:
        role = _parse_role(new_role)

        acting = await self._resolve_acting_member(acting_user_id, organization_id)
        target = await self.get(member_id, organization_id)

        if not outranks(acting.role, target.role):
            raise ForbiddenError("Cannot modify a member with equal or higher role")
        if not outranks(acting.role, role):
            raise ForbiddenError("Cannot assign a role equal to or higher than your own")
        if role not in ASSIGNABLE_ROLES:
            raise ForbiddenError("Cannot assign OWNER role")

        await self._members.update(member_id, {"role": role})
        logger.info(
            f"Member role changed: {target.role.value} -> {role.value}",
            extra={"organization_id": organization_id, "member_id": member_id,
                   "user_id": acting_user_id},
        )
        return await self.get(member_id, organization_id)

    async def remove(
        self, member_id: str, organization_id: str, acting_user_id: str,
    ) -> None:
        acting = await self._resolve_acting_member(acting_user_id, organization_id)
        target = await self.get(member_id, organization_id)

        if target.role is Role.OWNER:
            raise ForbiddenError("Cannot remove the organization owner")
        if not outranks(acting.role, target.role):
            raise ForbiddenError("Cannot remove a member with equal or higher role")
        organization_name = await self._organization_name(organization_id)

        logger.info(
            "Removing member",
            extra={"organization_id": organization_id, "member_id": member_id,
                   "user_id": acting_user_id},
        )
        await self._members.soft_delete(member_id)
        self._notifications.fire(
            "member_removed",
            self._notifications.notifier.member_removed(target.email, organization_name),
        )

    async def _resolve_acting_member(
        self, acting_user_id: str, organization_id: str,
    ) -> Member:
        # user id doubles as member id (see module docstring)
        return await self.get(acting_user_id, organization_id)

    async def _organization_name(self, organization_id: str) -> str:
        organization = await self._organizations.get(organization_id)
        if organization is None:
            raise NotFoundError("Organization not found")
        return organization.name
