"""Bulk Result Folding — per-item outcome records and the batch summary.

Invariants:
    - results keep input order (index i answers the i-th requested id or invite)
    - summary.total == len(results)
    - Only items whose status equals the operation's success status count as
      successes; every other status, "skipped" included, counts as failed
    - reason is present only when the item did not succeed
"""

from dataclasses import dataclass

from teamhub.core.domain_types import BulkItemStatus

NOT_FOUND_REASON = "Project not found"
ACCESS_DENIED_REASON = "Access denied"
ALREADY_ARCHIVED_REASON = "Already archived"
NOT_ARCHIVED_REASON = "Not archived"
INVALID_EMAIL_REASON = "Email is not valid"
INVALID_ROLE_REASON = "Role is not valid"


@dataclass(frozen=True)
class BulkItemResult:
    project_id: str
    status: BulkItemStatus
    reason: str | None = None

    def to_dict(self) -> dict:
        result = {"projectId": self.project_id, "status": self.status.value}
        if self.reason is not None:
            result["reason"] = self.reason
        return result


@dataclass(frozen=True)
class BulkInviteResult:
    email: str | None
    role: str | None
    status: BulkItemStatus
    reason: str | None = None
    member_id: str | None = None

    def to_dict(self) -> dict:
        result = {"email": self.email, "role": self.role, "status": self.status.value}
        if self.reason is not None:
            result["reason"] = self.reason
        if self.member_id is not None:
            result["memberId"] = self.member_id
        return result


def summarize(
    results: list[BulkItemResult | BulkInviteResult], success: BulkItemStatus,
) -> dict:
    """Fold per-item results into {total, <success>, failed}."""
    succeeded = sum(1 for r in results if r.status is success)
    return {
        "total": len(results),
        success.value: succeeded,
        "failed": len(results) - succeeded,
    }


def build_bulk_response(
    results: list[BulkItemResult | BulkInviteResult], success: BulkItemStatus,
) -> dict:
    return {
        "results": [r.to_dict() for r in results],
        "summary": summarize(results, success),
    }
