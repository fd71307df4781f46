"""Service Container — wires repositories, notifier and services once per process.

Invariants:
    - Exactly one NotificationDispatcher per container (shared by every service that emits)
    - ProjectService is the single tenant-isolation boundary TaskService delegates to
"""

from dataclasses import dataclass

from teamhub.core.repository_protocols import (
    AnalyticsRepository, ApiKeyRepository, BillingPlanRepository, MemberRepository,
    Notifier, OrganizationRepository, ProjectRepository, TaskRepository,
)
from teamhub.services.analytics_service import AnalyticsService
from teamhub.services.api_key_service import ApiKeyService
from teamhub.services.archive_engine import ArchiveEngine
from teamhub.services.billing_policy import BillingPolicy
from teamhub.services.member_service import MemberService
from teamhub.services.notifications import NotificationDispatcher
from teamhub.services.organization_service import OrganizationService
from teamhub.services.project_service import ProjectService
from teamhub.services.task_service import TaskService


@dataclass
class ServiceContainer:
    organizations: OrganizationService
    billing: BillingPolicy
    members: MemberService
    projects: ProjectService
    tasks: TaskService
    archive: ArchiveEngine
    analytics: AnalyticsService
    api_keys: ApiKeyService
    notifications: NotificationDispatcher


def build_services(
    organizations: OrganizationRepository,
    members: MemberRepository,
    projects: ProjectRepository,
    tasks: TaskRepository,
    plans: BillingPlanRepository,
    api_keys: ApiKeyRepository,
    analytics: AnalyticsRepository,
    notifier: Notifier,
) -> ServiceContainer:
    notifications = NotificationDispatcher(notifier)
    billing = BillingPolicy(organizations, plans, members, projects)
    project_service = ProjectService(projects, billing)
    return ServiceContainer(
        organizations=OrganizationService(organizations, members),
        billing=billing,
        members=MemberService(members, organizations, billing, notifications),
        projects=project_service,
        tasks=TaskService(tasks, project_service, notifications),
        archive=ArchiveEngine(projects),
        analytics=AnalyticsService(analytics),
        api_keys=ApiKeyService(api_keys),
        notifications=notifications,
    )
