"""Service test fixtures — services wired to in-memory fake repositories.

Invariants:
    - Every test gets a fresh FakeStore and RecordingNotifier
    - The stored plan catalogue mirrors the seeded migration (free + starter)
    - Notifications are fire-and-forget; tests call drain() before asserting on them
"""

import pytest

from teamhub.core.billing_plans import default_free_plan, default_plan_for_tier
from teamhub.core.domain_types import Role
from teamhub.services.container import build_services
from tests.fakes import FakeStore, RecordingNotifier


@pytest.fixture
def store():
    return FakeStore(plans=[default_free_plan(), default_plan_for_tier("STARTER")])


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def services(store, notifier):
    return build_services(
        organizations=store.organizations,
        members=store.members,
        projects=store.projects,
        tasks=store.tasks,
        plans=store.plans,
        api_keys=store.api_keys,
        analytics=store.analytics,
        notifier=notifier,
    )


@pytest.fixture
async def org(store):
    return await store.seed_organization("Acme")


@pytest.fixture
async def other_org(store):
    return await store.seed_organization("Globex")


@pytest.fixture
async def owner(store, org):
    return await store.seed_member(org.id, Role.OWNER, email="owner@acme.io")


@pytest.fixture
async def admin(store, org):
    return await store.seed_member(org.id, Role.ADMIN, email="admin@acme.io")
