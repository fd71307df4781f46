"""Store test fixtures — SQL repositories over a per-test SQLite file."""

import pytest

from teamhub.infrastructure.repositories import (
    SqlAnalyticsRepository, SqlApiKeyRepository, SqlBillingPlanRepository,
    SqlMemberRepository, SqlOrganizationRepository, SqlProjectRepository,
    SqlTaskRepository,
)
from tests.db_fixtures import db_manager  # noqa: F401


@pytest.fixture
def organizations(db_manager):
    return SqlOrganizationRepository(db_manager)


@pytest.fixture
def members(db_manager):
    return SqlMemberRepository(db_manager)


@pytest.fixture
def projects(db_manager):
    return SqlProjectRepository(db_manager)


@pytest.fixture
def tasks(db_manager):
    return SqlTaskRepository(db_manager)


@pytest.fixture
def plans(db_manager):
    return SqlBillingPlanRepository(db_manager)


@pytest.fixture
def api_keys(db_manager):
    return SqlApiKeyRepository(db_manager)


@pytest.fixture
def analytics(db_manager):
    return SqlAnalyticsRepository(db_manager)


@pytest.fixture
async def org(organizations):
    return await organizations.insert({
        "name": "Acme", "slug": "acme", "billing_plan_id": "free", "settings": {},
    })


@pytest.fixture
async def other_org(organizations):
    return await organizations.insert({
        "name": "Globex", "slug": "globex", "billing_plan_id": "free", "settings": {},
    })
