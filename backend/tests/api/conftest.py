"""Route test fixtures — the FastAPI app over SQL services on a per-test SQLite file.

ASGITransport does not run the lifespan, so services and the authenticator are
injected through dependency_overrides instead of app.state.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from teamhub.api.deps import get_authenticator, get_services
from teamhub.infrastructure.authenticator import Authenticator
from teamhub.main import app, build_sql_services
from tests.db_fixtures import db_manager  # noqa: F401

TEST_SECRET = "route-test-secret-with-enough-entropy-42"


@pytest.fixture
def authenticator():
    return Authenticator(TEST_SECRET)


@pytest.fixture
async def services(db_manager):
    container = build_sql_services(db_manager)
    yield container
    await container.notifications.drain()


@pytest.fixture
async def client(services, authenticator):
    app.dependency_overrides[get_services] = lambda: services
    app.dependency_overrides[get_authenticator] = lambda: authenticator
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def bearer(authenticator):
    """Build an Authorization header for a user, optionally bound to a tenant."""

    def _bearer(user_id: str, organization_id: str | None = None,
                email: str | None = None) -> dict:
        token = authenticator.issue_token(user_id, email, organization_id)
        return {"Authorization": f"Bearer {token}"}

    return _bearer


@pytest.fixture
async def tenant(client, bearer):
    """Organization created through the API; returns (org_id, owner headers)."""
    response = await client.post(
        "/api/v1/organizations",
        json={"name": "Acme Corp", "ownerName": "Olivia"},
        headers=bearer("owner-1", email="olivia@acme.io"),
    )
    assert response.status_code == 201
    org_id = response.json()["id"]
    return org_id, bearer("owner-1", org_id, "olivia@acme.io")


@pytest.fixture
async def rival(client, bearer):
    response = await client.post(
        "/api/v1/organizations",
        json={"name": "Globex"},
        headers=bearer("rival-1"),
    )
    org_id = response.json()["id"]
    return org_id, bearer("rival-1", org_id)
