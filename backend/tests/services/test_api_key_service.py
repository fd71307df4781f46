"""API Key Service — issuing, tenant-checked reads, revocation."""

import hashlib

import pytest

from teamhub.core.errors import NotFoundError, ValidationError


async def test_create_returns_secret_and_stores_only_hash(services, store, org, owner):
    issued = await services.api_keys.create({"name": "CI"}, org.id, owner.id)

    assert issued.secret.startswith("thub_")
    assert issued.key.prefix == issued.secret[:12]
    stored = store.api_keys.rows[issued.key.id]
    assert stored.hashed_key == hashlib.sha256(issued.secret.encode()).hexdigest()
    assert issued.secret not in vars(stored).values()
    assert stored.created_by == owner.id


async def test_each_key_is_unique(services, org, owner):
    first = await services.api_keys.create({"name": "one"}, org.id, owner.id)
    second = await services.api_keys.create({"name": "two"}, org.id, owner.id)
    assert first.secret != second.secret


@pytest.mark.parametrize("payload", [{}, {"name": None}, {"name": "   "}])
async def test_create_requires_name(services, org, owner, payload):
    with pytest.raises(ValidationError, match="API key name is required"):
        await services.api_keys.create(payload, org.id, owner.id)


async def test_list_hides_revoked_and_foreign_keys(services, org, other_org, owner):
    kept = await services.api_keys.create({"name": "kept"}, org.id, owner.id)
    gone = await services.api_keys.create({"name": "gone"}, org.id, owner.id)
    await services.api_keys.create({"name": "theirs"}, other_org.id, "rival")
    await services.api_keys.revoke(gone.key.id, org.id)

    keys = await services.api_keys.list_keys(org.id)

    assert [k.id for k in keys] == [kept.key.id]


async def test_foreign_key_is_not_found(services, org, other_org, owner):
    issued = await services.api_keys.create({"name": "CI"}, org.id, owner.id)
    with pytest.raises(NotFoundError, match="API key not found"):
        await services.api_keys.get(issued.key.id, other_org.id)
    with pytest.raises(NotFoundError):
        await services.api_keys.revoke(issued.key.id, other_org.id)
    assert (await services.api_keys.get(issued.key.id, org.id)).revoked_at is None


async def test_revoke_is_idempotent(services, org, owner):
    issued = await services.api_keys.create({"name": "CI"}, org.id, owner.id)

    await services.api_keys.revoke(issued.key.id, org.id)
    first = (await services.api_keys.get(issued.key.id, org.id)).revoked_at
    await services.api_keys.revoke(issued.key.id, org.id)

    assert first is not None
    assert (await services.api_keys.get(issued.key.id, org.id)).revoked_at == first
