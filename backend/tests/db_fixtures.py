"""Shared SQLite fixtures for Store and route tests.

Invariants:
    - One on-disk SQLite file per test (tmp_path): concurrent sessions see the same data
    - Billing plans seeded exactly like migration 001
"""

import pytest

from teamhub.core.billing_plans import default_free_plan, default_plan_for_tier
from teamhub.db.base import Base
from teamhub.infrastructure.database import DatabaseSessionManager
from teamhub.models import BillingPlanRow


def _plan_rows() -> list[BillingPlanRow]:
    plans = [default_free_plan()] + [
        default_plan_for_tier(tier) for tier in ("STARTER", "PROFESSIONAL", "ENTERPRISE")
    ]
    return [
        BillingPlanRow(
            id=p.id, name=p.name, tier=p.tier, max_members=p.max_members,
            max_projects=p.max_projects, price_per_month=p.price_per_month,
            features=p.features,
        )
        for p in plans
    ]


@pytest.fixture
async def db_manager(tmp_path):
    manager = DatabaseSessionManager(f"sqlite+aiosqlite:///{tmp_path / 'teamhub.db'}")
    async with manager.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async with manager.session() as session:
        session.add_all(_plan_rows())
        await session.commit()
    yield manager
    await manager.dispose()
