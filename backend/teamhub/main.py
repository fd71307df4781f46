"""TeamHub API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TeamHubError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database, repositories, services and authenticator built once in the lifespan
      and published on app.state
    - Pending notifications are drained before the engine is disposed

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - project_archive.router is included before projects.router so its literal
      paths win over /projects/{project_id}
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from teamhub.api.error_handlers import register_error_handlers
from teamhub.api.routes import (
    analytics, api_keys, billing, health, members, organizations, project_archive,
    projects, tasks,
)
from teamhub.config import get_settings
from teamhub.infrastructure.authenticator import Authenticator
from teamhub.infrastructure.database import DatabaseSessionManager, init_db
from teamhub.infrastructure.notifier import LoggingNotifier
from teamhub.infrastructure.observability import setup_logging
from teamhub.infrastructure.repositories import (
    SqlAnalyticsRepository, SqlApiKeyRepository, SqlBillingPlanRepository,
    SqlMemberRepository, SqlOrganizationRepository, SqlProjectRepository,
    SqlTaskRepository,
)
from teamhub.services.container import ServiceContainer, build_services

logger = logging.getLogger(__name__)


def build_sql_services(db: DatabaseSessionManager) -> ServiceContainer:
    """Wire the SQL repositories and logging notifier into the service graph."""
    return build_services(
        organizations=SqlOrganizationRepository(db),
        members=SqlMemberRepository(db),
        projects=SqlProjectRepository(db),
        tasks=SqlTaskRepository(db),
        plans=SqlBillingPlanRepository(db),
        api_keys=SqlApiKeyRepository(db),
        analytics=SqlAnalyticsRepository(db),
        notifier=LoggingNotifier(),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    app.state.services = build_sql_services(db)
    app.state.authenticator = Authenticator(
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        issuer=settings.jwt_issuer,
        expiry_minutes=settings.jwt_expiry_minutes,
    )
    logger.info("TeamHub API started")
    yield
    logger.info("TeamHub API shutting down")
    await app.state.services.notifications.drain()
    await db.dispose()


app = FastAPI(
    title="TeamHub API", version="1.0.0", lifespan=lifespan,
)

# CORS — configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(organizations.router)
app.include_router(members.router)
app.include_router(project_archive.router)
app.include_router(projects.router)
app.include_router(tasks.router)
app.include_router(billing.router)
app.include_router(analytics.router)
app.include_router(api_keys.router)

register_error_handlers(app)
