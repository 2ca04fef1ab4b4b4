"""
Production FastAPI Application

Caches are bulk loaded inside the lifespan, so the app accepts no traffic
until every process-local mirror is populated.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.di import container, setup
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.asyncpg_setting import (
    close_all_asyncpg_pools,
    get_asyncpg_pool,
    warmup_asyncpg_pool,
)
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig
from src.service.livestream.app.command.initialize_use_case import InitializeUseCase


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Livestream Service] Starting up...')

    # Setup OpenTelemetry tracing
    tracing = TracingConfig(service_name='livestream-service')
    tracing.setup()
    tracing.instrument_asyncpg()
    Logger.base.info('📊 [Livestream Service] OpenTelemetry tracing configured')

    # Wire dependency injection for all modules
    container.wire(modules=WIRE_MODULES)
    setup()
    Logger.base.info('🔌 [Livestream Service] Dependency injection wired')

    # Initialize asyncpg connection pool (eager initialization)
    await get_asyncpg_pool()
    await warmup_asyncpg_pool()
    Logger.base.info('🏊 [Livestream Service] Asyncpg pool initialized and warmed up')

    # Populate the entity caches before serving (reset, then bulk load)
    initialize_use_case = InitializeUseCase(
        cache_registry=container.cache_registry(),
        tag_query_repo=container.tag_query_repo(),
        user_query_repo=container.user_query_repo(),
        livestream_query_repo=container.livestream_query_repo(),
    )
    await initialize_use_case.initialize()

    Logger.base.info('✅ [Livestream Service] Ready to serve requests')

    yield

    Logger.base.info('🛑 [Livestream Service] Shutting down...')

    await close_all_asyncpg_pools()
    Logger.base.info('🏊 [Livestream Service] Asyncpg pools closed')

    tracing.shutdown()
    container.unwire()

    Logger.base.info('👋 [Livestream Service] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
