import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import asyncpg

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import StorageFailureError
from src.platform.logging.loguru_io import Logger


# Global connection pools per event loop
asyncpg_pools: dict[int, asyncpg.Pool] = {}

# asyncpg raises OSError subclasses (ConnectionResetError, ...) on socket loss
STORAGE_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, TimeoutError)


async def get_asyncpg_pool() -> asyncpg.Pool:
    current_loop = asyncio.get_running_loop()
    loop_id = id(current_loop)

    # Fast path: pool already exists for this loop
    if loop_id in asyncpg_pools:
        return asyncpg_pools[loop_id]

    # Slow path: create new pool (should only happen at startup)
    dsn = settings.DATABASE_URL_ASYNC.replace('postgresql+asyncpg://', 'postgresql://')

    pool = await asyncpg.create_pool(
        dsn,
        min_size=settings.ASYNCPG_POOL_MIN_SIZE,
        max_size=settings.ASYNCPG_POOL_MAX_SIZE,
        command_timeout=settings.ASYNCPG_POOL_COMMAND_TIMEOUT,
        max_inactive_connection_lifetime=settings.ASYNCPG_POOL_MAX_INACTIVE_LIFETIME,
        timeout=settings.ASYNCPG_POOL_TIMEOUT,
        max_queries=settings.ASYNCPG_POOL_MAX_QUERIES,
    )
    asyncpg_pools[loop_id] = pool

    Logger.base.info(
        f'🔗 [Pool] Created asyncpg pool for event loop {loop_id} '
        f'(min={settings.ASYNCPG_POOL_MIN_SIZE}, max={settings.ASYNCPG_POOL_MAX_SIZE})'
    )
    return pool


async def warmup_asyncpg_pool() -> int:
    """
    Acquire MIN_SIZE connections, then release them all, so the first burst of
    reservations does not pay for connection setup.
    """
    pool = await get_asyncpg_pool()
    connections = []

    try:
        Logger.base.info(
            f'🔥 [Pool Warmup] Starting warmup (target={settings.ASYNCPG_POOL_MIN_SIZE})...'
        )
        for i in range(settings.ASYNCPG_POOL_MIN_SIZE):
            try:
                connections.append(await pool.acquire(timeout=5.0))
            except asyncio.TimeoutError:
                Logger.base.warning(f'⚠️ [Pool Warmup] Timeout at {i + 1} connections')
                break

        Logger.base.info(
            f'✅ [Pool Warmup] Completed: {len(connections)} connections ready '
            f'(size={pool.get_size()}, idle={pool.get_idle_size()})'
        )
        return len(connections)
    finally:
        for conn in connections:
            await pool.release(conn)


async def close_all_asyncpg_pools() -> None:
    """
    Close all asyncpg connection pools across all event loops

    Only call this during application shutdown.
    """
    for loop_id, pool in list(asyncpg_pools.items()):
        try:
            await pool.close()
        except Exception as e:
            Logger.base.warning(f'⚠️ [Pool] Failed to close pool for loop {loop_id}: {e!r}')
    asyncpg_pools.clear()


@asynccontextmanager
async def acquire_connection() -> AsyncIterator[asyncpg.Connection]:
    """
    Pooled connection for reads outside a unit of work.

    Driver and socket errors leave as StorageFailureError.
    """
    try:
        pool = await get_asyncpg_pool()
        async with pool.acquire() as conn:
            yield conn
    except STORAGE_ERRORS as e:
        Logger.base.error(f'❌ [Pool] Query failed: {e!r}')
        raise StorageFailureError() from e
