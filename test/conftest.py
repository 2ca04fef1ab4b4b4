"""
Test Configuration and Fixtures

This module provides:
- Early environment setup (test database name, log directory, small pools)
- Test database creation + schema reset for integration runs
- Per-test table cleanup for integration tests

Architecture:
- Unit tests (test/**/unit/, marked `unit`): in-memory fakes, no database
- Integration tests (marked `integration`): real PostgreSQL; skipped when unreachable
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings are read at import time, so POSTGRES_DB must be set first
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
    if worker_id == 'master':
        os.environ['POSTGRES_DB'] = 'livestream_test_db'
    else:
        os.environ['POSTGRES_DB'] = f'livestream_test_db_{worker_id}'

    # Create test log directory
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    # Pool size settings for tests
    os.environ.setdefault('ASYNCPG_POOL_MIN_SIZE', '2')
    os.environ.setdefault('ASYNCPG_POOL_MAX_SIZE', '10')


# Call immediately to set env vars before any imports
_early_setup_test_environment()

import asyncio  # noqa: E402
from collections.abc import AsyncGenerator  # noqa: E402

import asyncpg  # noqa: E402
from dotenv import load_dotenv  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy.exc import SQLAlchemyError  # noqa: E402


# =============================================================================
# Pytest Hooks: Detect test type and setup accordingly
# =============================================================================
_database_ready: bool | None = None


def _is_unit_test_only_run(config: pytest.Config) -> bool:
    markexpr = config.getoption('markexpr', default='')
    if markexpr and 'unit' in str(markexpr) and 'not unit' not in str(markexpr):
        return True

    args = config.args or []
    test_paths = [arg for arg in args if arg and not arg.startswith('-')]
    return bool(test_paths and all('/unit/' in path or '\\unit\\' in path for path in test_paths))


def pytest_sessionstart(session: pytest.Session) -> None:
    global _database_ready
    if _is_unit_test_only_run(session.config):
        _database_ready = False
        return

    try:
        asyncio.run(_setup_test_database())
        _database_ready = True
    except (OSError, asyncpg.PostgresError, SQLAlchemyError) as e:
        print(f'⚠️ PostgreSQL unavailable, integration tests will be skipped: {e}')
        _database_ready = False


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if item.get_closest_marker('integration') is not None:
            item.fixturenames.insert(0, 'clean_database')


# =============================================================================
# Database Configuration
# =============================================================================
def _get_db_config() -> dict[str, str]:
    env_file = '.env' if Path('.env').exists() else '.env.example'
    load_dotenv(env_file)

    return {
        'user': os.getenv('POSTGRES_USER', 'postgres'),
        'password': os.getenv('POSTGRES_PASSWORD', 'postgres'),
        'host': os.getenv('POSTGRES_SERVER', 'localhost'),
        'port': os.getenv('POSTGRES_PORT', '5432'),
        'test_db': os.getenv('POSTGRES_DB', 'livestream_test_db'),
    }


# =============================================================================
# Database Setup and Cleanup
# =============================================================================
async def _setup_test_database() -> None:
    cfg = _get_db_config()

    # Create database if not exists
    conn = await asyncpg.connect(
        user=cfg['user'],
        password=cfg['password'],
        host=cfg['host'],
        port=int(cfg['port']),
        database='postgres',
        timeout=3,
    )
    try:
        exists = await conn.fetchval('SELECT 1 FROM pg_database WHERE datname = $1', cfg['test_db'])
        if not exists:
            await conn.execute(f'CREATE DATABASE {cfg["test_db"]}')
    finally:
        await conn.close()

    from src.platform.database.orm_db_setting import create_db_and_tables

    await create_db_and_tables(drop_existing=True)


async def _clean_all_tables() -> None:
    from src.platform.database.asyncpg_setting import acquire_connection

    async with acquire_connection() as conn:
        await conn.execute(
            'TRUNCATE livecomments, reactions, livestream_viewers_history, livestream_tags, '
            'livestreams, reservation_slots, tags, users '
            'RESTART IDENTITY CASCADE'
        )


# =============================================================================
# Integration Test Fixtures
# =============================================================================
@pytest.fixture(scope='function')
async def clean_database() -> AsyncGenerator[None, None]:
    if not _database_ready:
        pytest.skip('PostgreSQL is not reachable')

    await _clean_all_tables()
    yield

    from src.platform.database.asyncpg_setting import close_all_asyncpg_pools

    # Pools are bound to the event loop of the test that created them
    await close_all_asyncpg_pools()
