"""
Unit tests for AsyncpgUnitOfWork

The pool, connection and transaction are mocks; these tests pin down the
transaction lifecycle and the mapping of driver failures to StorageFailureError.
"""

from unittest.mock import AsyncMock, MagicMock

import asyncpg
import pytest

from src.platform.database.unit_of_work import AsyncpgUnitOfWork
from src.platform.exception.exceptions import ReservationOverbookedError, StorageFailureError
from src.service.livestream.driven_adapter.repo.livestream_command_repo_impl import (
    LivestreamCommandRepoImpl,
)
from src.service.livestream.driven_adapter.repo.reservation_slot_repo_impl import (
    ReservationSlotRepoImpl,
)


pytestmark = pytest.mark.unit


class TestAsyncpgUnitOfWork:
    def setup_method(self):
        self.transaction = MagicMock()
        self.transaction.start = AsyncMock()
        self.transaction.commit = AsyncMock()
        self.transaction.rollback = AsyncMock()

        self.conn = MagicMock()
        self.conn.transaction = MagicMock(return_value=self.transaction)
        self.conn.execute = AsyncMock()

        self.pool = MagicMock()
        self.pool.acquire = AsyncMock(return_value=self.conn)
        self.pool.release = AsyncMock()

        self.uow = AsyncpgUnitOfWork(
            pool_getter=AsyncMock(return_value=self.pool), lock_timeout_ms=1500
        )

    @pytest.mark.asyncio
    async def test_enter_starts_transaction_with_lock_timeout(self):
        async with self.uow:
            assert isinstance(self.uow.slot_repo, ReservationSlotRepoImpl)
            assert isinstance(self.uow.livestream_command_repo, LivestreamCommandRepoImpl)
            await self.uow.commit()

        self.transaction.start.assert_awaited_once()
        self.conn.execute.assert_awaited_once_with("SET LOCAL lock_timeout = '1500ms'")

    @pytest.mark.asyncio
    async def test_commit_does_not_roll_back(self):
        async with self.uow:
            await self.uow.commit()

        self.transaction.commit.assert_awaited_once()
        self.transaction.rollback.assert_not_awaited()
        self.pool.release.assert_awaited_once_with(self.conn)

    @pytest.mark.asyncio
    async def test_leaving_without_commit_rolls_back(self):
        async with self.uow:
            pass

        self.transaction.rollback.assert_awaited_once()
        self.pool.release.assert_awaited_once_with(self.conn)

    @pytest.mark.asyncio
    async def test_business_error_passes_through_after_rollback(self):
        with pytest.raises(ReservationOverbookedError):
            async with self.uow:
                raise ReservationOverbookedError('full')

        self.transaction.rollback.assert_awaited_once()
        self.pool.release.assert_awaited_once_with(self.conn)

    @pytest.mark.parametrize(
        'error',
        [ConnectionResetError('peer reset'), asyncpg.InterfaceError('connection is closed')],
    )
    @pytest.mark.asyncio
    async def test_driver_error_becomes_storage_failure(self, error):
        with pytest.raises(StorageFailureError) as exc_info:
            async with self.uow:
                raise error

        assert exc_info.value.status_code == 500
        assert exc_info.value.__cause__ is error
        self.pool.release.assert_awaited_once_with(self.conn)

    @pytest.mark.asyncio
    async def test_acquire_failure_becomes_storage_failure(self):
        self.pool.acquire = AsyncMock(side_effect=OSError('connection refused'))

        with pytest.raises(StorageFailureError):
            async with self.uow:
                pass  # pragma: no cover

        self.pool.release.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_commit_failure_becomes_storage_failure(self):
        self.transaction.commit = AsyncMock(side_effect=ConnectionResetError('lost'))

        with pytest.raises(StorageFailureError):
            async with self.uow:
                await self.uow.commit()

        self.pool.release.assert_awaited_once_with(self.conn)

    @pytest.mark.asyncio
    async def test_failed_rollback_still_releases_connection(self):
        self.transaction.rollback = AsyncMock(side_effect=ConnectionResetError('lost'))

        async with self.uow:
            pass

        self.pool.release.assert_awaited_once_with(self.conn)
