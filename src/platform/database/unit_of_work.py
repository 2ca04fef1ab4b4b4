"""
Unit of Work Pattern - one pooled connection, one transaction

Architecture:
- UoW owns the connection and transaction lifecycle
- UoW owns commit/rollback
- Repositories receive the UoW's connection, so every statement joins the same transaction
- Use cases coordinate repositories through the UoW

Infrastructure failures (connection loss, lock wait timeout, constraint
violation) leave the block as StorageFailureError after the transaction is
rolled back. Business exceptions raised inside the block pass through
unchanged, also after rollback.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Awaitable, Callable, Optional

import asyncpg

from src.platform.config.core_setting import settings
from src.platform.database.asyncpg_setting import STORAGE_ERRORS, get_asyncpg_pool
from src.platform.exception.exceptions import StorageFailureError
from src.platform.logging.loguru_io import Logger


if TYPE_CHECKING:
    from asyncpg.transaction import Transaction

    from src.service.livestream.app.interface.i_livestream_command_repo import (
        ILivestreamCommandRepo,
    )
    from src.service.livestream.app.interface.i_reservation_slot_repo import (
        IReservationSlotRepo,
    )


class AbstractUnitOfWork(abc.ABC):
    """
    Abstract Unit of Work for the Livestream Service

    Usage:
        async with uow:
            slots = await uow.slot_repo.lock_range(start_at=..., end_at=...)
            livestream = await uow.livestream_command_repo.create(...)
            await uow.commit()
    """

    slot_repo: IReservationSlotRepo
    livestream_command_repo: ILivestreamCommandRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        """Commit the transaction"""
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class AsyncpgUnitOfWork(AbstractUnitOfWork):
    """
    asyncpg implementation of Unit of Work

    Usage in use case:
        async with uow:
            await uow.slot_repo.decrement_range(start_at=..., end_at=...)
            await uow.commit()

    A UoW instance is single-use per `async with`; the DI container hands out a
    fresh one per request through its Factory provider.
    """

    def __init__(
        self,
        *,
        pool_getter: Callable[[], Awaitable[asyncpg.Pool]] = get_asyncpg_pool,
        lock_timeout_ms: Optional[int] = None,
    ):
        self._pool_getter = pool_getter
        self._lock_timeout_ms = (
            settings.RESERVATION_LOCK_TIMEOUT_MS if lock_timeout_ms is None else lock_timeout_ms
        )
        self._pool: Optional[asyncpg.Pool] = None
        self._conn: Optional[asyncpg.Connection] = None
        self._transaction: Optional[Transaction] = None
        self._finished = False

    @property
    def connection(self) -> asyncpg.Connection:
        if self._conn is None:
            raise RuntimeError('Unit of work is not active')
        return self._conn

    async def __aenter__(self):
        from src.service.livestream.driven_adapter.repo.livestream_command_repo_impl import (
            LivestreamCommandRepoImpl,
        )
        from src.service.livestream.driven_adapter.repo.reservation_slot_repo_impl import (
            ReservationSlotRepoImpl,
        )

        try:
            self._pool = await self._pool_getter()
            self._conn = await self._pool.acquire()
            self._transaction = self._conn.transaction()
            await self._transaction.start()
            # Bounds every FOR UPDATE wait in this transaction
            await self._conn.execute(f"SET LOCAL lock_timeout = '{int(self._lock_timeout_ms)}ms'")
        except STORAGE_ERRORS as e:
            await self._release()
            Logger.base.error(f'❌ [UoW] Failed to open transaction: {e!r}')
            raise StorageFailureError() from e

        self._finished = False
        self.slot_repo = ReservationSlotRepoImpl(self._conn)
        self.livestream_command_repo = LivestreamCommandRepoImpl(self._conn)

        return await super().__aenter__()

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        try:
            await super().__aexit__(exc_type, exc_val, exc_tb)
        finally:
            await self._release()

        if exc_val is not None and isinstance(exc_val, STORAGE_ERRORS):
            Logger.base.error(f'❌ [UoW] Transaction rolled back: {exc_val!r}')
            raise StorageFailureError() from exc_val

    async def _commit(self):
        if self._transaction is None or self._finished:
            raise RuntimeError('No active transaction to commit')
        try:
            await self._transaction.commit()
        except STORAGE_ERRORS as e:
            Logger.base.error(f'❌ [UoW] Commit failed: {e!r}')
            raise StorageFailureError() from e
        finally:
            self._finished = True

    async def rollback(self) -> None:
        if self._transaction is None or self._finished:
            return
        self._finished = True
        try:
            await self._transaction.rollback()
        except STORAGE_ERRORS as e:
            # Connection is gone; the server discards the transaction with it
            Logger.base.warning(f'⚠️ [UoW] Rollback failed: {e!r}')

    async def _release(self) -> None:
        if self._conn is not None and self._pool is not None:
            await self._pool.release(self._conn)
        self._conn = None
        self._transaction = None
