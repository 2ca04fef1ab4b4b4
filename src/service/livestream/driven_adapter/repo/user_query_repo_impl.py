from typing import List, Optional

import asyncpg

from src.platform.database.asyncpg_setting import acquire_connection
from src.platform.logging.loguru_io import Logger
from src.service.livestream.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.livestream.domain.entity.user_entity import User


class UserQueryRepoImpl(IUserQueryRepo):
    @staticmethod
    def _row_to_user(row: asyncpg.Record) -> User:
        return User(
            id=row['id'],
            name=row['name'],
            display_name=row['display_name'],
            description=row['description'],
        )

    @Logger.io
    async def get_by_id(self, *, user_id: int) -> Optional[User]:
        async with acquire_connection() as conn:
            row = await conn.fetchrow(
                'SELECT id, name, display_name, description FROM users WHERE id = $1',
                user_id,
            )
        return self._row_to_user(row) if row else None

    @Logger.io
    async def get_by_name(self, *, name: str) -> Optional[User]:
        async with acquire_connection() as conn:
            row = await conn.fetchrow(
                'SELECT id, name, display_name, description FROM users WHERE name = $1',
                name,
            )
        return self._row_to_user(row) if row else None

    @Logger.io
    async def list_all(self) -> List[User]:
        async with acquire_connection() as conn:
            rows = await conn.fetch(
                'SELECT id, name, display_name, description FROM users ORDER BY id'
            )
        return [self._row_to_user(row) for row in rows]
