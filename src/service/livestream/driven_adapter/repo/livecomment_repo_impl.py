from typing import List, Optional

import asyncpg

from src.platform.database.asyncpg_setting import acquire_connection
from src.platform.logging.loguru_io import Logger
from src.service.livestream.app.interface.i_livecomment_repo import ILivecommentRepo
from src.service.livestream.domain.entity.livecomment_entity import Livecomment


class LivecommentRepoImpl(ILivecommentRepo):
    @staticmethod
    def _row_to_livecomment(row: asyncpg.Record) -> Livecomment:
        return Livecomment(
            id=row['id'],
            user_id=row['user_id'],
            livestream_id=row['livestream_id'],
            comment=row['comment'],
            tip=row['tip'],
            created_at=row['created_at'],
        )

    @Logger.io
    async def create(self, *, livecomment: Livecomment) -> Livecomment:
        async with acquire_connection() as conn:
            livecomment_id = await conn.fetchval(
                """
                INSERT INTO livecomments (user_id, livestream_id, comment, tip, created_at)
                VALUES ($1, $2, $3, $4, $5)
                RETURNING id
                """,
                livecomment.user_id,
                livecomment.livestream_id,
                livecomment.comment,
                livecomment.tip,
                livecomment.created_at,
            )
        return livecomment.with_id(livecomment_id)

    @Logger.io
    async def list_by_livestream_id(
        self, *, livestream_id: int, limit: Optional[int] = None
    ) -> List[Livecomment]:
        # LIMIT NULL is LIMIT ALL
        async with acquire_connection() as conn:
            rows = await conn.fetch(
                """
                SELECT id, user_id, livestream_id, comment, tip, created_at
                FROM livecomments
                WHERE livestream_id = $1
                ORDER BY created_at DESC, id DESC
                LIMIT $2
                """,
                livestream_id,
                limit,
            )
        return [self._row_to_livecomment(row) for row in rows]
