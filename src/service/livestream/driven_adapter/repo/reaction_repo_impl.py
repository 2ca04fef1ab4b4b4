from typing import List, Optional

import asyncpg

from src.platform.database.asyncpg_setting import acquire_connection
from src.platform.logging.loguru_io import Logger
from src.service.livestream.app.interface.i_reaction_repo import IReactionRepo
from src.service.livestream.domain.entity.reaction_entity import Reaction


class ReactionRepoImpl(IReactionRepo):
    @staticmethod
    def _row_to_reaction(row: asyncpg.Record) -> Reaction:
        return Reaction(
            id=row['id'],
            user_id=row['user_id'],
            livestream_id=row['livestream_id'],
            emoji_name=row['emoji_name'],
            created_at=row['created_at'],
        )

    @Logger.io
    async def create(self, *, reaction: Reaction) -> Reaction:
        async with acquire_connection() as conn:
            reaction_id = await conn.fetchval(
                'INSERT INTO reactions (user_id, livestream_id, emoji_name, created_at) '
                'VALUES ($1, $2, $3, $4) RETURNING id',
                reaction.user_id,
                reaction.livestream_id,
                reaction.emoji_name,
                reaction.created_at,
            )
        return reaction.with_id(reaction_id)

    @Logger.io
    async def list_by_livestream_id(
        self, *, livestream_id: int, limit: Optional[int] = None
    ) -> List[Reaction]:
        async with acquire_connection() as conn:
            rows = await conn.fetch(
                """
                SELECT id, user_id, livestream_id, emoji_name, created_at
                FROM reactions
                WHERE livestream_id = $1
                ORDER BY created_at DESC, id DESC
                LIMIT $2
                """,
                livestream_id,
                limit,
            )
        return [self._row_to_reaction(row) for row in rows]
