"""
Livestream Query Repository Implementation - CQRS Read Side

Each row carries its tag ids (aggregated from livestream_tags), so a
livestream read from here is complete enough to be cached as-is.
"""

from typing import List, Optional, Sequence

import asyncpg

from src.platform.database.asyncpg_setting import acquire_connection
from src.platform.logging.loguru_io import Logger
from src.service.livestream.app.interface.i_livestream_query_repo import ILivestreamQueryRepo
from src.service.livestream.domain.entity.livestream_entity import Livestream


_SELECT_LIVESTREAM_WITH_TAGS = """
    SELECT
        l.id, l.user_id, l.title, l.description, l.playlist_url, l.thumbnail_url,
        l.start_at, l.end_at,
        COALESCE(
            array_agg(lt.tag_id ORDER BY lt.id) FILTER (WHERE lt.tag_id IS NOT NULL),
            '{}'::bigint[]
        ) AS tag_ids
    FROM livestreams l
    LEFT JOIN livestream_tags lt ON lt.livestream_id = l.id
"""


class LivestreamQueryRepoImpl(ILivestreamQueryRepo):
    @staticmethod
    def _row_to_livestream(row: asyncpg.Record) -> Livestream:
        return Livestream(
            id=row['id'],
            user_id=row['user_id'],
            title=row['title'],
            description=row['description'],
            playlist_url=row['playlist_url'],
            thumbnail_url=row['thumbnail_url'],
            start_at=row['start_at'],
            end_at=row['end_at'],
            tag_ids=row['tag_ids'],
        )

    async def _fetch(self, query: str, *args) -> List[Livestream]:
        async with acquire_connection() as conn:
            rows = await conn.fetch(query, *args)
        return [self._row_to_livestream(row) for row in rows]

    @Logger.io
    async def get_by_id(self, *, livestream_id: int) -> Optional[Livestream]:
        livestreams = await self._fetch(
            f'{_SELECT_LIVESTREAM_WITH_TAGS} WHERE l.id = $1 GROUP BY l.id',
            livestream_id,
        )
        return livestreams[0] if livestreams else None

    @Logger.io
    async def list_by_user_id(self, *, user_id: int) -> List[Livestream]:
        return await self._fetch(
            f'{_SELECT_LIVESTREAM_WITH_TAGS} WHERE l.user_id = $1 GROUP BY l.id ORDER BY l.id',
            user_id,
        )

    @Logger.io
    async def list_by_tag_ids(self, *, tag_ids: Sequence[int]) -> List[Livestream]:
        if not tag_ids:
            return []

        return await self._fetch(
            f"""
            {_SELECT_LIVESTREAM_WITH_TAGS}
            WHERE l.id IN (
                SELECT livestream_id FROM livestream_tags WHERE tag_id = ANY($1::bigint[])
            )
            GROUP BY l.id
            ORDER BY l.id DESC
            """,
            list(tag_ids),
        )

    @Logger.io
    async def list_latest(self, *, limit: Optional[int] = None) -> List[Livestream]:
        # LIMIT NULL means no limit
        return await self._fetch(
            f'{_SELECT_LIVESTREAM_WITH_TAGS} GROUP BY l.id ORDER BY l.id DESC LIMIT $1',
            limit,
        )

    @Logger.io
    async def list_all(self) -> List[Livestream]:
        return await self._fetch(f'{_SELECT_LIVESTREAM_WITH_TAGS} GROUP BY l.id ORDER BY l.id')
