import asyncpg

from src.platform.logging.loguru_io import Logger
from src.service.livestream.app.interface.i_livestream_command_repo import ILivestreamCommandRepo
from src.service.livestream.domain.entity.livestream_entity import Livestream


class LivestreamCommandRepoImpl(ILivestreamCommandRepo):
    def __init__(self, conn: asyncpg.Connection) -> None:
        self.conn = conn

    @Logger.io
    async def create(self, *, livestream: Livestream) -> Livestream:
        livestream_id = await self.conn.fetchval(
            """
            INSERT INTO livestreams
                (user_id, title, description, playlist_url, thumbnail_url, start_at, end_at)
            VALUES ($1, $2, $3, $4, $5, $6, $7)
            RETURNING id
            """,
            livestream.user_id,
            livestream.title,
            livestream.description,
            livestream.playlist_url,
            livestream.thumbnail_url,
            livestream.start_at,
            livestream.end_at,
        )

        if livestream.tag_ids:
            await self.conn.executemany(
                'INSERT INTO livestream_tags (livestream_id, tag_id) VALUES ($1, $2)',
                [(livestream_id, tag_id) for tag_id in livestream.tag_ids],
            )

        return livestream.with_id(livestream_id)
