from src.platform.database.asyncpg_setting import acquire_connection
from src.platform.logging.loguru_io import Logger
from src.service.livestream.app.interface.i_livestream_viewer_repo import ILivestreamViewerRepo


class LivestreamViewerRepoImpl(ILivestreamViewerRepo):
    @Logger.io
    async def enter(self, *, user_id: int, livestream_id: int, created_at: int) -> None:
        async with acquire_connection() as conn:
            await conn.execute(
                'INSERT INTO livestream_viewers_history (user_id, livestream_id, created_at) '
                'VALUES ($1, $2, $3)',
                user_id,
                livestream_id,
                created_at,
            )

    @Logger.io
    async def exit(self, *, user_id: int, livestream_id: int) -> int:
        async with acquire_connection() as conn:
            status = await conn.execute(
                'DELETE FROM livestream_viewers_history WHERE user_id = $1 AND livestream_id = $2',
                user_id,
                livestream_id,
            )
        # asyncpg returns the command tag, e.g. 'DELETE 1'
        return int(status.split()[-1])
