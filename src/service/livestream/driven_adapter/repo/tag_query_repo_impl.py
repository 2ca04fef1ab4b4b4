from typing import List, Optional

from src.platform.database.asyncpg_setting import acquire_connection
from src.platform.logging.loguru_io import Logger
from src.service.livestream.app.interface.i_tag_query_repo import ITagQueryRepo
from src.service.livestream.domain.entity.tag_entity import Tag


class TagQueryRepoImpl(ITagQueryRepo):
    @Logger.io
    async def get_by_id(self, *, tag_id: int) -> Optional[Tag]:
        async with acquire_connection() as conn:
            row = await conn.fetchrow('SELECT id, name FROM tags WHERE id = $1', tag_id)
        return Tag(id=row['id'], name=row['name']) if row else None

    @Logger.io
    async def list_all(self) -> List[Tag]:
        async with acquire_connection() as conn:
            rows = await conn.fetch('SELECT id, name FROM tags ORDER BY id')
        return [Tag(id=row['id'], name=row['name']) for row in rows]
