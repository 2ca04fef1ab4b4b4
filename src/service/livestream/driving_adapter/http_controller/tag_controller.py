from fastapi import APIRouter, Depends

from src.platform.logging.loguru_io import Logger
from src.service.livestream.app.query.list_tags_use_case import ListTagsUseCase
from src.service.livestream.driving_adapter.http_controller.schema.livestream_schema import (
    TagResponse,
    TagsResponse,
)


router = APIRouter()


@router.get('', response_model=TagsResponse)
@Logger.io
async def list_tags(
    use_case: ListTagsUseCase = Depends(ListTagsUseCase.depends),
) -> TagsResponse:
    tags = await use_case.list_tags()
    return TagsResponse(tags=[TagResponse(id=tag.id, name=tag.name) for tag in tags])
