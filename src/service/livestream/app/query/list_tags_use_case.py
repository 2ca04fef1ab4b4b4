from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.livestream.app.interface.i_livestream_cache_registry import (
    ILivestreamCacheRegistry,
)
from src.service.livestream.domain.entity.tag_entity import Tag
from src.service.livestream.domain.enum.entity_kind import EntityKind


class ListTagsUseCase:
    def __init__(self, *, cache_registry: ILivestreamCacheRegistry) -> None:
        self.cache_registry = cache_registry

    @classmethod
    @inject
    def depends(
        cls,
        cache_registry: ILivestreamCacheRegistry = Depends(Provide[Container.cache_registry]),
    ) -> Self:
        return cls(cache_registry=cache_registry)

    @Logger.io
    async def list_tags(self) -> List[Tag]:
        tags: List[Tag] = self.cache_registry.all(EntityKind.TAG)
        return sorted(tags, key=lambda tag: tag.id)
