from typing import Any, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.livestream.app.interface.i_livestream_cache_registry import (
    ILivestreamCacheRegistry,
)
from src.service.livestream.app.interface.i_livestream_query_repo import ILivestreamQueryRepo
from src.service.livestream.app.query.livestream_response_assembler import (
    LivestreamResponseAssembler,
)
from src.service.livestream.domain.entity.livestream_entity import Livestream
from src.service.livestream.domain.enum.entity_kind import EntityKind


class GetLivestreamUseCase:
    def __init__(
        self,
        *,
        cache_registry: ILivestreamCacheRegistry,
        livestream_query_repo: ILivestreamQueryRepo,
        assembler: LivestreamResponseAssembler,
    ) -> None:
        self.cache_registry = cache_registry
        self.livestream_query_repo = livestream_query_repo
        self.assembler = assembler

    @classmethod
    @inject
    def depends(
        cls,
        cache_registry: ILivestreamCacheRegistry = Depends(Provide[Container.cache_registry]),
        livestream_query_repo: ILivestreamQueryRepo = Depends(
            Provide[Container.livestream_query_repo]
        ),
        assembler: LivestreamResponseAssembler = Depends(LivestreamResponseAssembler.depends),
    ) -> Self:
        return cls(
            cache_registry=cache_registry,
            livestream_query_repo=livestream_query_repo,
            assembler=assembler,
        )

    @Logger.io
    async def get_livestream(self, *, livestream_id: int) -> dict[str, Any]:
        livestream = await self.find_livestream(livestream_id=livestream_id)
        return await self.assembler.assemble(livestream)

    async def find_livestream(self, *, livestream_id: int) -> Livestream:
        """Cache first, then storage; NotFoundError when neither has it."""
        livestream, found = self.cache_registry.get(EntityKind.LIVESTREAM_BY_ID, livestream_id)
        if found:
            return livestream
        return await self._load(livestream_id)

    async def _load(self, livestream_id: int) -> Livestream:
        livestream = await self.livestream_query_repo.get_by_id(livestream_id=livestream_id)
        if livestream is None:
            raise NotFoundError('livestream not found')

        self.cache_registry.set(EntityKind.LIVESTREAM_BY_ID, livestream_id, livestream)
        return livestream
