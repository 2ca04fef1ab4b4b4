from typing import Any, List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.livestream.app.interface.i_livestream_cache_registry import (
    ILivestreamCacheRegistry,
)
from src.service.livestream.app.interface.i_livestream_query_repo import ILivestreamQueryRepo
from src.service.livestream.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.livestream.app.query.livestream_response_assembler import (
    LivestreamResponseAssembler,
)
from src.service.livestream.domain.entity.livestream_entity import Livestream
from src.service.livestream.domain.entity.tag_entity import Tag
from src.service.livestream.domain.enum.entity_kind import EntityKind
from src.service.livestream.domain.value_object.caller_identity import CallerIdentity


class ListLivestreamsUseCase:
    def __init__(
        self,
        *,
        cache_registry: ILivestreamCacheRegistry,
        livestream_query_repo: ILivestreamQueryRepo,
        user_query_repo: IUserQueryRepo,
        assembler: LivestreamResponseAssembler,
    ) -> None:
        self.cache_registry = cache_registry
        self.livestream_query_repo = livestream_query_repo
        self.user_query_repo = user_query_repo
        self.assembler = assembler

    @classmethod
    @inject
    def depends(
        cls,
        cache_registry: ILivestreamCacheRegistry = Depends(Provide[Container.cache_registry]),
        livestream_query_repo: ILivestreamQueryRepo = Depends(
            Provide[Container.livestream_query_repo]
        ),
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
        assembler: LivestreamResponseAssembler = Depends(LivestreamResponseAssembler.depends),
    ) -> Self:
        return cls(
            cache_registry=cache_registry,
            livestream_query_repo=livestream_query_repo,
            user_query_repo=user_query_repo,
            assembler=assembler,
        )

    @Logger.io
    async def list_mine(self, *, caller: CallerIdentity) -> List[dict[str, Any]]:
        livestreams = await self._owner_livestreams(caller.user_id)
        return await self.assembler.assemble_many(livestreams)

    @Logger.io
    async def list_by_username(self, *, username: str) -> List[dict[str, Any]]:
        user = self.cache_registry.get_user_by_name(username)
        if user is None:
            user = await self.user_query_repo.get_by_name(name=username)
            if user is None:
                raise NotFoundError('user not found')
            self.cache_registry.remember_user(user)

        livestreams = await self._owner_livestreams(user.id)
        return await self.assembler.assemble_many(livestreams)

    @Logger.io
    async def search(
        self, *, tag: Optional[str] = None, limit: Optional[int] = None
    ) -> List[dict[str, Any]]:
        """
        With `tag`: livestreams carrying any tag of that name, newest first.
        Without: newest first, at most `limit`.
        """
        if tag:
            tags: List[Tag] = self.cache_registry.all(EntityKind.TAG)
            tag_ids = [item.id for item in tags if item.name == tag]
            livestreams = await self.livestream_query_repo.list_by_tag_ids(tag_ids=tag_ids)
        else:
            if limit is not None and limit < 0:
                raise DomainError('limit query parameter must be a non-negative integer')
            livestreams = await self.livestream_query_repo.list_latest(limit=limit)

        return await self.assembler.assemble_many(livestreams)

    async def _owner_livestreams(self, user_id: int) -> List[Livestream]:
        cached, found = self.cache_registry.get(EntityKind.LIVESTREAMS_BY_OWNER, user_id)
        if found:
            return list(cached)

        livestreams = await self.livestream_query_repo.list_by_user_id(user_id=user_id)
        # Merge rather than set: a reservation may have appended since the read
        self.cache_registry.load_livestreams(livestreams)
        return livestreams
