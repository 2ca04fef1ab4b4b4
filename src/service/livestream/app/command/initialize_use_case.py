from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.livestream.app.interface.i_livestream_cache_registry import (
    ILivestreamCacheRegistry,
)
from src.service.livestream.app.interface.i_livestream_query_repo import ILivestreamQueryRepo
from src.service.livestream.app.interface.i_tag_query_repo import ITagQueryRepo
from src.service.livestream.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.livestream.domain.enum.entity_kind import EntityKind


class InitializeUseCase:
    """
    Two-phase cache population: reset every family, then bulk load from full
    table reads. Runs in the lifespan before traffic is accepted and on
    POST /api/initialize.

    The reset happens before the reads. Writes committed while the tables are
    being read land in the fresh caches and are merged with, never replaced
    by, the loaded rows.
    """

    def __init__(
        self,
        *,
        cache_registry: ILivestreamCacheRegistry,
        tag_query_repo: ITagQueryRepo,
        user_query_repo: IUserQueryRepo,
        livestream_query_repo: ILivestreamQueryRepo,
    ) -> None:
        self.cache_registry = cache_registry
        self.tag_query_repo = tag_query_repo
        self.user_query_repo = user_query_repo
        self.livestream_query_repo = livestream_query_repo
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        cache_registry: ILivestreamCacheRegistry = Depends(Provide[Container.cache_registry]),
        tag_query_repo: ITagQueryRepo = Depends(Provide[Container.tag_query_repo]),
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
        livestream_query_repo: ILivestreamQueryRepo = Depends(
            Provide[Container.livestream_query_repo]
        ),
    ) -> Self:
        return cls(
            cache_registry=cache_registry,
            tag_query_repo=tag_query_repo,
            user_query_repo=user_query_repo,
            livestream_query_repo=livestream_query_repo,
        )

    @Logger.io
    async def initialize(self) -> dict[str, int]:
        with self.tracer.start_as_current_span('use_case.initialize_caches'):
            # Phase 1: reset
            self.cache_registry.init_all()

            # Phase 2: bulk load
            tags = await self.tag_query_repo.list_all()
            self.cache_registry.bulk_load(EntityKind.TAG, ((tag.id, tag) for tag in tags))

            users = await self.user_query_repo.list_all()
            self.cache_registry.bulk_load(EntityKind.USER_BY_ID, ((u.id, u) for u in users))
            self.cache_registry.bulk_load(EntityKind.USER_BY_NAME, ((u.name, u) for u in users))

            livestreams = await self.livestream_query_repo.list_all()
            self.cache_registry.load_livestreams(livestreams)

            sizes = self.cache_registry.sizes()
            Logger.base.info(f'✅ [INITIALIZE] Cache families loaded: {sizes}')
            return sizes
