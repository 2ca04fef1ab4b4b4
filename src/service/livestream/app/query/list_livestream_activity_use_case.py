"""
Livecomment and reaction timelines of one livestream, newest first.

The livestream is resolved once (cache, then storage) and its assembled view
is shared by every item of the page.
"""

from typing import Any, List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.livestream.app.interface.i_livecomment_repo import ILivecommentRepo
from src.service.livestream.app.interface.i_reaction_repo import IReactionRepo
from src.service.livestream.app.query.get_livestream_use_case import GetLivestreamUseCase
from src.service.livestream.app.query.livestream_response_assembler import (
    LivestreamResponseAssembler,
)


def _check_limit(limit: Optional[int]) -> None:
    if limit is not None and limit < 0:
        raise DomainError('limit query parameter must be a non-negative integer')


class ListLivestreamActivityUseCase:
    def __init__(
        self,
        *,
        livestream_lookup: GetLivestreamUseCase,
        livecomment_repo: ILivecommentRepo,
        reaction_repo: IReactionRepo,
        assembler: LivestreamResponseAssembler,
    ) -> None:
        self.livestream_lookup = livestream_lookup
        self.livecomment_repo = livecomment_repo
        self.reaction_repo = reaction_repo
        self.assembler = assembler

    @classmethod
    @inject
    def depends(
        cls,
        livestream_lookup: GetLivestreamUseCase = Depends(GetLivestreamUseCase.depends),
        livecomment_repo: ILivecommentRepo = Depends(Provide[Container.livecomment_repo]),
        reaction_repo: IReactionRepo = Depends(Provide[Container.reaction_repo]),
        assembler: LivestreamResponseAssembler = Depends(LivestreamResponseAssembler.depends),
    ) -> Self:
        return cls(
            livestream_lookup=livestream_lookup,
            livecomment_repo=livecomment_repo,
            reaction_repo=reaction_repo,
            assembler=assembler,
        )

    @Logger.io
    async def list_livecomments(
        self, *, livestream_id: int, limit: Optional[int] = None
    ) -> List[dict[str, Any]]:
        _check_limit(limit)
        livestream_view = await self._livestream_view(livestream_id)
        livecomments = await self.livecomment_repo.list_by_livestream_id(
            livestream_id=livestream_id, limit=limit
        )
        return [
            await self.assembler.assemble_livecomment(item, livestream=livestream_view)
            for item in livecomments
        ]

    @Logger.io
    async def list_reactions(
        self, *, livestream_id: int, limit: Optional[int] = None
    ) -> List[dict[str, Any]]:
        _check_limit(limit)
        livestream_view = await self._livestream_view(livestream_id)
        reactions = await self.reaction_repo.list_by_livestream_id(
            livestream_id=livestream_id, limit=limit
        )
        return [
            await self.assembler.assemble_reaction(item, livestream=livestream_view)
            for item in reactions
        ]

    async def _livestream_view(self, livestream_id: int) -> dict[str, Any]:
        livestream = await self.livestream_lookup.find_livestream(livestream_id=livestream_id)
        return await self.assembler.assemble(livestream)
