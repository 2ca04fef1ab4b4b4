from typing import Any, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.livestream.app.interface.i_reaction_repo import IReactionRepo
from src.service.livestream.app.query.get_livestream_use_case import GetLivestreamUseCase
from src.service.livestream.app.query.livestream_response_assembler import (
    LivestreamResponseAssembler,
)
from src.service.livestream.domain.entity.reaction_entity import Reaction
from src.service.livestream.domain.value_object.caller_identity import CallerIdentity


class PostReactionUseCase:
    def __init__(
        self,
        *,
        livestream_lookup: GetLivestreamUseCase,
        reaction_repo: IReactionRepo,
        assembler: LivestreamResponseAssembler,
    ) -> None:
        self.livestream_lookup = livestream_lookup
        self.reaction_repo = reaction_repo
        self.assembler = assembler

    @classmethod
    @inject
    def depends(
        cls,
        livestream_lookup: GetLivestreamUseCase = Depends(GetLivestreamUseCase.depends),
        reaction_repo: IReactionRepo = Depends(Provide[Container.reaction_repo]),
        assembler: LivestreamResponseAssembler = Depends(LivestreamResponseAssembler.depends),
    ) -> Self:
        return cls(
            livestream_lookup=livestream_lookup, reaction_repo=reaction_repo, assembler=assembler
        )

    @Logger.io
    async def post(
        self, *, caller: CallerIdentity, livestream_id: int, emoji_name: str
    ) -> dict[str, Any]:
        livestream = await self.livestream_lookup.find_livestream(livestream_id=livestream_id)
        reaction = await self.reaction_repo.create(
            reaction=Reaction.create(
                user_id=caller.user_id, livestream_id=livestream.id, emoji_name=emoji_name
            )
        )
        return await self.assembler.assemble_reaction(
            reaction, livestream=await self.assembler.assemble(livestream)
        )
