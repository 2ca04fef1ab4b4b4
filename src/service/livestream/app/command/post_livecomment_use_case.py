from typing import Any, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.livestream.app.interface.i_livecomment_repo import ILivecommentRepo
from src.service.livestream.app.query.get_livestream_use_case import GetLivestreamUseCase
from src.service.livestream.app.query.livestream_response_assembler import (
    LivestreamResponseAssembler,
)
from src.service.livestream.domain.entity.livecomment_entity import Livecomment
from src.service.livestream.domain.value_object.caller_identity import CallerIdentity


class PostLivecommentUseCase:
    def __init__(
        self,
        *,
        livestream_lookup: GetLivestreamUseCase,
        livecomment_repo: ILivecommentRepo,
        assembler: LivestreamResponseAssembler,
    ) -> None:
        self.livestream_lookup = livestream_lookup
        self.livecomment_repo = livecomment_repo
        self.assembler = assembler

    @classmethod
    @inject
    def depends(
        cls,
        livestream_lookup: GetLivestreamUseCase = Depends(GetLivestreamUseCase.depends),
        livecomment_repo: ILivecommentRepo = Depends(Provide[Container.livecomment_repo]),
        assembler: LivestreamResponseAssembler = Depends(LivestreamResponseAssembler.depends),
    ) -> Self:
        return cls(
            livestream_lookup=livestream_lookup,
            livecomment_repo=livecomment_repo,
            assembler=assembler,
        )

    @Logger.io
    async def post(
        self, *, caller: CallerIdentity, livestream_id: int, comment: str, tip: int = 0
    ) -> dict[str, Any]:
        livestream = await self.livestream_lookup.find_livestream(livestream_id=livestream_id)
        livecomment = await self.livecomment_repo.create(
            livecomment=Livecomment.create(
                user_id=caller.user_id, livestream_id=livestream.id, comment=comment, tip=tip
            )
        )

        Logger.base.info(
            f'💬 [LIVECOMMENT] user={caller.user_id} livestream={livestream.id} tip={tip}'
        )
        return await self.assembler.assemble_livecomment(
            livecomment, livestream=await self.assembler.assemble(livestream)
        )
