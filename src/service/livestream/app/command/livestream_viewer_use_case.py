from datetime import datetime, timezone
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.livestream.app.interface.i_livestream_viewer_repo import ILivestreamViewerRepo
from src.service.livestream.app.query.get_livestream_use_case import GetLivestreamUseCase
from src.service.livestream.domain.value_object.caller_identity import CallerIdentity


class LivestreamViewerUseCase:
    """Records a caller entering and leaving a livestream's audience."""

    def __init__(
        self, *, livestream_lookup: GetLivestreamUseCase, viewer_repo: ILivestreamViewerRepo
    ) -> None:
        self.livestream_lookup = livestream_lookup
        self.viewer_repo = viewer_repo

    @classmethod
    @inject
    def depends(
        cls,
        livestream_lookup: GetLivestreamUseCase = Depends(GetLivestreamUseCase.depends),
        viewer_repo: ILivestreamViewerRepo = Depends(Provide[Container.livestream_viewer_repo]),
    ) -> Self:
        return cls(livestream_lookup=livestream_lookup, viewer_repo=viewer_repo)

    @Logger.io
    async def enter(self, *, caller: CallerIdentity, livestream_id: int) -> None:
        await self.livestream_lookup.find_livestream(livestream_id=livestream_id)
        await self.viewer_repo.enter(
            user_id=caller.user_id,
            livestream_id=livestream_id,
            created_at=int(datetime.now(timezone.utc).timestamp()),
        )

    @Logger.io
    async def exit(self, *, caller: CallerIdentity, livestream_id: int) -> None:
        # Leaving a livestream the caller never entered is a no-op
        await self.viewer_repo.exit(user_id=caller.user_id, livestream_id=livestream_id)
