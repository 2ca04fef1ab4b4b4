from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.livestream.app.interface.i_unit_of_work import AbstractUnitOfWork
from src.service.livestream.domain.entity.reservation_slot_entity import ReservationSlot
from src.service.livestream.domain.value_object.reservation_term import ReservationTerm


class GetSlotAvailabilityUseCase:
    """Non-locking read of remaining capacity; the answer may be stale by the time it is used."""

    def __init__(self, *, uow: AbstractUnitOfWork, term: ReservationTerm) -> None:
        self.uow = uow
        self.term = term

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        term: ReservationTerm = Depends(Provide[Container.reservation_term]),
    ) -> Self:
        return cls(uow=uow, term=term)

    @Logger.io
    async def get_slots(self, *, start_at: int, end_at: int) -> List[ReservationSlot]:
        self.term.validate_range(start_at=start_at, end_at=end_at)

        async with self.uow:
            return await self.uow.slot_repo.list_range(start_at=start_at, end_at=end_at)
