from abc import ABC, abstractmethod
from typing import List, Sequence

from src.service.livestream.domain.entity.reservation_slot_entity import ReservationSlot
from src.service.livestream.domain.value_object.reservation_term import ReservationTerm


class IReservationSlotRepo(ABC):
    """
    Slot calendar. Every method runs inside the caller's unit of work.

    `lock_range` holds its row locks until that transaction commits or rolls back.
    """

    @abstractmethod
    async def lock_range(self, *, start_at: int, end_at: int) -> List[ReservationSlot]:
        """Lock every slot with start_at >= start and end_at <= end, in ascending start order."""
        pass

    @abstractmethod
    async def count_available(self, *, slots: Sequence[ReservationSlot]) -> int:
        """How many of the given slot boundaries currently have capacity left."""
        pass

    @abstractmethod
    async def decrement_range(self, *, start_at: int, end_at: int) -> int:
        """Consume one unit from every slot in range; returns the number of slots touched."""
        pass

    @abstractmethod
    async def list_range(self, *, start_at: int, end_at: int) -> List[ReservationSlot]:
        pass

    @abstractmethod
    async def initialize(self, *, term: ReservationTerm) -> int:
        """Replace the calendar with the term's slots at full capacity."""
        pass
