from typing import Optional

import attrs


@attrs.define(frozen=True)
class ReservationSlot:
    start_at: int
    end_at: int
    slot: int  # remaining capacity, never negative
    id: Optional[int] = None

    @property
    def has_capacity(self) -> bool:
        return self.slot > 0

    @property
    def key(self) -> tuple[int, int]:
        return self.start_at, self.end_at
