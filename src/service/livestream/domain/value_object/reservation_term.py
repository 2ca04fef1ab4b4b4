from typing import Iterator, Sequence

import attrs

from src.platform.config.core_setting import AdmissionPolicy, Settings
from src.platform.exception.exceptions import (
    ReservationOutOfRangeError,
    ReservationOverbookedError,
)
from src.service.livestream.domain.entity.reservation_slot_entity import ReservationSlot


@attrs.define(frozen=True)
class ReservationTerm:
    """
    The bounded horizon reservations may fall in, tiled into equal slots.

    All bounds are epoch seconds and half-open: a slot [s, e) and a request
    [start_at, end_at) share the same convention.
    """

    start_at: int = attrs.field()
    end_at: int = attrs.field()
    slot_seconds: int = 3600
    capacity: int = 5
    admission_policy: AdmissionPolicy = AdmissionPolicy.PER_SLOT

    @start_at.validator
    def _check_bounds(self, attribute, value):
        if value >= self.end_at:
            raise ValueError('reservation term start must be earlier than its end')

    @classmethod
    def from_settings(cls, settings: Settings) -> 'ReservationTerm':
        return cls(
            start_at=settings.RESERVATION_TERM_START_AT,
            end_at=settings.RESERVATION_TERM_END_AT,
            slot_seconds=settings.RESERVATION_SLOT_SECONDS,
            capacity=settings.RESERVATION_SLOT_CAPACITY,
            admission_policy=settings.RESERVATION_ADMISSION_POLICY,
        )

    def contains(self, *, start_at: int, end_at: int) -> bool:
        return self.start_at <= start_at < end_at <= self.end_at

    def validate_range(self, *, start_at: int, end_at: int) -> None:
        if not self.contains(start_at=start_at, end_at=end_at):
            raise ReservationOutOfRangeError('bad reservation time range')

    def validate_admission(
        self,
        *,
        start_at: int,
        end_at: int,
        slots: Sequence[ReservationSlot],
        available_count: int,
    ) -> None:
        """
        Raise when the locked slots cannot take one more broadcast.

        per_slot admits only when the locked slots tile [start_at, end_at)
        exactly and every one of them has capacity left, so a range whose head
        or tail cuts into a slot is rejected. any_slot admits when at least one
        locked slot has capacity. Both reject a range that covers no whole slot.
        """
        if not slots:
            admitted = False
        elif self.admission_policy is AdmissionPolicy.ANY_SLOT:
            admitted = available_count >= 1
        else:
            admitted = _tiles(slots, start_at=start_at, end_at=end_at) and (
                available_count == len(slots)
            )

        if not admitted:
            raise ReservationOverbookedError(
                f'reservation range {start_at} ~ {end_at} cannot be reserved '
                f'within term {self.start_at} ~ {self.end_at}'
            )

    def iter_slots(self) -> Iterator[tuple[int, int]]:
        """Yield every (start_at, end_at) slot boundary covering the term."""
        cursor = self.start_at
        while cursor < self.end_at:
            slot_end = min(cursor + self.slot_seconds, self.end_at)
            yield cursor, slot_end
            cursor = slot_end

    @property
    def slot_count(self) -> int:
        return -(-(self.end_at - self.start_at) // self.slot_seconds)


def _tiles(slots: Sequence[ReservationSlot], *, start_at: int, end_at: int) -> bool:
    """True when the ordered slots cover [start_at, end_at) without gaps or overhang."""
    if slots[0].start_at != start_at or slots[-1].end_at != end_at:
        return False
    return all(prev.end_at == nxt.start_at for prev, nxt in zip(slots, slots[1:]))
