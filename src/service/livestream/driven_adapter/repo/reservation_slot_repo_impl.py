"""
Reservation Slot Repository Implementation - asyncpg

Runs on the unit of work's connection. Row locks taken by `lock_range` live
until that transaction ends.
"""

from typing import List, Sequence

import asyncpg

from src.platform.logging.loguru_io import Logger
from src.service.livestream.app.interface.i_reservation_slot_repo import IReservationSlotRepo
from src.service.livestream.domain.entity.reservation_slot_entity import ReservationSlot
from src.service.livestream.domain.value_object.reservation_term import ReservationTerm


class ReservationSlotRepoImpl(IReservationSlotRepo):
    def __init__(self, conn: asyncpg.Connection) -> None:
        self.conn = conn

    @staticmethod
    def _row_to_slot(row: asyncpg.Record) -> ReservationSlot:
        return ReservationSlot(
            id=row['id'],
            slot=row['slot'],
            start_at=row['start_at'],
            end_at=row['end_at'],
        )

    @Logger.io
    async def lock_range(self, *, start_at: int, end_at: int) -> List[ReservationSlot]:
        # ORDER BY start_at: overlapping requests acquire row locks in the same order
        rows = await self.conn.fetch(
            """
            SELECT id, slot, start_at, end_at
            FROM reservation_slots
            WHERE start_at >= $1 AND end_at <= $2
            ORDER BY start_at
            FOR UPDATE
            """,
            start_at,
            end_at,
        )
        return [self._row_to_slot(row) for row in rows]

    @Logger.io
    async def count_available(self, *, slots: Sequence[ReservationSlot]) -> int:
        if not slots:
            return 0

        count = await self.conn.fetchval(
            """
            SELECT COUNT(*)
            FROM reservation_slots rs
            JOIN unnest($1::bigint[], $2::bigint[]) AS r(start_at, end_at)
              ON rs.start_at = r.start_at AND rs.end_at = r.end_at
            WHERE rs.slot > 0
            """,
            [slot.start_at for slot in slots],
            [slot.end_at for slot in slots],
        )
        return int(count or 0)

    @Logger.io
    async def decrement_range(self, *, start_at: int, end_at: int) -> int:
        # slot > 0 keeps the any_slot policy from driving an exhausted slot negative
        status = await self.conn.execute(
            """
            UPDATE reservation_slots
            SET slot = slot - 1
            WHERE start_at >= $1 AND end_at <= $2 AND slot > 0
            """,
            start_at,
            end_at,
        )
        # asyncpg returns the command tag, e.g. 'UPDATE 3'
        return int(status.split()[-1])

    @Logger.io
    async def list_range(self, *, start_at: int, end_at: int) -> List[ReservationSlot]:
        rows = await self.conn.fetch(
            """
            SELECT id, slot, start_at, end_at
            FROM reservation_slots
            WHERE start_at >= $1 AND end_at <= $2
            ORDER BY start_at
            """,
            start_at,
            end_at,
        )
        return [self._row_to_slot(row) for row in rows]

    @Logger.io
    async def initialize(self, *, term: ReservationTerm) -> int:
        await self.conn.execute('TRUNCATE reservation_slots RESTART IDENTITY')

        records = [(term.capacity, start_at, end_at) for start_at, end_at in term.iter_slots()]
        await self.conn.copy_records_to_table(
            'reservation_slots',
            records=records,
            columns=['slot', 'start_at', 'end_at'],
        )

        Logger.base.info(
            f'🗓️ [SLOTS] Seeded {len(records)} slots '
            f'({term.start_at} ~ {term.end_at}, capacity={term.capacity})'
        )
        return len(records)
