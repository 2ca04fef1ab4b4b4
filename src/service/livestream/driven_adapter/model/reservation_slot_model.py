from sqlalchemy import BigInteger, CheckConstraint, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class ReservationSlotModel(Base):
    __tablename__ = 'reservation_slots'
    __table_args__ = (
        # Also serves the range scan of lock_range (start_at >= ? AND end_at <= ?)
        UniqueConstraint('start_at', 'end_at', name='uq_reservation_slots_start_end'),
        CheckConstraint('slot >= 0', name='ck_reservation_slots_slot_non_negative'),
        CheckConstraint('start_at < end_at', name='ck_reservation_slots_range'),
    )

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    slot: Mapped[int] = mapped_column(BigInteger, nullable=False)  # remaining capacity
    start_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    end_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
