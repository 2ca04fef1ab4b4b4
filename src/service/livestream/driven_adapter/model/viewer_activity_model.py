from sqlalchemy import BigInteger, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class LivestreamViewerModel(Base):
    __tablename__ = 'livestream_viewers_history'
    __table_args__ = (
        Index('ix_livestream_viewers_user_id_livestream_id', 'user_id', 'livestream_id'),
    )

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(BigInteger, ForeignKey('users.id'), nullable=False)
    livestream_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey('livestreams.id', ondelete='CASCADE'), nullable=False, index=True
    )
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)  # epoch seconds


class LivecommentModel(Base):
    __tablename__ = 'livecomments'
    __table_args__ = (
        Index('ix_livecomments_livestream_id_created_at', 'livestream_id', 'created_at'),
    )

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(BigInteger, ForeignKey('users.id'), nullable=False)
    livestream_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey('livestreams.id', ondelete='CASCADE'), nullable=False
    )
    comment: Mapped[str] = mapped_column(Text, nullable=False)
    tip: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)


class ReactionModel(Base):
    __tablename__ = 'reactions'
    __table_args__ = (
        Index('ix_reactions_livestream_id_created_at', 'livestream_id', 'created_at'),
    )

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(BigInteger, ForeignKey('users.id'), nullable=False)
    livestream_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey('livestreams.id', ondelete='CASCADE'), nullable=False
    )
    emoji_name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
