from sqlalchemy import BigInteger, CheckConstraint, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class LivestreamModel(Base):
    __tablename__ = 'livestreams'
    __table_args__ = (CheckConstraint('start_at < end_at', name='ck_livestreams_range'),)

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey('users.id'), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    playlist_url: Mapped[str] = mapped_column(String(255), nullable=False)
    thumbnail_url: Mapped[str] = mapped_column(String(255), nullable=False)
    start_at: Mapped[int] = mapped_column(BigInteger, nullable=False)  # epoch seconds
    end_at: Mapped[int] = mapped_column(BigInteger, nullable=False)


class LivestreamTagModel(Base):
    __tablename__ = 'livestream_tags'
    __table_args__ = (
        Index('ix_livestream_tags_tag_id_livestream_id', 'tag_id', 'livestream_id'),
    )

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    livestream_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey('livestreams.id', ondelete='CASCADE'), nullable=False, index=True
    )
    tag_id: Mapped[int] = mapped_column(BigInteger, ForeignKey('tags.id'), nullable=False)
