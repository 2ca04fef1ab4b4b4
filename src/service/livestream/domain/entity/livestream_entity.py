from typing import Iterable, Optional

import attrs

from src.platform.exception.exceptions import DomainError


def _unique_tag_ids(tag_ids: Iterable[int]) -> tuple[int, ...]:
    # Keeps first-seen order; livestream_tags has one row per (livestream, tag)
    return tuple(dict.fromkeys(int(tag_id) for tag_id in tag_ids))


@attrs.define(frozen=True)
class Livestream:
    """
    A reserved broadcast.

    Created only by the reservation use case and never mutated afterwards, so
    instances are frozen and safe to share through the entity cache.
    """

    user_id: int
    title: str
    description: str
    playlist_url: str
    thumbnail_url: str
    start_at: int
    end_at: int
    tag_ids: tuple[int, ...] = attrs.field(factory=tuple, converter=_unique_tag_ids)
    id: Optional[int] = None  # None until persisted

    @classmethod
    def create(
        cls,
        *,
        user_id: int,
        title: str,
        description: str,
        playlist_url: str,
        thumbnail_url: str,
        start_at: int,
        end_at: int,
        tag_ids: Iterable[int] = (),
    ) -> 'Livestream':
        if start_at >= end_at:
            raise DomainError('start_at must be earlier than end_at')

        return cls(
            user_id=user_id,
            title=title,
            description=description,
            playlist_url=playlist_url,
            thumbnail_url=thumbnail_url,
            start_at=start_at,
            end_at=end_at,
            tag_ids=tag_ids,
        )

    def with_id(self, livestream_id: int) -> 'Livestream':
        return attrs.evolve(self, id=livestream_id)
