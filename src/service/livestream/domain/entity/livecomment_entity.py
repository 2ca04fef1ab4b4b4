from datetime import datetime, timezone
from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError


@attrs.define(frozen=True)
class Livecomment:
    user_id: int
    livestream_id: int
    comment: str
    tip: int
    created_at: int  # epoch seconds
    id: Optional[int] = None

    @classmethod
    def create(
        cls, *, user_id: int, livestream_id: int, comment: str, tip: int = 0
    ) -> 'Livecomment':
        if tip < 0:
            raise DomainError('tip must not be negative')

        return cls(
            user_id=user_id,
            livestream_id=livestream_id,
            comment=comment,
            tip=tip,
            created_at=int(datetime.now(timezone.utc).timestamp()),
        )

    def with_id(self, livecomment_id: int) -> 'Livecomment':
        return attrs.evolve(self, id=livecomment_id)
