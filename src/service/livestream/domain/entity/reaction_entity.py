from datetime import datetime, timezone
from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError


@attrs.define(frozen=True)
class Reaction:
    user_id: int
    livestream_id: int
    emoji_name: str
    created_at: int  # epoch seconds
    id: Optional[int] = None

    @classmethod
    def create(cls, *, user_id: int, livestream_id: int, emoji_name: str) -> 'Reaction':
        if not emoji_name:
            raise DomainError('emoji_name is required')

        return cls(
            user_id=user_id,
            livestream_id=livestream_id,
            emoji_name=emoji_name,
            created_at=int(datetime.now(timezone.utc).timestamp()),
        )

    def with_id(self, reaction_id: int) -> 'Reaction':
        return attrs.evolve(self, id=reaction_id)
