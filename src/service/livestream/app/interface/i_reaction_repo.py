from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.livestream.domain.entity.reaction_entity import Reaction


class IReactionRepo(ABC):
    @abstractmethod
    async def create(self, *, reaction: Reaction) -> Reaction:
        pass

    @abstractmethod
    async def list_by_livestream_id(
        self, *, livestream_id: int, limit: Optional[int] = None
    ) -> List[Reaction]:
        """Newest first."""
        pass
