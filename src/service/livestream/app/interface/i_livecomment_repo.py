from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.livestream.domain.entity.livecomment_entity import Livecomment


class ILivecommentRepo(ABC):
    @abstractmethod
    async def create(self, *, livecomment: Livecomment) -> Livecomment:
        pass

    @abstractmethod
    async def list_by_livestream_id(
        self, *, livestream_id: int, limit: Optional[int] = None
    ) -> List[Livecomment]:
        """Newest first."""
        pass
