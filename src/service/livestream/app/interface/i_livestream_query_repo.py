from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from src.service.livestream.domain.entity.livestream_entity import Livestream


class ILivestreamQueryRepo(ABC):
    """Repository interface for livestream read operations (tag ids included)"""

    @abstractmethod
    async def get_by_id(self, *, livestream_id: int) -> Optional[Livestream]:
        pass

    @abstractmethod
    async def list_by_user_id(self, *, user_id: int) -> List[Livestream]:
        """Owner's livestreams, oldest first"""
        pass

    @abstractmethod
    async def list_by_tag_ids(self, *, tag_ids: Sequence[int]) -> List[Livestream]:
        """Livestreams carrying any of the tags, newest first"""
        pass

    @abstractmethod
    async def list_latest(self, *, limit: Optional[int] = None) -> List[Livestream]:
        """Newest first"""
        pass

    @abstractmethod
    async def list_all(self) -> List[Livestream]:
        pass
