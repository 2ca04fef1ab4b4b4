from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.livestream.domain.entity.tag_entity import Tag


class ITagQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, tag_id: int) -> Optional[Tag]:
        pass

    @abstractmethod
    async def list_all(self) -> List[Tag]:
        pass
