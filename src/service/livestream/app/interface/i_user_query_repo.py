from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.livestream.domain.entity.user_entity import User


class IUserQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, user_id: int) -> Optional[User]:
        pass

    @abstractmethod
    async def get_by_name(self, *, name: str) -> Optional[User]:
        pass

    @abstractmethod
    async def list_all(self) -> List[User]:
        pass
