from abc import ABC, abstractmethod

from src.service.livestream.domain.entity.livestream_entity import Livestream


class ILivestreamCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, livestream: Livestream) -> Livestream:
        """Insert the livestream and its tag rows; returns it with the generated id."""
        pass
