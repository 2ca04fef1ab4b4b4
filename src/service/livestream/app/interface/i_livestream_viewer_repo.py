from abc import ABC, abstractmethod


class ILivestreamViewerRepo(ABC):
    @abstractmethod
    async def enter(self, *, user_id: int, livestream_id: int, created_at: int) -> None:
        pass

    @abstractmethod
    async def exit(self, *, user_id: int, livestream_id: int) -> int:
        """Delete the user's viewing rows for the livestream; returns how many were removed."""
        pass
