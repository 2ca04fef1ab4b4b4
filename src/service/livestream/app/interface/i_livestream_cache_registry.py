from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Optional, Tuple

from src.service.livestream.domain.entity.livestream_entity import Livestream
from src.service.livestream.domain.entity.tag_entity import Tag
from src.service.livestream.domain.entity.user_entity import User
from src.service.livestream.domain.enum.entity_kind import EntityKind


class ILivestreamCacheRegistry(ABC):
    """
    In-process mirror of the entity families.

    None of these methods perform I/O or raise on a miss; a miss means the
    caller reads storage and writes the result back with `set`.
    """

    # ========== Generic primitives ==========

    @abstractmethod
    def get(self, kind: EntityKind, key: Any) -> Tuple[Optional[Any], bool]:
        pass

    @abstractmethod
    def all(self, kind: EntityKind) -> List[Any]:
        pass

    @abstractmethod
    def set(self, kind: EntityKind, key: Any, value: Any) -> None:
        pass

    @abstractmethod
    def invalidate(self, kind: EntityKind, key: Any) -> None:
        pass

    @abstractmethod
    def bulk_load(self, kind: EntityKind, records: Iterable[Tuple[Any, Any]]) -> int:
        pass

    @abstractmethod
    def init_all(self) -> None:
        """Reset every family to empty"""
        pass

    # ========== Entity helpers ==========

    @abstractmethod
    def remember_user(self, user: User) -> None:
        """Write both user families"""
        pass

    @abstractmethod
    def remember_livestream(self, livestream: Livestream) -> None:
        """Set livestream-by-id and append to the owner's list atomically"""
        pass

    @abstractmethod
    def load_livestreams(self, livestreams: Iterable[Livestream]) -> int:
        """Bulk load both livestream families, merging into owner lists already present"""
        pass

    @abstractmethod
    def get_tag(self, tag_id: int) -> Optional[Tag]:
        pass

    @abstractmethod
    def get_user_by_id(self, user_id: int) -> Optional[User]:
        pass

    @abstractmethod
    def get_user_by_name(self, name: str) -> Optional[User]:
        pass

    @abstractmethod
    def sizes(self) -> dict[str, int]:
        pass
