"""
Livestream Cache Registry

One EntityCache per family, held by a DI singleton. Keys:
- tag: tag id -> Tag
- user_by_id: user id -> User
- user_by_name: user name -> User
- livestream_by_id: livestream id -> Livestream
- livestreams_by_owner: user id -> tuple[Livestream, ...] ordered by id

Owner lists are immutable tuples, replaced under the cache's write lock, so a
reader holding an older tuple never sees it change.
"""

from typing import Any, Iterable, List, Optional, Tuple

from src.platform.cache.entity_cache import EntityCache
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reservation_metrics import metrics
from src.service.livestream.app.interface.i_livestream_cache_registry import (
    ILivestreamCacheRegistry,
)
from src.service.livestream.domain.entity.livestream_entity import Livestream
from src.service.livestream.domain.entity.tag_entity import Tag
from src.service.livestream.domain.entity.user_entity import User
from src.service.livestream.domain.enum.entity_kind import EntityKind


def _merge_livestreams(
    current: Optional[Tuple[Livestream, ...]], incoming: Iterable[Livestream]
) -> Tuple[Livestream, ...]:
    merged = {item.id: item for item in current or ()}
    for livestream in incoming:
        merged.setdefault(livestream.id, livestream)
    return tuple(sorted(merged.values(), key=lambda item: item.id or 0))


class LivestreamCacheRegistry(ILivestreamCacheRegistry):
    def __init__(self) -> None:
        self._caches: dict[EntityKind, EntityCache] = {
            kind: EntityCache(name=kind.value) for kind in EntityKind
        }

    def cache(self, kind: EntityKind) -> EntityCache:
        return self._caches[EntityKind(kind)]

    # ========== Generic primitives ==========

    def get(self, kind: EntityKind, key: Any) -> Tuple[Optional[Any], bool]:
        value, found = self.cache(kind).get(key)
        metrics.record_cache_lookup(family=EntityKind(kind).value, hit=found)
        return value, found

    def all(self, kind: EntityKind) -> List[Any]:
        return self.cache(kind).all()

    def set(self, kind: EntityKind, key: Any, value: Any) -> None:
        self.cache(kind).set(key, value)
        self._refresh_size(kind)

    def invalidate(self, kind: EntityKind, key: Any) -> None:
        self.cache(kind).delete(key)
        self._refresh_size(kind)
        Logger.base.debug(f'🧹 [CACHE] Invalidated {EntityKind(kind).value}:{key}')

    def bulk_load(self, kind: EntityKind, records: Iterable[Tuple[Any, Any]]) -> int:
        loaded = self.cache(kind).bulk_load(records)
        self._refresh_size(kind)
        Logger.base.debug(f'📦 [CACHE] Bulk loaded {loaded} into {EntityKind(kind).value}')
        return loaded

    def init_all(self) -> None:
        for kind, cache in self._caches.items():
            cache.init()
            self._refresh_size(kind)
        Logger.base.info('🧹 [CACHE] All cache families reset')

    # ========== Entity helpers ==========

    def remember_user(self, user: User) -> None:
        self.set(EntityKind.USER_BY_ID, user.id, user)
        self.set(EntityKind.USER_BY_NAME, user.name, user)

    def remember_livestream(self, livestream: Livestream) -> None:
        if livestream.id is None:
            raise ValueError('Only persisted livestreams can be cached')

        self.set(EntityKind.LIVESTREAM_BY_ID, livestream.id, livestream)
        self.cache(EntityKind.LIVESTREAMS_BY_OWNER).update(
            livestream.user_id, lambda current: _merge_livestreams(current, (livestream,))
        )
        self._refresh_size(EntityKind.LIVESTREAMS_BY_OWNER)

    def load_livestreams(self, livestreams: Iterable[Livestream]) -> int:
        by_owner: dict[int, list[Livestream]] = {}
        by_id: list[Tuple[int, Livestream]] = []
        for livestream in livestreams:
            by_id.append((livestream.id, livestream))
            by_owner.setdefault(livestream.user_id, []).append(livestream)

        loaded = self.bulk_load(EntityKind.LIVESTREAM_BY_ID, by_id)

        # Merge: an append committed while the table was being read must survive
        owner_cache = self.cache(EntityKind.LIVESTREAMS_BY_OWNER)
        for user_id, items in by_owner.items():
            owner_cache.update(
                user_id, lambda current, items=items: _merge_livestreams(current, items)
            )
        self._refresh_size(EntityKind.LIVESTREAMS_BY_OWNER)

        Logger.base.debug(f'📦 [CACHE] Loaded owner lists for {len(by_owner)} users')
        return loaded

    def get_tag(self, tag_id: int) -> Optional[Tag]:
        tag, _ = self.get(EntityKind.TAG, tag_id)
        return tag

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        user, _ = self.get(EntityKind.USER_BY_ID, user_id)
        return user

    def get_user_by_name(self, name: str) -> Optional[User]:
        user, _ = self.get(EntityKind.USER_BY_NAME, name)
        return user

    def sizes(self) -> dict[str, int]:
        return {kind.value: cache.size() for kind, cache in self._caches.items()}

    def _refresh_size(self, kind: EntityKind) -> None:
        metrics.set_cache_size(family=EntityKind(kind).value, size=self.cache(kind).size())
