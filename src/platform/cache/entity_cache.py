"""
In-process entity cache

Mirror of rows that are read far more often than written. There is no TTL and
no eviction: an entry is either the last committed value this process knows
about, or absent. Callers treat a miss as "go to the database, then `set`".

Concurrency:
- `get` / `all` / `size` share a read lock and run in parallel with each other
- `set` / `update` / `delete` / `init` / `bulk_load` take the write lock
- no method performs I/O, so holding the lock never waits on the network

The lock is a thread lock rather than an anyio lock so the cache stays safe
when use cases run on worker threads (BlockingPortal, `anyio.to_thread`).
"""

from contextlib import contextmanager
import threading
from typing import Callable, Generic, Hashable, Iterable, Iterator, Optional, Tuple, TypeVar


K = TypeVar('K', bound=Hashable)
V = TypeVar('V')


class ReadWriteLock:
    """
    Writer-preferring reader/writer lock.

    New readers queue behind a waiting writer so a steady stream of `get`
    calls cannot starve `set`.

    Waiting blocks the calling thread, event loop included. Holders run only
    synchronous code and never await while holding either side, so a
    coroutine that takes the lock always releases it before yielding.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer_active = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer_active or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer_active or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer_active = True
        try:
            yield
        finally:
            with self._cond:
                self._writer_active = False
                self._cond.notify_all()


class EntityCache(Generic[K, V]):
    def __init__(self, *, name: str = 'entity') -> None:
        self.name = name
        self._lock = ReadWriteLock()
        self._items: dict[K, V] = {}

    def get(self, key: K) -> Tuple[Optional[V], bool]:
        with self._lock.read():
            if key in self._items:
                return self._items[key], True
            return None, False

    def set(self, key: K, value: V) -> None:
        with self._lock.write():
            self._items[key] = value

    def update(self, key: K, mutate: Callable[[Optional[V]], V]) -> V:
        """
        Atomic read-modify-write.

        `mutate` receives the current value (None on a miss) and returns the
        value to store. It runs under the write lock, so it must be pure and fast.
        """
        with self._lock.write():
            value = mutate(self._items.get(key))
            self._items[key] = value
            return value

    def delete(self, key: K) -> None:
        with self._lock.write():
            self._items.pop(key, None)

    def all(self) -> list[V]:
        """Point-in-time copy of every cached value."""
        with self._lock.read():
            return list(self._items.values())

    def init(self) -> None:
        with self._lock.write():
            self._items = {}

    def bulk_load(self, items: Iterable[Tuple[K, V]]) -> int:
        """Overwrite entries from a full table read; returns the number of keys written."""
        loaded = dict(items)
        with self._lock.write():
            self._items.update(loaded)
        return len(loaded)

    def size(self) -> int:
        with self._lock.read():
            return len(self._items)

    def __len__(self) -> int:
        return self.size()

    def __repr__(self) -> str:
        return f'<EntityCache(name={self.name}, size={self.size()})>'
