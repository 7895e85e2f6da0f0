import threading
from contextlib import contextmanager
from typing import Dict, Hashable, Iterator, List, Set

from schemas.usage import ContentState


class ContentGuard:
    """Tracks lazy content generation per child entity.

    At most one generation may be in flight for a given key. Different keys
    proceed independently. Aggregate locks serialize the read-merge-write of a
    parent document so sibling fills do not overwrite each other.

    Only keys in flight and locks someone holds or waits on are kept; whether
    content is done is read from the stored document.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._in_flight: Set[Hashable] = set()
        # key -> [lock, holders and waiters]
        self._aggregate_locks: Dict[Hashable, List] = {}

    def state(self, key: Hashable) -> ContentState:
        with self._lock:
            return ContentState.IN_FLIGHT if key in self._in_flight else ContentState.IDLE

    def try_begin(self, key: Hashable) -> bool:
        """Claim ``key`` for generation; False if someone already holds it."""
        with self._lock:
            if key in self._in_flight:
                return False
            self._in_flight.add(key)
            return True

    def finish(self, key: Hashable) -> None:
        with self._lock:
            self._in_flight.discard(key)

    @contextmanager
    def aggregate_lock(self, key: Hashable) -> Iterator[None]:
        with self._lock:
            entry = self._aggregate_locks.get(key)
            if entry is None:
                entry = self._aggregate_locks[key] = [threading.Lock(), 0]
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._lock:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._aggregate_locks[key]

    def is_idle(self) -> bool:
        with self._lock:
            return not self._in_flight and not self._aggregate_locks


content_guard = ContentGuard()
