"""Per-key mutual exclusion for read-modify-write on sessions and matches."""

import threading
from contextlib import contextmanager
from typing import Iterator


class KeyedLocks:
    """Lazily created ``threading.Lock`` per key, guarded by a registry lock."""

    def __init__(self):
        self._locks: dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def get(self, key: str) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
        return lock

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        with self.get(key):
            yield

    def discard(self, key: str) -> None:
        """Forget the lock for a key that will not be mutated again."""
        with self._registry_lock:
            lock = self._locks.get(key)
            if lock is not None and not lock.locked():
                self._locks.pop(key, None)

    def __len__(self) -> int:
        return len(self._locks)
