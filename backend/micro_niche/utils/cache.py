import time
from dataclasses import dataclass
from typing import Callable, Dict, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass
class _Entry(Generic[T]):
    value: T
    expires_at: float


class ExpiringCache(Generic[T]):
    """
    Process-local key/value map with a per-entry TTL and a size cap.

    Best-effort only: every instance of the service has its own map and
    nothing may rely on a hit for correctness.

    Args:
        clock: Monotonic seconds source
        max_size: Maximum number of live entries; the oldest is evicted first
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic, max_size: int = 1024):
        if max_size <= 0:
            raise ValueError("max_size must be positive")
        self._clock = clock
        self.max_size = max_size
        self._store: Dict[str, _Entry[T]] = {}

    def get(self, key: str) -> Optional[T]:
        hit = self._store.get(key)
        if hit is None:
            return None

        if self._clock() >= hit.expires_at:
            del self._store[key]
            return None

        return hit.value

    def set(self, key: str, value: T, ttl_seconds: float) -> None:
        if ttl_seconds <= 0:
            return

        now = self._clock()
        self._store.pop(key, None)
        self._purge_expired(now)

        # Dict order is insertion order, so the first key is the oldest.
        while len(self._store) >= self.max_size:
            del self._store[next(iter(self._store))]

        self._store[key] = _Entry(value=value, expires_at=now + ttl_seconds)

    def get_or_set(self, key: str, ttl_seconds: float, factory: Callable[[], T]) -> T:
        cached = self.get(key)
        if cached is not None:
            return cached

        value = factory()
        self.set(key, value, ttl_seconds)
        return value

    def delete(self, key: str) -> None:
        self._store.pop(key, None)

    def clear(self) -> None:
        self._store.clear()

    def _purge_expired(self, now: float) -> None:
        expired = [k for k, entry in self._store.items() if now >= entry.expires_at]
        for k in expired:
            del self._store[k]

    def __len__(self) -> int:
        return len(self._store)
