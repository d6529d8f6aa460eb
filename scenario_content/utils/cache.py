from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple


@dataclass
class CacheEntry:
    value: Any
    expires_at: float  # epoch seconds


class TTLCache:
    """
    In-memory TTL cache for parsed locale resources.
    - Thread-safe
    - Read-through via ``get_or_load``; loaders run outside the lock
    """

    def __init__(self, default_ttl_seconds: int = 3600, max_items: int = 64) -> None:
        self.default_ttl_seconds = int(default_ttl_seconds)
        self.max_items = int(max_items)
        self._lock = threading.Lock()
        self._store: Dict[str, CacheEntry] = {}

    def _now(self) -> float:
        return time.time()

    def get(self, key: str) -> Optional[Tuple[Any, int]]:
        """
        Returns (value, remaining_ttl_seconds) if present and not expired, else None.
        """
        with self._lock:
            entry = self._store.get(key)
            if not entry:
                return None
            if entry.expires_at <= self._now():
                self._store.pop(key, None)
                return None
            remaining = max(0, int(entry.expires_at - self._now()))
            return entry.value, remaining

    def set(self, key: str, value: Any, ttl_seconds: Optional[int] = None) -> None:
        ttl = self.default_ttl_seconds if ttl_seconds is None else int(ttl_seconds)
        expires_at = self._now() + max(1, ttl)

        with self._lock:
            if len(self._store) >= self.max_items and key not in self._store:
                # drop the entry closest to expiry
                oldest = min(self._store.items(), key=lambda kv: kv[1].expires_at)[0]
                self._store.pop(oldest, None)
            self._store[key] = CacheEntry(value=value, expires_at=expires_at)

    def get_or_load(self, key: str, loader: Callable[[], Any], ttl_seconds: Optional[int] = None) -> Any:
        hit = self.get(key)
        if hit is not None:
            return hit[0]
        value = loader()
        self.set(key, value, ttl_seconds)
        return value

    def invalidate(self, key: Optional[str] = None) -> None:
        with self._lock:
            if key is None:
                self._store.clear()
            else:
                self._store.pop(key, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)
