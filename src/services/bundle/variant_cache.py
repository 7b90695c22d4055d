from __future__ import annotations

import time
from threading import Lock
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.integrations.shopify.base import PlatformVariant


_MISSING = object()


class VariantCache:
    """In-memory TTL cache for SKU -> variant resolutions.

    Negative results (None) are cached too, so an unknown SKU does not
    trigger a full catalog scan on every request.
    """

    def __init__(self, *, ttl_seconds: int = 300, max_keys: int = 10000) -> None:
        self._items: dict[str, tuple[float, PlatformVariant | None]] = {}
        self._lock = Lock()
        self._ttl_seconds = ttl_seconds
        self._max_keys = max_keys

    @property
    def enabled(self) -> bool:
        return self._ttl_seconds > 0

    def get(self, sku: str) -> PlatformVariant | None | object:
        """Return the cached variant (possibly None) or _MISSING."""
        if not self.enabled:
            return _MISSING
        now = time.monotonic()
        with self._lock:
            entry = self._items.get(sku)
            if entry is None:
                return _MISSING
            expiry, variant = entry
            if expiry < now:
                self._items.pop(sku, None)
                return _MISSING
            return variant

    def set(self, sku: str, variant: PlatformVariant | None) -> None:
        if not self.enabled:
            return
        now = time.monotonic()
        with self._lock:
            self._items[sku] = (now + self._ttl_seconds, variant)
            self._prune(now)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def _prune(self, now: float) -> None:
        expired = [k for k, (exp, _) in self._items.items() if exp < now]
        for k in expired:
            self._items.pop(k, None)

        if len(self._items) <= self._max_keys:
            return

        overflow = len(self._items) - self._max_keys
        for k in list(self._items.keys())[:overflow]:
            self._items.pop(k, None)


def is_miss(value: object) -> bool:
    return value is _MISSING
