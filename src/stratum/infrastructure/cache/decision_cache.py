"""In-memory decision cache backed by cachetools."""

from collections.abc import Hashable
from uuid import UUID

from cachetools import TTLCache


class TTLDecisionCache:
    """Time-boxed memo of permission decisions.

    Keys are tuples whose first element is the user id, so a user's entries
    can be dropped without clearing everything.
    """

    def __init__(self, maxsize: int = 10_000, ttl: float = 30.0) -> None:
        self._cache: TTLCache = TTLCache(maxsize=maxsize, ttl=ttl)

    def get(self, key: Hashable) -> bool | None:
        return self._cache.get(key)

    def set(self, key: Hashable, allowed: bool) -> None:
        self._cache[key] = allowed

    def invalidate_user(self, user_id: UUID) -> None:
        for key in [k for k in list(self._cache.keys()) if isinstance(k, tuple) and k[0] == user_id]:
            self._cache.pop(key, None)

    def clear(self) -> None:
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)
