"""
Time-boxed client caches.

Page-1 search results are kept for 5 minutes per page size and filter combination,
never while a free-text search is active. The signed-in user's record is
kept for 24 hours. There is no invalidation beyond the TTL and ``clear``.
"""
import time
from typing import Any, Callable, Dict, Optional, Tuple

PAGE_CACHE_TTL_SECONDS = 5 * 60
USER_CACHE_TTL_SECONDS = 24 * 60 * 60


class _TimedSlot:
    def __init__(self, ttl: float, clock: Callable[[], float]):
        self.ttl = ttl
        self.clock = clock
        self._entries: Dict[Any, Tuple[float, Any]] = {}

    def get(self, key: Any) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        stored_at, value = entry
        if self.clock() - stored_at >= self.ttl:
            del self._entries[key]
            return None
        return value

    def put(self, key: Any, value: Any) -> None:
        self._entries[key] = (self.clock(), value)

    def clear(self) -> None:
        self._entries.clear()


class ResumePageCache:
    def __init__(self, ttl: float = PAGE_CACHE_TTL_SECONDS, clock: Callable[[], float] = time.monotonic):
        self._pages = _TimedSlot(ttl, clock)

    @staticmethod
    def cacheable(page: int, search: str) -> bool:
        return page == 1 and not (search or "").strip()

    def get(self, page: int, limit: int, search: str, experience: str, profession: str) -> Optional[dict]:
        if not self.cacheable(page, search):
            return None
        return self._pages.get(("page", limit, experience, profession))

    def put(self, page: int, limit: int, search: str, experience: str, profession: str, payload: dict) -> bool:
        if not self.cacheable(page, search):
            return False
        self._pages.put(("page", limit, experience, profession), payload)
        return True

    def get_full_list(self) -> Optional[list]:
        return self._pages.get("all")

    def put_full_list(self, resumes: list) -> None:
        self._pages.put("all", resumes)

    def clear(self) -> None:
        self._pages.clear()


class CurrentUserCache:
    def __init__(self, ttl: float = USER_CACHE_TTL_SECONDS, clock: Callable[[], float] = time.monotonic):
        self._slot = _TimedSlot(ttl, clock)

    def get(self) -> Optional[dict]:
        return self._slot.get("user")

    def put(self, user: dict) -> None:
        self._slot.put("user", user)

    def clear(self) -> None:
        self._slot.clear()
