"""
Per-Group Cache Store

캐시 그룹별 module id -> compiled module record 저장소.

- 그룹 항목은 lazy 생성 (첫 성공 빌드가 모듈을 보고할 때)
- eviction 없음: 프로세스 수명 동안 누적
- 같은 그룹 안에서는 한 번에 하나의 빌드만 실행되므로 락이 없다
"""

from typing import Any

from multibuild.domain.cache_groups import CacheGroupRegistry
from multibuild.domain.models import CacheGroupKey, CacheSeed


class GroupCache:
    """Cached module records of one cache group."""

    __slots__ = ("modules",)

    def __init__(self):
        self.modules: dict[str, Any] = {}

    def seed(self) -> CacheSeed:
        return CacheSeed.of(self.modules.values())

    def __len__(self) -> int:
        return len(self.modules)


class GroupCacheStore:
    """Cache group -> GroupCache."""

    def __init__(self, registry: CacheGroupRegistry):
        self._registry = registry
        self._caches: dict[CacheGroupKey, GroupCache] = {}

    def get_cache(self, target: str, init: bool = False) -> GroupCache:
        """
        Return the cache of the target's group.

        An empty cache is created when the group has none yet; it is only
        stored when `init` is true, so peeking never commits an empty entry.
        """
        group = self._registry.group_of(target)
        cache = self._caches.get(group)
        if cache is None:
            cache = GroupCache()
            if init:
                self._caches[group] = cache
        return cache

    def seed_for(self, target: str) -> CacheSeed:
        return self.get_cache(target).seed()

    def record_module(self, group: CacheGroupKey, module_id: str, record: Any) -> None:
        cache = self._caches.get(group)
        if cache is None:
            cache = self._caches[group] = GroupCache()
        cache.modules[module_id] = record

    def has_group(self, group: CacheGroupKey) -> bool:
        return group in self._caches

    def size(self, group: CacheGroupKey) -> int:
        cache = self._caches.get(group)
        return len(cache) if cache is not None else 0

    def module_ids(self, group: CacheGroupKey) -> set[str]:
        cache = self._caches.get(group)
        return set(cache.modules) if cache is not None else set()
