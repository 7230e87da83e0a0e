"""Cache registry: resolved clusters bound to caches, frozen after build."""

import logging
from collections.abc import Iterator, Mapping, Sequence

from elasticache_caching.config import ClientOptions
from elasticache_caching.engines import ENGINES, Cache
from elasticache_caching.engines.registry import supported_engines
from elasticache_caching.errors import DuplicateNameError, UnsupportedEngineError
from elasticache_caching.models import ResolvedCluster

logger = logging.getLogger(__name__)


class CacheRegistry(Mapping[str, Cache]):
    """Read-only, insertion-ordered mapping of cache name to cache."""

    def __init__(self, caches: Sequence[Cache] = ()) -> None:
        entries: dict[str, Cache] = {}
        for cache in caches:
            if cache.name in entries:
                raise DuplicateNameError(cache.name)
            entries[cache.name] = cache
        self._caches = entries

    def __getitem__(self, name: str) -> Cache:
        return self._caches[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._caches)

    def __len__(self) -> int:
        return len(self._caches)

    def __repr__(self) -> str:
        return f"CacheRegistry({list(self._caches)!r})"

    @property
    def names(self) -> list[str]:
        return list(self._caches)

    def close(self) -> None:
        """Close every cache client."""
        for cache in self._caches.values():
            cache.close()


def _check_unique(resolved: Sequence[ResolvedCluster]) -> None:
    seen: set[str] = set()
    for cluster in resolved:
        if cluster.logical_name in seen:
            raise DuplicateNameError(cluster.logical_name)
        seen.add(cluster.logical_name)


def build_registry(
    resolved: Sequence[ResolvedCluster],
    options: ClientOptions | None = None,
) -> CacheRegistry:
    """Bind each resolved cluster to a cache; all-or-nothing."""
    _check_unique(resolved)
    options = options or ClientOptions()

    built: list[Cache] = []
    try:
        for cluster in resolved:
            engine = ENGINES.get(cluster.endpoint.engine)
            if engine is None:
                raise UnsupportedEngineError(
                    cluster.logical_name, cluster.endpoint.engine, supported_engines()
                )
            built.append(engine.factory(
                cluster.logical_name,
                cluster.endpoint,
                cluster.expiration,
                options,
            ))
    except Exception:
        for cache in built:
            cache.close()
        raise

    registry = CacheRegistry(built)
    logger.info("cache registry built: %s", ", ".join(registry.names) or "(empty)")
    return registry
