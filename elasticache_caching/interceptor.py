"""Cache resolver consulted by calling code to look up caches by name."""

from collections.abc import Iterable

from elasticache_caching.engines.registry import Cache
from elasticache_caching.errors import CacheNotFoundError
from elasticache_caching.registry import CacheRegistry


class CacheResolver:
    """Resolves requested cache names against a registry it does not own."""

    def __init__(self, registry: CacheRegistry) -> None:
        self._registry = registry

    @property
    def cache_names(self) -> list[str]:
        return self._registry.names

    def get_cache(self, name: str) -> Cache:
        """Return the named cache; raise CacheNotFoundError listing available names if missing."""
        if name not in self._registry:
            raise CacheNotFoundError(name, self._registry.names)
        return self._registry[name]

    def resolve_caches(self, names: Iterable[str]) -> list[Cache]:
        """Return the caches for names, in requested order."""
        return [self.get_cache(name) for name in names]
