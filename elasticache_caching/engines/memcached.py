"""Memcached engine: caches backed by a pymemcache HashClient."""

import logging
from typing import Any

from pymemcache import serde
from pymemcache.client.hash import HashClient

from elasticache_caching.config import ClientOptions
from elasticache_caching.engines.registry import register_engine
from elasticache_caching.models import ClusterEndpoint

logger = logging.getLogger(__name__)

MEMCACHED_PORT = 11211


class MemcachedCache:
    """Named cache over a memcached client; every write carries the cache expiration.

    Expirations are relative seconds, at most 30 days; memcached treats anything
    larger as an absolute unix timestamp, so config and models reject it.
    """

    def __init__(self, name: str, client: Any, expiration: int = 0) -> None:
        self.name = name
        self.client = client
        self.expiration = expiration

    def __repr__(self) -> str:
        return f"MemcachedCache(name={self.name!r}, expiration={self.expiration})"

    @staticmethod
    def _key(key: Any) -> str:
        return str(key)

    def get(self, key: Any, default: Any = None) -> Any:
        return self.client.get(self._key(key), default)

    def put(self, key: Any, value: Any) -> None:
        self.client.set(self._key(key), value, expire=self.expiration)

    def put_if_absent(self, key: Any, value: Any) -> Any:
        """Store value unless the key exists; return the existing value, or None if stored."""
        k = self._key(key)
        if self.client.add(k, value, expire=self.expiration, noreply=False):
            return None
        return self.client.get(k)

    def evict(self, key: Any) -> None:
        self.client.delete(self._key(key))

    def clear(self) -> None:
        self.client.flush_all()

    def close(self) -> None:
        self.client.close()


@register_engine("memcached", default_port=MEMCACHED_PORT)
def create_memcached_cache(
    name: str,
    endpoint: ClusterEndpoint,
    expiration: int,
    options: ClientOptions,
) -> MemcachedCache:
    """Bind a cache to every node of the cluster (or its configuration endpoint)."""
    servers = endpoint.servers
    client = HashClient(
        servers,
        serde=serde.pickle_serde,
        connect_timeout=options.connect_timeout,
        timeout=options.timeout,
        use_pooling=options.max_pool_size is not None,
        max_pool_size=options.max_pool_size,
    )
    logger.debug("memcached client for %s bound to %s", name, servers)
    return MemcachedCache(name=name, client=client, expiration=expiration)
