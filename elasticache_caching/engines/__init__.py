"""Cache engines: importing this package registers every shipped engine."""

from elasticache_caching.engines import memcached  # noqa: F401 - register memcached
from elasticache_caching.engines.registry import ENGINES, Cache, EngineDef, register_engine

__all__ = ["ENGINES", "Cache", "EngineDef", "register_engine"]
