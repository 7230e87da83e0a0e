"""ElastiCache memcached clusters wired into named caches."""

from elasticache_caching.config import ClientOptions, ElastiCacheConfig, load_elasticache_config
from elasticache_caching.context import CachingContext, enable_elasticache
from elasticache_caching.errors import (
    CacheNotFoundError,
    DuplicateNameError,
    ElastiCacheError,
    ResolutionError,
    UnsupportedEngineError,
)
from elasticache_caching.interceptor import CacheResolver
from elasticache_caching.models import CacheClusterConfig
from elasticache_caching.registry import CacheRegistry, build_registry
from elasticache_caching.resolver import ClusterResolver

__all__ = [
    "CacheClusterConfig",
    "CacheNotFoundError",
    "CacheRegistry",
    "CacheResolver",
    "CachingContext",
    "ClientOptions",
    "ClusterResolver",
    "DuplicateNameError",
    "ElastiCacheConfig",
    "ElastiCacheError",
    "ResolutionError",
    "UnsupportedEngineError",
    "build_registry",
    "enable_elasticache",
    "load_elasticache_config",
]
