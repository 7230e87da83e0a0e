"""Caching context: owns the registry built at startup and the resolver handed to callers."""

from dataclasses import dataclass, field
import logging
from typing import Any

from elasticache_caching.config import ElastiCacheConfig, StackConfig
from elasticache_caching.directory.base import ClusterDirectory, StackDirectory
from elasticache_caching.directory.cloudformation import CloudFormationStackDirectory
from elasticache_caching.directory.elasticache import ElastiCacheClusterDirectory
from elasticache_caching.directory.pulumi_stack import PulumiStackDirectory
from elasticache_caching.interceptor import CacheResolver
from elasticache_caching.models import ResolvedCluster
from elasticache_caching.registry import CacheRegistry, build_registry
from elasticache_caching.resolver import ClusterResolver

logger = logging.getLogger(__name__)


@dataclass
class CachingContext:
    """Registry plus resolver; closing the context closes every cache client."""

    config: ElastiCacheConfig
    registry: CacheRegistry
    resolved: list[ResolvedCluster] = field(default_factory=list)
    closed: bool = False

    @property
    def cache_resolver(self) -> CacheResolver:
        return CacheResolver(self.registry)

    def close(self) -> None:
        if self.closed:
            return
        self.registry.close()
        self.closed = True
        logger.info("caching context closed")

    def __enter__(self) -> "CachingContext":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def create_stack_directory(stack: StackConfig, region: str | None = None) -> StackDirectory:
    """Build the stack directory declared in config."""
    if stack.provider == "cloudformation":
        return CloudFormationStackDirectory.for_region(stack.name, region)
    if stack.provider == "pulumi":
        if stack.export_file:
            return PulumiStackDirectory.from_export_file(stack.export_file)
        if not stack.project:
            raise SystemExit("stack.project is required for a live Pulumi stack")
        return PulumiStackDirectory.from_stack(stack.name, stack.project)
    raise ValueError(f"Unknown stack provider: {stack.provider}")


def resolve_clusters(
    config: ElastiCacheConfig,
    directory: ClusterDirectory | None = None,
    stack_directory: StackDirectory | None = None,
) -> list[ResolvedCluster]:
    """Resolve declared caches; directories not given are created from config."""
    if directory is None:
        directory = ElastiCacheClusterDirectory.for_region(config.region)
    if stack_directory is None and not config.clusters and config.stack is not None:
        stack_directory = create_stack_directory(config.stack, config.region)
    resolver = ClusterResolver(directory, stack_directory)
    return resolver.resolve(config.clusters, config.default_expiration)


def enable_elasticache(
    config: ElastiCacheConfig,
    directory: ClusterDirectory | None = None,
    stack_directory: StackDirectory | None = None,
) -> CachingContext:
    """Resolve declared caches and build the registry; any failure aborts startup."""
    resolved = resolve_clusters(config, directory, stack_directory)
    registry = build_registry(resolved, config.client)
    return CachingContext(config=config, registry=registry, resolved=resolved)
