"""Cluster resolver: declared cache names or stack resources to running endpoints."""

import logging
from collections.abc import Sequence

from elasticache_caching.directory.base import ClusterDirectory, StackDirectory
from elasticache_caching.engines import ENGINES
from elasticache_caching.engines.registry import supported_engines
from elasticache_caching.errors import ResolutionError, UnsupportedEngineError
from elasticache_caching.models import (
    CacheClusterConfig,
    CacheClusterDescription,
    ClusterEndpoint,
    NodeEndpoint,
    ResolvedCluster,
)

logger = logging.getLogger(__name__)


def resolve_expiration(explicit: int | None, default: int | None) -> int:
    """Explicit per-cluster value, else the declared default, else 0 (no expiration)."""
    if explicit is not None:
        return explicit
    if default is not None:
        return default
    return 0


class ClusterResolver:
    """Resolves declared caches against a cluster directory.

    With explicit cluster configs, each name is both the exposed cache name and
    the cluster id queried. Without any, every cache cluster resource of the
    stack directory is used: exposed under its logical id, queried by its
    physical id. Lookups run one at a time in declared order.
    """

    def __init__(
        self,
        directory: ClusterDirectory,
        stack_directory: StackDirectory | None = None,
    ) -> None:
        self.directory = directory
        self.stack_directory = stack_directory

    def _targets(
        self,
        cluster_configs: Sequence[CacheClusterConfig],
    ) -> list[tuple[str, str, int | None]]:
        """(logical name, physical cluster id, explicit expiration) per declared cache."""
        if cluster_configs:
            return [(c.name, c.name, c.expiration) for c in cluster_configs]
        if self.stack_directory is None:
            raise ResolutionError(
                "no cache clusters declared and no stack directory configured"
            )
        resources = self.stack_directory.resources_by_type(
            self.stack_directory.cache_cluster_type
        )
        logger.info("found %d cache cluster(s) in stack", len(resources))
        for r in resources:
            if not r.physical_id:
                raise ResolutionError(f"stack resource {r.logical_id!r} has no physical id")
        return [(r.logical_id, r.physical_id, None) for r in resources]

    def _describe(self, cluster_id: str) -> CacheClusterDescription:
        matches = self.directory.describe_cache_cluster(cluster_id, include_node_info=True)
        if not matches:
            raise ResolutionError(f"cache cluster not found: {cluster_id!r}")
        if len(matches) > 1:
            raise ResolutionError(
                f"expected exactly one cache cluster for {cluster_id!r}, got {len(matches)}"
            )
        return matches[0]

    def resolve_cluster(self, cluster_id: str) -> ClusterEndpoint:
        """Query one physical cluster and validate its engine and endpoint."""
        description = self._describe(cluster_id)
        if description.engine not in ENGINES:
            raise UnsupportedEngineError(cluster_id, description.engine, supported_engines())
        endpoint = description.configuration_endpoint
        if endpoint is None:
            raise ResolutionError(
                f"cache cluster {cluster_id!r} has no configuration endpoint"
            )
        default_port = ENGINES[description.engine].default_port
        return ClusterEndpoint(
            host=endpoint.host,
            port=endpoint.port or default_port,
            engine=description.engine,
            nodes=tuple(
                n if n.port else NodeEndpoint(n.host, default_port) for n in description.nodes
            ),
        )

    def resolve(
        self,
        cluster_configs: Sequence[CacheClusterConfig],
        default_expiration: int | None = None,
    ) -> list[ResolvedCluster]:
        resolved = []
        for logical_name, cluster_id, expiration in self._targets(cluster_configs):
            endpoint = self.resolve_cluster(cluster_id)
            cluster = ResolvedCluster(
                logical_name=logical_name,
                endpoint=endpoint,
                expiration=resolve_expiration(expiration, default_expiration),
            )
            logger.info(
                "resolved cache %s (cluster %s) to %s:%s, engine=%s, expiration=%ds",
                logical_name,
                cluster_id,
                endpoint.host,
                endpoint.port,
                endpoint.engine,
                cluster.expiration,
            )
            resolved.append(cluster)
        return resolved
