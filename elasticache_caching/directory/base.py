"""Directory protocols: cluster lookups and stack resource listings."""

from typing import Protocol

from elasticache_caching.models import CacheClusterDescription, StackResource


class ClusterDirectory(Protocol):
    """Maps a cluster identifier to the clusters the directory knows under that id."""

    def describe_cache_cluster(
        self, cluster_id: str, include_node_info: bool = True
    ) -> list[CacheClusterDescription]:
        """Return matching clusters; an unknown id returns an empty list."""
        ...


class StackDirectory(Protocol):
    """Lists the resources of one deployed stack."""

    cache_cluster_type: str

    def resources_by_type(self, type_tag: str) -> list[StackResource]:
        ...
