"""Directory services: where cluster endpoints and stack resources come from.

The Pulumi-backed directories live in pulumi_lookup and pulumi_stack and are
imported on demand.
"""

from elasticache_caching.directory.base import ClusterDirectory, StackDirectory
from elasticache_caching.directory.cloudformation import CloudFormationStackDirectory
from elasticache_caching.directory.elasticache import ElastiCacheClusterDirectory

__all__ = [
    "ClusterDirectory",
    "CloudFormationStackDirectory",
    "ElastiCacheClusterDirectory",
    "StackDirectory",
]
