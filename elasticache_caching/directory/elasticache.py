"""ElastiCache cluster directory backed by the boto3 elasticache client."""

import logging
from typing import Any

import boto3
from botocore.exceptions import ClientError

from elasticache_caching.models import CacheClusterDescription, NodeEndpoint

logger = logging.getLogger(__name__)

NOT_FOUND_CODES = ("CacheClusterNotFound", "CacheClusterNotFoundFault")


def _endpoint(raw: dict[str, Any] | None) -> NodeEndpoint | None:
    """Port 0 when the answer carries none; the resolver fills in the engine default."""
    if not raw or not raw.get("Address"):
        return None
    return NodeEndpoint(host=raw["Address"], port=int(raw.get("Port") or 0))


class ElastiCacheClusterDirectory:
    """Looks up cache clusters with DescribeCacheClusters."""

    def __init__(self, client: Any) -> None:
        self._client = client

    @classmethod
    def for_region(cls, region: str | None = None) -> "ElastiCacheClusterDirectory":
        return cls(boto3.client("elasticache", region_name=region))

    def describe_cache_cluster(
        self, cluster_id: str, include_node_info: bool = True
    ) -> list[CacheClusterDescription]:
        logger.debug("describing cache cluster %s", cluster_id)
        try:
            resp = self._client.describe_cache_clusters(
                CacheClusterId=cluster_id,
                ShowCacheNodeInfo=include_node_info,
            )
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in NOT_FOUND_CODES:
                return []
            raise

        descriptions = []
        for cluster in resp.get("CacheClusters", []):
            nodes = tuple(
                ep
                for ep in (_endpoint(n.get("Endpoint")) for n in cluster.get("CacheNodes", []))
                if ep is not None
            )
            descriptions.append(CacheClusterDescription(
                cluster_id=cluster.get("CacheClusterId", cluster_id),
                engine=cluster.get("Engine", ""),
                configuration_endpoint=_endpoint(cluster.get("ConfigurationEndpoint")),
                nodes=nodes,
            ))
        return descriptions
