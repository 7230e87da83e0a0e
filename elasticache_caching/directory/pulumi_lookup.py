"""Cluster directory for Pulumi programs: elasticache.get_cluster invokes."""

import logging

import pulumi
import pulumi_aws

from elasticache_caching.models import CacheClusterDescription, NodeEndpoint

logger = logging.getLogger(__name__)

NOT_FOUND_MARKERS = ("CacheClusterNotFound", "not found")


class PulumiClusterDirectory:
    """Looks up cache clusters through the AWS provider of the running Pulumi program.

    Only usable while a Pulumi program runs; include_node_info is ignored because
    the invoke always returns the node list.
    """

    def __init__(self, aws_provider: pulumi_aws.Provider | None = None) -> None:
        self._aws_provider = aws_provider

    def describe_cache_cluster(
        self, cluster_id: str, include_node_info: bool = True
    ) -> list[CacheClusterDescription]:
        logger.debug("looking up cache cluster %s", cluster_id)
        opts = pulumi.InvokeOptions(provider=self._aws_provider) if self._aws_provider else None
        try:
            cluster = pulumi_aws.elasticache.get_cluster(cluster_id=cluster_id, opts=opts)
        except Exception as e:
            # Invoke failures surface as plain exceptions carrying the provider message.
            if any(marker in str(e) for marker in NOT_FOUND_MARKERS):
                return []
            raise

        configuration_endpoint = None
        if cluster.cluster_address:
            configuration_endpoint = NodeEndpoint(host=cluster.cluster_address, port=int(cluster.port or 0))
        nodes = tuple(
            NodeEndpoint(host=n.address, port=int(n.port or 0))
            for n in (cluster.cache_nodes or [])
            if n.address
        )
        return [CacheClusterDescription(
            cluster_id=cluster.cluster_id or cluster_id,
            engine=cluster.engine,
            configuration_endpoint=configuration_endpoint,
            nodes=nodes,
        )]
