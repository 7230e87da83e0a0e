"""Stack directory backed by CloudFormation ListStackResources."""

import logging
from typing import Any

import boto3

from elasticache_caching.models import StackResource

logger = logging.getLogger(__name__)

CACHE_CLUSTER_TYPE = "AWS::ElastiCache::CacheCluster"


class CloudFormationStackDirectory:
    """Resources of one CloudFormation stack, listed once and then reused."""

    cache_cluster_type = CACHE_CLUSTER_TYPE

    def __init__(self, stack_name: str, client: Any) -> None:
        self.stack_name = stack_name
        self._client = client
        self._resources: list[StackResource] | None = None

    @classmethod
    def for_region(cls, stack_name: str, region: str | None = None) -> "CloudFormationStackDirectory":
        return cls(stack_name, boto3.client("cloudformation", region_name=region))

    def _load(self) -> list[StackResource]:
        resources = []
        paginator = self._client.get_paginator("list_stack_resources")
        for page in paginator.paginate(StackName=self.stack_name):
            for r in page.get("StackResourceSummaries", []):
                resources.append(StackResource(
                    logical_id=r["LogicalResourceId"],
                    physical_id=r.get("PhysicalResourceId", ""),
                    resource_type=r["ResourceType"],
                ))
        logger.debug("stack %s has %d resources", self.stack_name, len(resources))
        return resources

    def resources_by_type(self, type_tag: str) -> list[StackResource]:
        if self._resources is None:
            self._resources = self._load()
        return [r for r in self._resources if r.resource_type == type_tag]
