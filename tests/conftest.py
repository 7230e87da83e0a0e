"""Shared fakes: in-memory cluster and stack directories, patched memcached clients."""

from collections.abc import Iterator
from typing import Any
from unittest.mock import patch

import pytest
from pymemcache.serde import pickle_serde

from elasticache_caching.models import CacheClusterDescription, NodeEndpoint, StackResource

CACHE_CLUSTER_TYPE = "AWS::ElastiCache::CacheCluster"


class FakeClusterDirectory:
    """Cluster directory answering from a dict of cluster id -> descriptions."""

    def __init__(self, clusters: dict[str, list[CacheClusterDescription]] | None = None) -> None:
        self.clusters = clusters or {}
        self.calls: list[tuple[str, bool]] = []

    def add_memcached(self, cluster_id: str, host: str = "localhost", port: int = 11211) -> None:
        self.clusters[cluster_id] = [memcached_description(cluster_id, host, port)]

    def describe_cache_cluster(
        self, cluster_id: str, include_node_info: bool = True
    ) -> list[CacheClusterDescription]:
        self.calls.append((cluster_id, include_node_info))
        return list(self.clusters.get(cluster_id, []))


class FakeStackDirectory:
    cache_cluster_type = CACHE_CLUSTER_TYPE

    def __init__(self, resources: list[StackResource]) -> None:
        self.resources = resources
        self.queried_types: list[str] = []

    def resources_by_type(self, type_tag: str) -> list[StackResource]:
        self.queried_types.append(type_tag)
        return [r for r in self.resources if r.resource_type == type_tag]


class InMemoryMemcacheClient:
    """Dict-backed stand-in for a pymemcache client; values go through the serde only, like HashClient."""

    def __init__(self, serde: Any = pickle_serde) -> None:
        self.serde = serde
        self.servers: list[tuple[str, int]] = []
        self.expirations: dict[str, int] = {}
        self.closed = False
        self._contents: dict[str, tuple[bytes, int]] = {}

    def set(self, key: str, value: Any, expire: int = 0, noreply: bool | None = None) -> bool:
        self._contents[key] = self.serde.serialize(key, value)
        self.expirations[key] = expire
        return True

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self._contents:
            return default
        data, flags = self._contents[key]
        return self.serde.deserialize(key, data, flags)

    def add(self, key: str, value: Any, expire: int = 0, noreply: bool | None = None) -> bool:
        if key in self._contents:
            return noreply is not False
        return self.set(key, value, expire)

    def delete(self, key: str, noreply: bool | None = None) -> bool:
        return self._contents.pop(key, None) is not None

    def flush_all(self, delay: int = 0, noreply: bool | None = None) -> bool:
        self._contents.clear()
        return True

    def close(self) -> None:
        self.closed = True


def memcached_description(
    cluster_id: str, host: str = "localhost", port: int = 11211
) -> CacheClusterDescription:
    return CacheClusterDescription(
        cluster_id=cluster_id,
        engine="memcached",
        configuration_endpoint=NodeEndpoint(host=host, port=port),
        nodes=(NodeEndpoint(host=host, port=port),),
    )


@pytest.fixture
def directory() -> FakeClusterDirectory:
    d = FakeClusterDirectory()
    for cluster_id in ("firstCache", "secondCache", "sampleCacheOne", "sampleCacheTwo"):
        d.add_memcached(cluster_id)
    return d


@pytest.fixture
def stack_directory() -> FakeStackDirectory:
    return FakeStackDirectory([
        StackResource("sampleCacheOneLogical", "sampleCacheOne", CACHE_CLUSTER_TYPE),
        StackResource("sampleCacheTwoLogical", "sampleCacheTwo", CACHE_CLUSTER_TYPE),
        StackResource("AppBucket", "my-app-bucket", "AWS::S3::Bucket"),
    ])


@pytest.fixture
def mock_memcached() -> Iterator[Any]:
    """Replace HashClient with an in-memory client."""

    def _client(servers: list[tuple[str, int]], **kwargs: Any) -> InMemoryMemcacheClient:
        client = InMemoryMemcacheClient(serde=kwargs.get("serde") or pickle_serde)
        client.servers = servers
        return client

    with patch("elasticache_caching.engines.memcached.HashClient", side_effect=_client) as mock_cls:
        yield mock_cls
