"""Tests for the cluster resolver."""

import pytest

from elasticache_caching.errors import ResolutionError, UnsupportedEngineError
from elasticache_caching.models import (
    CacheClusterConfig,
    CacheClusterDescription,
    NodeEndpoint,
    StackResource,
)
from elasticache_caching.resolver import ClusterResolver, resolve_expiration
from tests.conftest import CACHE_CLUSTER_TYPE, FakeClusterDirectory, FakeStackDirectory, memcached_description


def test_explicit_clusters_resolve_in_declared_order(directory: FakeClusterDirectory) -> None:
    """Each declared name is both the exposed name and the queried cluster id."""
    resolver = ClusterResolver(directory)

    resolved = resolver.resolve([CacheClusterConfig("secondCache"), CacheClusterConfig("firstCache")])

    assert [r.logical_name for r in resolved] == ["secondCache", "firstCache"]
    assert directory.calls == [("secondCache", True), ("firstCache", True)]
    assert resolved[0].endpoint.host == "localhost"
    assert resolved[0].endpoint.port == 11211
    assert resolved[0].endpoint.engine == "memcached"


def test_explicit_clusters_ignore_stack_directory(
    directory: FakeClusterDirectory,
    stack_directory: FakeStackDirectory,
) -> None:
    resolver = ClusterResolver(directory, stack_directory)

    resolved = resolver.resolve([CacheClusterConfig("firstCache")])

    assert [r.logical_name for r in resolved] == ["firstCache"]
    assert stack_directory.queried_types == []


def test_stack_resources_used_without_explicit_clusters(
    directory: FakeClusterDirectory,
    stack_directory: FakeStackDirectory,
) -> None:
    """Stack cache clusters are exposed by logical id and queried by physical id."""
    resolver = ClusterResolver(directory, stack_directory)

    resolved = resolver.resolve([], default_expiration=23)

    assert stack_directory.queried_types == [CACHE_CLUSTER_TYPE]
    assert [r.logical_name for r in resolved] == ["sampleCacheOneLogical", "sampleCacheTwoLogical"]
    assert directory.calls == [("sampleCacheOne", True), ("sampleCacheTwo", True)]
    assert [r.expiration for r in resolved] == [23, 23]


def test_no_clusters_and_no_stack_directory(directory: FakeClusterDirectory) -> None:
    with pytest.raises(ResolutionError, match="no stack directory"):
        ClusterResolver(directory).resolve([])


def test_empty_stack_resolves_nothing(directory: FakeClusterDirectory) -> None:
    assert ClusterResolver(directory, FakeStackDirectory([])).resolve([]) == []


def test_cluster_not_found() -> None:
    resolver = ClusterResolver(FakeClusterDirectory())
    with pytest.raises(ResolutionError, match="not found: 'firstCache'"):
        resolver.resolve([CacheClusterConfig("firstCache")])


def test_ambiguous_cluster() -> None:
    directory = FakeClusterDirectory({
        "firstCache": [memcached_description("firstCache"), memcached_description("firstCache", port=11212)],
    })
    with pytest.raises(ResolutionError, match="exactly one"):
        ClusterResolver(directory).resolve([CacheClusterConfig("firstCache")])


def test_unsupported_engine() -> None:
    directory = FakeClusterDirectory({
        "sessions": [CacheClusterDescription(
            cluster_id="sessions",
            engine="redis",
            nodes=(NodeEndpoint("sessions.0001.use1.cache.amazonaws.com", 6379),),
        )],
    })
    with pytest.raises(UnsupportedEngineError) as exc_info:
        ClusterResolver(directory).resolve([CacheClusterConfig("sessions")])
    assert exc_info.value.engine == "redis"
    assert exc_info.value.cluster_id == "sessions"
    assert "memcached" in str(exc_info.value)


def test_memcached_without_configuration_endpoint() -> None:
    directory = FakeClusterDirectory({
        "firstCache": [CacheClusterDescription(cluster_id="firstCache", engine="memcached")],
    })
    with pytest.raises(ResolutionError, match="no configuration endpoint"):
        ClusterResolver(directory).resolve([CacheClusterConfig("firstCache")])


def test_failure_stops_remaining_lookups(directory: FakeClusterDirectory) -> None:
    """A failed lookup aborts resolution; later clusters are not queried."""
    with pytest.raises(ResolutionError):
        ClusterResolver(directory).resolve([
            CacheClusterConfig("missing"),
            CacheClusterConfig("firstCache"),
        ])
    assert directory.calls == [("missing", True)]


def test_resolved_endpoint_keeps_nodes() -> None:
    directory = FakeClusterDirectory({
        "firstCache": [CacheClusterDescription(
            cluster_id="firstCache",
            engine="memcached",
            configuration_endpoint=NodeEndpoint("cfg", 11211),
            nodes=(NodeEndpoint("n1", 11211), NodeEndpoint("n2", 11211)),
        )],
    })
    endpoint = ClusterResolver(directory).resolve_cluster("firstCache")
    assert endpoint.host == "cfg"
    assert endpoint.servers == [("n1", 11211), ("n2", 11211)]


def test_missing_ports_fall_back_to_engine_default() -> None:
    """A directory answer without ports resolves to the memcached default port."""
    directory = FakeClusterDirectory({
        "firstCache": [CacheClusterDescription(
            cluster_id="firstCache",
            engine="memcached",
            configuration_endpoint=NodeEndpoint("cfg", 0),
            nodes=(NodeEndpoint("n1", 0), NodeEndpoint("n2", 11212)),
        )],
    })
    endpoint = ClusterResolver(directory).resolve_cluster("firstCache")
    assert endpoint.port == 11211
    assert endpoint.servers == [("n1", 11211), ("n2", 11212)]


def test_stack_resource_without_physical_id(directory: FakeClusterDirectory) -> None:
    """A stack cluster that was never created is reported before any directory query."""
    stack = FakeStackDirectory([
        StackResource("sampleCacheOneLogical", "sampleCacheOne", CACHE_CLUSTER_TYPE),
        StackResource("pendingCacheLogical", "", CACHE_CLUSTER_TYPE),
    ])
    with pytest.raises(ResolutionError, match="'pendingCacheLogical' has no physical id"):
        ClusterResolver(directory, stack).resolve([])
    assert directory.calls == []


@pytest.mark.parametrize(
    ("explicit", "default", "expected"),
    [
        (None, None, 0),
        (None, 12, 12),
        (42, 12, 42),
        (0, 12, 0),
        (23, None, 23),
    ],
)
def test_resolve_expiration(explicit: int | None, default: int | None, expected: int) -> None:
    """Explicit value wins, then the default, then 0."""
    assert resolve_expiration(explicit, default) == expected
