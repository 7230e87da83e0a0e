"""Value types shared by the resolver, directories, and registry builder."""

from dataclasses import dataclass

# memcached reads larger expirations as absolute unix timestamps
MAX_EXPIRATION = 30 * 24 * 60 * 60


@dataclass(frozen=True)
class CacheClusterConfig:
    """A declared cache cluster: name plus optional expiration in seconds."""

    name: str
    expiration: int | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("cache cluster name must not be empty")
        if self.expiration is not None and self.expiration < 0:
            raise ValueError(
                f"expiration for {self.name!r} must be >= 0, got {self.expiration}"
            )
        if self.expiration is not None and self.expiration > MAX_EXPIRATION:
            raise ValueError(
                f"expiration for {self.name!r} must be <= {MAX_EXPIRATION} seconds, got {self.expiration}"
            )


@dataclass(frozen=True)
class StackResource:
    """One resource of a deployed stack (CloudFormation or Pulumi)."""

    logical_id: str
    physical_id: str
    resource_type: str


@dataclass(frozen=True)
class NodeEndpoint:
    host: str
    port: int

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"


@dataclass(frozen=True)
class CacheClusterDescription:
    """Directory answer for one cluster, before validation."""

    cluster_id: str
    engine: str
    configuration_endpoint: NodeEndpoint | None = None
    nodes: tuple[NodeEndpoint, ...] = ()


@dataclass(frozen=True)
class ClusterEndpoint:
    """Validated endpoint of a running cluster."""

    host: str
    port: int
    engine: str
    nodes: tuple[NodeEndpoint, ...] = ()

    @property
    def servers(self) -> list[tuple[str, int]]:
        """(host, port) pairs to connect to: every node, else the configuration endpoint."""
        if self.nodes:
            return [(n.host, n.port) for n in self.nodes]
        return [(self.host, self.port)]


@dataclass(frozen=True)
class ResolvedCluster:
    """A cluster ready to be bound: exposed name, endpoint, and expiration."""

    logical_name: str
    endpoint: ClusterEndpoint
    expiration: int
