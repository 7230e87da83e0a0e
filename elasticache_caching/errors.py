"""Errors raised while resolving clusters and building the cache registry."""


class ElastiCacheError(Exception):
    """Base class for cache wiring errors; all are fatal at startup."""


class ResolutionError(ElastiCacheError):
    """A declared cluster could not be resolved to exactly one endpoint."""


class UnsupportedEngineError(ElastiCacheError):
    """A resolved cluster runs an engine with no registered cache factory."""

    def __init__(self, cluster_id: str, engine: str, supported: list[str]) -> None:
        self.cluster_id = cluster_id
        self.engine = engine
        self.supported = supported
        super().__init__(
            f"cache cluster {cluster_id!r} uses unsupported engine {engine!r}. "
            f"Supported engines: {', '.join(supported) or '(none)'}"
        )


class DuplicateNameError(ElastiCacheError):
    """Two resolved clusters share the same logical cache name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"duplicate cache name: {name!r}")


class CacheNotFoundError(ElastiCacheError, KeyError):
    """A requested cache name is not in the registry."""

    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        self.available = available
        super().__init__(
            f"cannot find cache named {name!r}. Available caches: {', '.join(available) or '(none)'}"
        )

    def __str__(self) -> str:
        return str(self.args[0])
