"""Engine registry: cache factory registration per ElastiCache engine."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

from elasticache_caching.config import ClientOptions
from elasticache_caching.models import ClusterEndpoint


class Cache(Protocol):
    """Named cache bound to one cluster."""

    name: str
    expiration: int

    def get(self, key: Any) -> Any:
        ...

    def put(self, key: Any, value: Any) -> None:
        ...

    def evict(self, key: Any) -> None:
        ...

    def clear(self) -> None:
        ...

    def close(self) -> None:
        ...


class CacheFactory(Protocol):
    """Protocol for engine cache factory functions."""

    def __call__(
        self,
        name: str,
        endpoint: ClusterEndpoint,
        expiration: int,
        options: ClientOptions,
    ) -> Cache:
        ...


@dataclass
class EngineDef:
    """Registered engine: cache factory and the engine's default port."""

    factory: Callable[[str, ClusterEndpoint, int, ClientOptions], Cache]
    default_port: int


ENGINES: dict[str, EngineDef] = {}


def register_engine(
    name: str,
    default_port: int,
) -> Callable[[CacheFactory], CacheFactory]:
    """Decorator to register a cache factory in ENGINES."""

    def decorator(fn: CacheFactory) -> CacheFactory:
        ENGINES[name] = EngineDef(factory=fn, default_port=default_port)
        return fn

    return decorator


def supported_engines() -> list[str]:
    return sorted(ENGINES)
