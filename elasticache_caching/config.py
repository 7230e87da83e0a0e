"""Cache configuration loading and validation."""

from dataclasses import dataclass, field
import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml

from elasticache_caching.models import MAX_EXPIRATION, CacheClusterConfig

CONFIG_PATH_ENV = "ELASTICACHE_CONFIG_PATH"
SCHEMA_DIR = Path(__file__).resolve().parent / "schema"
SCHEMA_FILES = {
    "elasticache-caching/v1": "elasticache-config-v1.json",
}


def _schema_for(api_version: str) -> dict[str, Any]:
    if api_version not in SCHEMA_FILES:
        known = ", ".join(sorted(SCHEMA_FILES))
        raise ValueError(f"Unsupported apiVersion: {api_version} (known: {known})")
    with open(SCHEMA_DIR / SCHEMA_FILES[api_version], encoding="utf-8") as f:
        return json.load(f)


def _location(data: dict[str, Any], path: list[Any]) -> str:
    """Name the offending entry: clusters by their declared name, the stack by section."""
    parts = path[1:] if path[:1] == ["spec"] else path
    if len(parts) >= 2 and parts[0] == "clusters" and isinstance(parts[1], int):
        entry = data["spec"]["clusters"][parts[1]]
        name = entry.get("name") if isinstance(entry, dict) else None
        label = f"cluster {name!r}" if name else f"cluster #{parts[1] + 1}"
        return " ".join([label, *(str(p) for p in parts[2:])])
    if parts[:1] == ["stack"]:
        return " ".join(["stack", *(str(p) for p in parts[1:])])
    if not parts:
        return "spec" if path else "document"
    return ".".join(str(p) for p in parts)


def check_cache_document(data: Any) -> list[str]:
    """Return every problem with a parsed configuration document; empty when valid."""
    if not isinstance(data, dict):
        return ["document: must be a mapping"]
    if not data.get("apiVersion"):
        return ["document: apiVersion is required"]
    validator = jsonschema.Draft202012Validator(_schema_for(data["apiVersion"]))
    errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path])
    return [f"{_location(data, list(e.absolute_path))}: {e.message}" for e in errors]


@dataclass
class ClientOptions:
    connect_timeout: float | None = None
    timeout: float | None = None
    max_pool_size: int | None = None


@dataclass
class StackConfig:
    provider: str = "cloudformation"
    name: str = ""
    project: str = ""  # Pulumi only
    export_file: str | None = None  # Pulumi only; read instead of a live stack


@dataclass
class ElastiCacheConfig:
    """Declared caches: explicit clusters, default expiration, and where to look them up."""

    clusters: list[CacheClusterConfig] = field(default_factory=list)
    default_expiration: int | None = None
    region: str | None = None
    stack: StackConfig | None = None
    client: ClientOptions = field(default_factory=ClientOptions)
    name: str = ""

    def __post_init__(self) -> None:
        if self.default_expiration is not None and self.default_expiration < 0:
            raise ValueError(
                f"default expiration must be >= 0, got {self.default_expiration}"
            )
        if self.default_expiration is not None and self.default_expiration > MAX_EXPIRATION:
            raise ValueError(
                f"default expiration must be <= {MAX_EXPIRATION} seconds, got {self.default_expiration}"
            )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ElastiCacheConfig":
        """Build from a parsed, validated document (apiVersion/kind/metadata/spec)."""
        metadata = data.get("metadata") or {}
        spec = data.get("spec") or {}

        clusters = [
            CacheClusterConfig(name=c["name"], expiration=c.get("expiration"))
            for c in spec.get("clusters") or []
        ]

        stack = None
        if spec.get("stack") is not None:
            s = spec["stack"]
            stack = StackConfig(
                provider=s.get("provider", "cloudformation"),
                name=s.get("name", ""),
                project=s.get("project", ""),
                export_file=s.get("exportFile"),
            )

        c = spec.get("client") or {}
        client = ClientOptions(
            connect_timeout=c.get("connectTimeout"),
            timeout=c.get("timeout"),
            max_pool_size=c.get("maxPoolSize"),
        )

        return cls(
            clusters=clusters,
            default_expiration=spec.get("defaultExpiration"),
            region=spec.get("region"),
            stack=stack,
            client=client,
            name=metadata.get("name", ""),
        )

    @classmethod
    def from_file(cls, path: str) -> "ElastiCacheConfig":
        """Load and validate a cache configuration file."""
        if not Path(path).exists():
            raise SystemExit(f"cache configuration not found: {path}")

        with open(path, encoding="utf-8") as f:
            data: dict[str, Any] = yaml.safe_load(f)

        try:
            problems = check_cache_document(data)
        except ValueError as e:
            raise SystemExit(f"{path}: {e}") from e
        if problems:
            raise SystemExit("\n".join([f"invalid cache configuration {path}:", *(f"  - {p}" for p in problems)]))

        return cls.from_dict(data)


def load_elasticache_config() -> ElastiCacheConfig:
    """Load the cache configuration from the ELASTICACHE_CONFIG_PATH environment variable."""
    path = os.environ.get(CONFIG_PATH_ENV)
    if not path:
        raise SystemExit(f"{CONFIG_PATH_ENV} environment variable required")
    return ElastiCacheConfig.from_file(path)
