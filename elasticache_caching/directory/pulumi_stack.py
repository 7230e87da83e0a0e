"""Stack directory backed by a Pulumi stack export."""

import json
from pathlib import Path
from typing import Any

from elasticache_caching.models import StackResource

CACHE_CLUSTER_TYPE = "aws:elasticache/cluster:Cluster"


def _logical_name(urn: str) -> str:
    """Resource name is the last '::' segment of urn:pulumi:<stack>::<project>::<type>::<name>."""
    return urn.rsplit("::", 1)[-1]


class PulumiStackDirectory:
    """Resources recorded in a `pulumi stack export` deployment."""

    cache_cluster_type = CACHE_CLUSTER_TYPE

    def __init__(self, deployment: dict[str, Any]) -> None:
        # Accept both the full export ({"version", "deployment"}) and the inner deployment.
        inner = deployment.get("deployment", deployment)
        self._resources = [
            StackResource(
                logical_id=_logical_name(r["urn"]),
                physical_id=r.get("id", ""),
                resource_type=r.get("type", ""),
            )
            for r in inner.get("resources") or []
            if r.get("urn")
        ]

    @classmethod
    def from_export_file(cls, path: str) -> "PulumiStackDirectory":
        if not Path(path).exists():
            raise SystemExit(f"Pulumi stack export not found: {path}")
        with open(path, encoding="utf-8") as f:
            return cls(json.load(f))

    @classmethod
    def from_stack(cls, stack_name: str, project_name: str) -> "PulumiStackDirectory":
        """Export a live stack from the configured Pulumi backend."""
        from pulumi import automation

        stack = automation.select_stack(
            stack_name=stack_name,
            project_name=project_name,
            program=lambda: None,
        )
        return cls(stack.export_stack().deployment)

    def resources_by_type(self, type_tag: str) -> list[StackResource]:
        return [r for r in self._resources if r.resource_type == type_tag]
