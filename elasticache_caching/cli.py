"""
Cache wiring CLI: resolve and check the caches declared in a configuration file.
`elasticache-caching resolve <config>` shows where each cache points without connecting;
`elasticache-caching check <config>` connects and runs a set/get round trip per cache.
"""

import json
import logging
import os
import sys
import uuid
from typing import Any

from elasticache_caching.config import CONFIG_PATH_ENV, ElastiCacheConfig
from elasticache_caching.context import enable_elasticache, resolve_clusters
from elasticache_caching.errors import ElastiCacheError


def _config_path(arg: str | None) -> str:
    path = arg or os.environ.get(CONFIG_PATH_ENV)
    if not path:
        print(f"Configuration path required (argument or {CONFIG_PATH_ENV}).", file=sys.stderr)
        sys.exit(1)
    return path


# --- resolve ---


def _cmd_resolve(path: str) -> None:
    config = ElastiCacheConfig.from_file(path)
    try:
        resolved = resolve_clusters(config)
    except ElastiCacheError as e:
        print(f"Resolution failed: {e}", file=sys.stderr)
        sys.exit(1)
    if not resolved:
        print("No caches declared.")
        return
    for cluster in resolved:
        ep = cluster.endpoint
        expiration = f"{cluster.expiration}s" if cluster.expiration else "none"
        print(f"{cluster.logical_name}")
        print(f"  endpoint: {ep.host}:{ep.port} ({ep.engine})")
        print(f"  nodes: {', '.join(str(n) for n in ep.nodes) or '-'}")
        print(f"  expiration: {expiration}")


# --- check ---


def _round_trip(cache: Any) -> None:
    key = f"__check__{uuid.uuid4().hex}"
    cache.put(key, "ok")
    value = cache.get(key)
    cache.evict(key)
    assert value == "ok", f"GET returned {value!r}"


def _cmd_check(path: str) -> None:
    config = ElastiCacheConfig.from_file(path)
    try:
        context = enable_elasticache(config)
    except ElastiCacheError as e:
        print(f"Resolution failed: {e}", file=sys.stderr)
        sys.exit(1)

    results: list[dict[str, str]] = []
    with context:
        for name, cache in context.registry.items():
            try:
                _round_trip(cache)
                results.append({"cache": name, "status": "PASS"})
            except Exception as e:
                results.append({"cache": name, "status": "FAIL", "error": str(e)})

    for r in results:
        print(f"  [{r['status']}] {r['cache']}" + (f": {r['error']}" if "error" in r else ""))
    print(json.dumps({"results": results}, indent=2))
    if any(r["status"] == "FAIL" for r in results):
        sys.exit(1)


def main(argv: list[str] | None = None) -> None:
    import argparse

    parser = argparse.ArgumentParser(
        description="Resolve and check ElastiCache memcached caches declared in a configuration file."
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log directory lookups")
    sub = parser.add_subparsers(dest="command", required=True)
    resolve_p = sub.add_parser("resolve", help="Show the endpoint and expiration of every declared cache")
    resolve_p.add_argument("config", nargs="?", help=f"Path to the configuration file (default: ${CONFIG_PATH_ENV})")
    check_p = sub.add_parser("check", help="Connect to every declared cache and run a set/get round trip")
    check_p.add_argument("config", nargs="?", help=f"Path to the configuration file (default: ${CONFIG_PATH_ENV})")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "resolve":
        _cmd_resolve(_config_path(args.config))
    elif args.command == "check":
        _cmd_check(_config_path(args.config))
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
