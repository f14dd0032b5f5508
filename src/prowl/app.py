"""Prowl application — expand every configured route template.

The public functions (generate, validate) are the primary entry points;
``generate_async`` / ``expand_routes`` are the awaitable building blocks for
callers that already run an event loop.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from prowl.config_loader import load_config
from prowl.fetch.http import client_scope
from prowl.observability.collector import ExpansionCollector
from prowl.plugins import get_plugin

if TYPE_CHECKING:
    import httpx

    from prowl.config import ProwlConfig
    from prowl.expand.materialize import HandledRoute
    from prowl.observability.events import RouteFallback


@dataclass(frozen=True, slots=True)
class GenerateResult:
    """Aggregate result of one generation run.

    Attributes:
        routes: Every generated route, in configuration order.
        fallbacks: Templates that were emitted unexpanded.
        duration_ms: Total wall-clock time.
        output_path: Where the route list was written, or *None*.

    """

    routes: tuple[HandledRoute, ...]
    fallbacks: tuple[RouteFallback, ...]
    duration_ms: float
    output_path: Path | None


async def expand_routes(
    config: ProwlConfig,
    *,
    client: httpx.AsyncClient | None = None,
    collector: ExpansionCollector | None = None,
) -> tuple[HandledRoute, ...]:
    """Run every configured route template through its router.

    Templates expand concurrently over one shared HTTP client; the result
    keeps configuration order.

    Raises:
        ConfigError: If a route names an unregistered router.

    """
    collector = collector if collector is not None else ExpansionCollector()
    jobs = [
        (route, route_config, get_plugin("router", route_config.type))
        for route, route_config in config.routes
    ]
    async with client_scope(client, timeout=config.timeout) as http:
        chunks = await asyncio.gather(*(
            plugin.handler(
                route,
                route_config,
                client=http,
                max_concurrency=config.max_concurrency,
                collector=collector,
            )
            for route, route_config, plugin in jobs
        ))
    return tuple(r for chunk in chunks for r in chunk)


async def generate_async(
    config: ProwlConfig,
    *,
    client: httpx.AsyncClient | None = None,
    write: bool = True,
) -> GenerateResult:
    """Expand all routes and (optionally) write the route list."""
    from prowl.export.routes import write_routes

    t0 = time.perf_counter()
    collector = ExpansionCollector()
    routes = await expand_routes(config, client=client, collector=collector)

    output_path = None
    if write:
        output_path = write_routes(routes, config.output_path).output_path

    return GenerateResult(
        routes=routes,
        fallbacks=tuple(collector.fallbacks()),
        duration_ms=(time.perf_counter() - t0) * 1000,
        output_path=output_path,
    )


async def validate_async(config: ProwlConfig) -> list[str]:
    """Collect validator warnings for every route, prefixed by the route."""
    warnings: list[str] = []
    for route, route_config in config.routes:
        plugin = get_plugin("router", route_config.type)
        for warning in await plugin.validator(route_config):
            warnings.append(f"{route}: {warning}")
    return warnings


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------


def generate(root: str | Path = ".", **kwargs: object) -> GenerateResult:
    """Expand every route in the project at *root* and write the route list.

    Args:
        root: Path to the project root (holds prowl.yaml).
        **kwargs: Override ProwlConfig fields.

    """
    from prowl.banner import print_banner, print_summary

    t0 = time.perf_counter()
    config = load_config(Path(root), **kwargs)
    load_ms = (time.perf_counter() - t0) * 1000

    print_banner(config, mode="routes", load_ms=load_ms)
    result = asyncio.run(generate_async(config))
    print_summary(
        len(result.routes),
        len(result.fallbacks),
        result.duration_ms,
        result.output_path,
    )
    return result


def validate(root: str | Path = ".", **kwargs: object) -> list[str]:
    """Load the project at *root* and return router validation warnings."""
    from prowl.banner import print_banner

    config = load_config(Path(root), **kwargs)
    warnings = asyncio.run(validate_async(config))
    print_banner(config, mode="validate", warnings=warnings)
    return warnings
