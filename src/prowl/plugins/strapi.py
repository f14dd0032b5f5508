"""Strapi router — expand route parameters from content API queries.

Each ``:param`` of the route is configured with a URL and a query body.
Values fetched for one parameter become the template context for the
parameters to its right, so ``/blog/:category/:slug`` fetches the
categories once and then the slugs once per category.

The handler never raises: a route whose expansion fails in any way is
emitted once, unexpanded, and a diagnostic is printed.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from prowl._errors import ConfigMissingError
from prowl.banner import log_error, print_progress, yellow
from prowl.expand.driver import expand
from prowl.expand.level import LevelFetcher
from prowl.expand.materialize import HandledRoute, materialize
from prowl.fetch.http import client_scope
from prowl.observability.collector import ExpansionCollector
from prowl.plugins.registry import register_plugin
from prowl.routes.split import route_split

if TYPE_CHECKING:
    import httpx

    from prowl.config import RouteConfig
    from prowl.routes.split import ParameterDescriptor, RouteSplit

ROUTER_NAME = "strapi"


async def strapi_route_plugin(
    route: str,
    config: RouteConfig,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float = 30.0,
    max_concurrency: int | None = None,
    collector: ExpansionCollector | None = None,
) -> list[HandledRoute]:
    """Expand *route* into one concrete route per fetched value combination.

    Args:
        route: Route template, e.g. ``/blog/:category/:slug``.
        config: Route configuration with one entry per parameter.
        client: Shared HTTP client; a private one is opened when omitted.
        timeout: Timeout for a private client, in seconds.
        max_concurrency: Cap on in-flight fetches (``None`` = unbounded).
        collector: Receives level, expansion and fallback events.

    Returns:
        The expanded routes, or ``[HandledRoute(route, config.type)]`` when
        configuration is missing or anything fails.

    """
    collector = collector if collector is not None else ExpansionCollector()
    try:
        split = route_split(route)
        async with client_scope(client, timeout=timeout) as http:
            return await _expand_route(
                split, config, http,
                max_concurrency=max_concurrency,
                collector=collector,
            )
    except ConfigMissingError as exc:
        log_error(
            f"missing config for parameters ({','.join(exc.missing)}) "
            f"in route: {yellow(route)}. Skipping"
        )
        collector.record_fallback(route, config.type, reason="missing_config", error=str(exc))
        return [HandledRoute(route=route, type=config.type)]
    except Exception as exc:
        log_error(f'Could not fetch data for route "{yellow(route)}": {_diagnostic(exc)}')
        collector.record_fallback(route, config.type, reason="error", error=_diagnostic(exc))
        return [HandledRoute(route=route, type=config.type)]


async def _expand_route(
    split: RouteSplit,
    config: RouteConfig,
    client: httpx.AsyncClient,
    *,
    max_concurrency: int | None,
    collector: ExpansionCollector,
) -> list[HandledRoute]:
    fetcher = LevelFetcher(split, config, client, max_concurrency=max_concurrency)
    print_progress(f'Strapi router loading data for "{yellow(split.route)}"')
    t0 = time.perf_counter()

    def _on_level(
        param: ParameterDescriptor, parents: int, children: int, duration_ms: float,
    ) -> None:
        collector.record_level(
            split.route, param.name,
            parents=parents, children=children, duration_ms=duration_ms,
        )

    assignments = await expand(split.params, fetcher.fetch_level, on_level=_on_level)
    routes = [materialize(split, assignment, config.type) for assignment in assignments]

    collector.record_expanded(
        split.route, config.type,
        routes_count=len(routes),
        fetches=fetcher.fetch_count,
        duration_ms=(time.perf_counter() - t0) * 1000,
    )
    return routes


def _diagnostic(exc: BaseException) -> str:
    """One-line description of *exc* for console output."""
    text = str(exc).strip().splitlines()
    return f"{type(exc).__name__}: {text[0]}" if text else type(exc).__name__


async def strapi_validator(config: object) -> list[str]:
    """Validate a strapi route config.  Currently reports no warnings."""
    return []


register_plugin("router", ROUTER_NAME, strapi_route_plugin, strapi_validator)
