"""Default router — emits the route template unchanged."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from prowl.expand.materialize import HandledRoute
from prowl.plugins.registry import register_plugin

if TYPE_CHECKING:
    from prowl.config import RouteConfig

ROUTER_NAME = "default"


async def default_route_plugin(
    route: str,
    config: RouteConfig,
    **options: Any,
) -> list[HandledRoute]:
    return [HandledRoute(route=route, type=config.type)]


async def default_validator(config: RouteConfig) -> list[str]:
    """Warn about parameter configuration the default router never uses."""
    if config.params:
        names = ", ".join(config.params)
        return [f"parameters ({names}) are configured but the default router ignores them"]
    return []


register_plugin("router", ROUTER_NAME, default_route_plugin, default_validator)
