"""Plugin registry — router plugins looked up by the ``type`` of a route.

A router plugin turns one route template plus its configuration into the
list of concrete routes, and ships a validator returning warning strings::

    register_plugin("router", "strapi", strapi_route_plugin, strapi_validator)
    plugin = get_plugin("router", "strapi")
    routes = await plugin.handler("/blog/:slug", route_config, client=client)

Registering an existing (category, name) pair replaces the previous plugin.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from prowl._errors import ConfigError

if TYPE_CHECKING:
    from prowl.expand.materialize import HandledRoute

type RouterHandler = Callable[..., Awaitable[list[HandledRoute]]]
type ConfigValidator = Callable[[Any], Awaitable[list[str]]]

CATEGORIES: frozenset[str] = frozenset({"router"})


@dataclass(frozen=True, slots=True)
class Plugin:
    """A registered plugin.

    Attributes:
        category: Plugin category (currently only ``"router"``).
        name: Name routes refer to via their ``type``.
        handler: Async callable ``(route, config, **options) -> list[HandledRoute]``.
        validator: Async callable ``(config) -> list[str]`` of warnings.

    """

    category: str
    name: str
    handler: RouterHandler
    validator: ConfigValidator


async def _no_warnings(config: Any) -> list[str]:
    return []


_plugins: dict[tuple[str, str], Plugin] = {}


def register_plugin(
    category: str,
    name: str,
    handler: RouterHandler,
    validator: ConfigValidator | None = None,
) -> Plugin:
    """Register *handler* under (*category*, *name*) and return the record.

    Raises:
        ConfigError: If *category* is unknown or *handler* is not callable.

    """
    if category not in CATEGORIES:
        msg = f"Unknown plugin category {category!r} (expected one of {sorted(CATEGORIES)})"
        raise ConfigError(msg)
    if not callable(handler):
        msg = f"Plugin {category}/{name}: handler must be callable"
        raise ConfigError(msg)
    plugin = Plugin(
        category=category,
        name=name,
        handler=handler,
        validator=validator if validator is not None else _no_warnings,
    )
    _plugins[(category, name)] = plugin
    return plugin


def get_plugin(category: str, name: str) -> Plugin:
    """Look up a registered plugin.

    Raises:
        ConfigError: If no plugin is registered under (*category*, *name*).

    """
    try:
        return _plugins[(category, name)]
    except KeyError:
        known = ", ".join(registered_plugins(category)) or "none"
        msg = f"No {category} plugin named {name!r} (registered: {known})"
        raise ConfigError(msg) from None


def registered_plugins(category: str) -> tuple[str, ...]:
    """Names registered in *category*, sorted."""
    return tuple(sorted(name for cat, name in _plugins if cat == category))


def unregister_plugin(category: str, name: str) -> None:
    """Remove a plugin if present."""
    _plugins.pop((category, name), None)
