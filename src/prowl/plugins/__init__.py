"""Router plugins.

Importing this package registers the built-in routers (``default`` and
``strapi``).

Public API::

    from prowl.plugins import get_plugin, register_plugin

    plugin = get_plugin("router", route_config.type)
    routes = await plugin.handler(route, route_config, client=client)
"""

from prowl.plugins import default, strapi  # noqa: F401
from prowl.plugins.registry import (
    Plugin,
    get_plugin,
    register_plugin,
    registered_plugins,
    unregister_plugin,
)

__all__ = [
    "Plugin",
    "get_plugin",
    "register_plugin",
    "registered_plugins",
    "unregister_plugin",
]
