"""Route template helpers.

Pure functions used by the expansion engine: splitting templates into
parameters, rendering request templates, and dotted-path lookups.

Public API::

    from prowl.routes import deep_get, render_template, route_split

    split = route_split("/blog/:category/:slug")
    url = render_template("https://cms/{{ category }}", {"category": "tech"})
"""

from prowl.routes.lookup import deep_get
from prowl.routes.split import ParameterDescriptor, RouteSplit, route_split
from prowl.routes.template import render_template

__all__ = [
    "ParameterDescriptor",
    "RouteSplit",
    "deep_get",
    "render_template",
    "route_split",
]
