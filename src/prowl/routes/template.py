"""Template rendering for request URLs and bodies.

Placeholders use double braces and may reach into nested context values::

    render_template("https://cms/{{ category }}", {"category": "tech"})
    -> "https://cms/tech"

Unresolved placeholders are left verbatim so a misconfigured template is
visible in the failing request rather than silently collapsing to "".
"""

import re
from collections.abc import Mapping
from typing import Any

from prowl.routes.lookup import deep_get

_PLACEHOLDER = re.compile(r"\{\{\s*([A-Za-z_][\w.-]*)\s*\}\}")


def render_template(template: str, context: Mapping[str, Any]) -> str:
    """Substitute ``{{ name }}`` placeholders in *template* from *context*."""

    def _replace(match: re.Match[str]) -> str:
        key = match.group(1)
        if key in context:
            value = context[key]
        else:
            value = deep_get(key, context)
        if value is None:
            return match.group(0)
        return str(value)

    return _PLACEHOLDER.sub(_replace, template)
