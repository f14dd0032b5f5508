"""Built-in results handlers.

Referenced by name from config files (``results_handler: graphql``).
"""

from collections.abc import Mapping
from typing import Any

from prowl._errors import TransformError


def graphql_results(payload: Any) -> Any:
    """Unwrap a GraphQL response to the single field under ``data``.

    ``{"data": {"articles": [...]}}`` -> ``[...]``

    Raises:
        TransformError: If the response carries ``errors``, has no ``data``
            mapping, or selects more than one top-level field.

    """
    if not isinstance(payload, Mapping):
        msg = f"GraphQL response must be an object, got {type(payload).__name__}"
        raise TransformError(msg)

    errors = payload.get("errors")
    if errors:
        messages = [
            e.get("message", str(e)) if isinstance(e, Mapping) else str(e)
            for e in errors
        ]
        msg = f"GraphQL errors: {'; '.join(messages)}"
        raise TransformError(msg)

    data = payload.get("data")
    if not isinstance(data, Mapping):
        msg = "GraphQL response has no 'data' object"
        raise TransformError(msg)
    if len(data) != 1:
        msg = f"GraphQL response must select exactly one field, got {sorted(data)}"
        raise TransformError(msg)
    return next(iter(data.values()))


BUILTIN_HANDLERS = {
    "graphql": graphql_results,
}
