"""Dotted-path lookup into fetched JSON documents."""

import re
from collections.abc import Mapping, Sequence
from typing import Any

_INDEX = re.compile(r"-?\d+", re.ASCII)


def deep_get(path: str, obj: Any) -> Any:
    """Return the value at dotted *path* inside *obj*, or ``None``.

    Mapping keys are matched by name; numeric segments index into lists.
    Any missing step yields ``None`` rather than raising::

        deep_get("data.id", {"data": {"id": "1"}})      -> "1"
        deep_get("items.0.slug", {"items": [{"slug": "a"}]}) -> "a"
        deep_get("data.nope", {"data": {}})             -> None

    """
    current = obj
    for part in path.split("."):
        if current is None:
            return None
        if isinstance(current, Mapping):
            current = current.get(part)
        elif isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
            if not _INDEX.fullmatch(part):
                return None
            index = int(part)
            if not -len(current) <= index < len(current):
                return None
            current = current[index]
        else:
            return None
    return current
