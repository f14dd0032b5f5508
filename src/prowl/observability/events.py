"""Event model for route expansion observability.

All events are frozen dataclasses with:
- ``timestamp_ns``: Monotonic nanosecond timestamp
- ``route``: The route template the event belongs to

"""

import time
from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True, slots=True)
class LevelFetched:
    """One expansion level finished.

    Attributes:
        route: Route template being expanded.
        param: Parameter name of the level.
        parents: Number of partial assignments fetched for (one fetch each).
        children: Number of partial assignments produced for the next level.
        duration_ms: Wall-clock time for the whole level.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    route: str
    param: str
    parents: int
    children: int
    duration_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class RouteExpanded:
    """A route template expanded successfully.

    Attributes:
        route: Route template.
        router: Router plugin name.
        routes_count: Number of concrete routes produced.
        fetches: Number of data fetches issued.
        duration_ms: Total expansion time.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    route: str
    router: str
    routes_count: int
    fetches: int
    duration_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class RouteFallback:
    """A route template fell back to its unexpanded form.

    Attributes:
        route: Route template.
        router: Router plugin name.
        reason: ``missing_config`` or ``error``.
        error: Short diagnostic of the failure.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    route: str
    router: str
    reason: Literal["missing_config", "error"]
    error: str
    timestamp_ns: int


type ExpansionEvent = LevelFetched | RouteExpanded | RouteFallback


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
