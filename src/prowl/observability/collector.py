"""Expansion collector — records router activity into an EventLog.

Router plugins receive a collector and report level timings, successful
expansions and fallbacks through it.  Fallbacks are also kept outside the
bounded log so a long run never loses count of them.

"""

from __future__ import annotations

from prowl.observability.events import (
    LevelFetched,
    RouteExpanded,
    RouteFallback,
    now_ns,
)
from prowl.observability.log import EventLog


class ExpansionCollector:
    """Event collector for route expansion.

    Args:
        log: The EventLog to store events in.

    """

    __slots__ = ("_fallbacks", "_log")

    def __init__(self, log: EventLog | None = None) -> None:
        self._log = log if log is not None else EventLog()
        self._fallbacks: list[RouteFallback] = []

    @property
    def log(self) -> EventLog:
        """The underlying event log."""
        return self._log

    def record_level(
        self,
        route: str,
        param: str,
        *,
        parents: int = 0,
        children: int = 0,
        duration_ms: float = 0.0,
    ) -> None:
        self._log.append(
            LevelFetched(
                route=route,
                param=param,
                parents=parents,
                children=children,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )

    def record_expanded(
        self,
        route: str,
        router: str,
        *,
        routes_count: int = 0,
        fetches: int = 0,
        duration_ms: float = 0.0,
    ) -> None:
        self._log.append(
            RouteExpanded(
                route=route,
                router=router,
                routes_count=routes_count,
                fetches=fetches,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )

    def record_fallback(
        self,
        route: str,
        router: str,
        *,
        reason: str = "error",
        error: str = "",
    ) -> None:
        """Record that *route* was emitted unexpanded."""
        event = RouteFallback(
            route=route,
            router=router,
            reason=reason,  # type: ignore[arg-type]
            error=error,
            timestamp_ns=now_ns(),
        )
        self._fallbacks.append(event)
        self._log.append(event)

    def fallbacks(self) -> list[RouteFallback]:
        """All recorded fallbacks, oldest first."""
        return list(self._fallbacks)
