"""Expansion observability — events recorded while routes are expanded.

Quick Start:
    >>> from prowl.observability import EventLog, ExpansionCollector
    >>> collector = ExpansionCollector(EventLog())
    >>> # Pass collector to a router plugin; inspect collector.log afterwards

"""

from prowl.observability.collector import ExpansionCollector
from prowl.observability.events import (
    ExpansionEvent,
    LevelFetched,
    RouteExpanded,
    RouteFallback,
    now_ns,
)
from prowl.observability.log import EventLog

__all__ = [
    "EventLog",
    "ExpansionCollector",
    "ExpansionEvent",
    "LevelFetched",
    "RouteExpanded",
    "RouteFallback",
    "now_ns",
]
