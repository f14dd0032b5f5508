"""Expansion engine — turn a parameterized route into concrete routes.

Public API::

    from prowl.expand import HandledRoute, LevelFetcher, expand, materialize

    fetcher = LevelFetcher(split, route_config, client)
    assignments = await expand(split.params, fetcher.fetch_level)
    routes = [materialize(split, a, route_config.type) for a in assignments]
"""

from prowl.expand.driver import expand
from prowl.expand.extract import extract
from prowl.expand.level import LevelFetcher
from prowl.expand.materialize import HandledRoute, materialize

__all__ = [
    "HandledRoute",
    "LevelFetcher",
    "expand",
    "extract",
    "materialize",
]
