"""Level fetcher — resolve the values of one route parameter.

A level is one ``:param`` of the route template.  Fetching a level renders
that parameter's URL and query templates against the values already chosen
for the parameters to its left, POSTs the query, and shapes the JSON answer
into a list of values.
"""

from __future__ import annotations

import asyncio
import contextlib
from typing import TYPE_CHECKING

from prowl._errors import ConfigMissingError
from prowl.config import check_max_concurrency
from prowl.expand.extract import extract
from prowl.fetch.http import SUPPRESSED, get_json
from prowl.routes.template import render_template

if TYPE_CHECKING:
    import httpx

    from prowl._types import Context, Scalar
    from prowl.config import RouteConfig
    from prowl.routes.split import ParameterDescriptor, RouteSplit


class LevelFetcher:
    """Fetches values for the parameters of one route template.

    Construction checks that every parameter of the route is configured, so a
    misconfigured route fails before any request is made.

    Args:
        split: The split route template.
        config: Route configuration holding one entry per parameter.
        client: Shared async HTTP client.
        max_concurrency: Cap on in-flight requests issued through this
            fetcher (``None`` = unbounded).

    Raises:
        ConfigMissingError: If any route parameter has no configuration.
        ConfigError: If *max_concurrency* is not a positive integer.

    """

    __slots__ = ("_client", "_config", "_limit", "fetch_count")

    def __init__(
        self,
        split: RouteSplit,
        config: RouteConfig,
        client: httpx.AsyncClient,
        *,
        max_concurrency: int | None = None,
    ) -> None:
        missing = config.missing(split.names)
        if missing:
            raise ConfigMissingError(split.route, missing)
        check_max_concurrency(max_concurrency)
        self._config = config
        self._client = client
        self._limit: contextlib.AbstractAsyncContextManager[object] = (
            asyncio.Semaphore(max_concurrency)
            if max_concurrency is not None
            else contextlib.nullcontext()
        )
        self.fetch_count = 0

    async def fetch_level(self, param: ParameterDescriptor, context: Context) -> list[Scalar]:
        """Fetch and extract the values of *param* given *context*.

        A transport failure suppressed via ``suppress_errors`` yields no
        values, pruning the branch.
        """
        conf = self._config.params[param.name]
        url = render_template(conf.url, context).strip()
        body = render_template(conf.query, context).strip()

        self.fetch_count += 1
        async with self._limit:
            payload = await get_json(
                self._client,
                url,
                body,
                headers=conf.headers,
                suppress_errors=conf.suppress_errors,
            )

        if payload is SUPPRESSED:
            return []
        return extract(payload, conf)
