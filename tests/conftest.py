"""Shared test fixtures for prowl."""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from typing import Any

import httpx
import pytest

from prowl.config import ParameterConfig, RouteConfig

CMS = "https://cms.test"


@dataclass
class _Canned:
    payload: Any = None
    status: int = 200
    content_type: str | None = "application/json"
    raw: bytes | None = None
    error: Exception | None = None
    delay: float = 0.0


class FakeCMS:
    """In-memory content API answering POSTs by exact URL.

    Unknown URLs answer ``404``.  Every request is recorded in ``requests``
    and ``in_flight_peak`` tracks the highest number of concurrent requests.
    """

    def __init__(self) -> None:
        self._canned: dict[str, _Canned] = {}
        self.requests: list[httpx.Request] = []
        self._in_flight = 0
        self.in_flight_peak = 0

    def on(self, url: str, payload: Any = None, **kwargs: Any) -> None:
        self._canned[url] = _Canned(payload=payload, **kwargs)

    def urls(self) -> list[str]:
        return [str(r.url) for r in self.requests]

    async def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        self._in_flight += 1
        self.in_flight_peak = max(self.in_flight_peak, self._in_flight)
        try:
            canned = self._canned.get(str(request.url))
            if canned is None:
                return httpx.Response(404, json={"error": "not found"})
            if canned.delay:
                await asyncio.sleep(canned.delay)
            else:
                await asyncio.sleep(0)
            if canned.error is not None:
                raise canned.error
            body = canned.raw if canned.raw is not None else json.dumps(canned.payload).encode()
            headers = {"content-type": canned.content_type} if canned.content_type else {}
            return httpx.Response(canned.status, content=body, headers=headers)
        finally:
            self._in_flight -= 1

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self._handle))


@pytest.fixture
def cms() -> FakeCMS:
    return FakeCMS()


def param(url: str, **kwargs: Any) -> ParameterConfig:
    """Shorthand for a ParameterConfig pointing at the fake CMS."""
    return ParameterConfig(url=f"{CMS}{url}", **kwargs)


@pytest.fixture
def blog_config() -> RouteConfig:
    """``/blog/:cat/:slug`` — categories, then slugs per category."""
    return RouteConfig(
        type="strapi",
        params={
            "cat": param("/categories", query='{"query": "categories"}'),
            "slug": param(
                "/slugs/{{ cat }}",
                query='{"query": "articles(category: {{ cat }})"}',
            ),
        },
    )


@pytest.fixture
def blog_cms(cms: FakeCMS) -> FakeCMS:
    """The blog example: tech -> a, b; life -> c."""
    cms.on(f"{CMS}/categories", ["tech", "life"])
    cms.on(f"{CMS}/slugs/tech", ["a", "b"])
    cms.on(f"{CMS}/slugs/life", ["c"])
    return cms
