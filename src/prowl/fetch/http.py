"""JSON-over-HTTP request primitive for content API queries.

Every expansion level issues one POST with a rendered query body and expects
a ``200`` answer carrying ``application/json``.  Response validation yields a
tagged :class:`FetchResult` first; only :func:`get_json` turns a failed result
into an exception.
"""

from __future__ import annotations

import contextlib
import re
from collections.abc import AsyncIterator, Mapping
from dataclasses import dataclass
from typing import Any

import httpx

from prowl._errors import (
    ContentTypeError,
    FetchError,
    HttpStatusError,
    ParseError,
    TransportError,
)

_JSON_CONTENT_TYPE = re.compile(r"^application/json")

_SUCCESS_STATUS = 200

# Returned by get_json for a suppressed transport failure; distinct from a JSON null.
SUPPRESSED: Any = object()


@dataclass(frozen=True, slots=True)
class FetchResult:
    """Outcome of one validated response.

    Exactly one of *payload* / *error* is meaningful: a result with an
    ``error`` never carries a payload.

    Attributes:
        url: Request URL (for diagnostics).
        payload: Parsed JSON body on success.
        error: Status, content-type or parse failure.

    """

    url: str
    payload: Any = None
    error: FetchError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        """Return the payload, or raise the recorded fetch error."""
        if self.error is not None:
            raise self.error
        return self.payload


def validate_response(response: httpx.Response, url: str) -> FetchResult:
    """Check status and content type, then parse the JSON body.

    The body is only parsed once status and content type pass, so a pending
    status/content-type error always wins over a parse failure.
    """
    if response.status_code != _SUCCESS_STATUS:
        return FetchResult(url, error=HttpStatusError(response.status_code, url))

    content_type = response.headers.get("content-type")
    if content_type is None or not _JSON_CONTENT_TYPE.match(content_type):
        return FetchResult(url, error=ContentTypeError(content_type, url))

    try:
        payload = response.json()
    except ValueError as exc:
        return FetchResult(url, error=ParseError(f"Invalid JSON on url: {url}: {exc}"))
    return FetchResult(url, payload=payload)


async def get_json(
    client: httpx.AsyncClient,
    url: str,
    body: str,
    *,
    headers: Mapping[str, str] | None = None,
    suppress_errors: bool = False,
) -> Any:
    """POST *body* to *url* and return the parsed JSON response.

    Args:
        client: Shared async HTTP client.
        url: Fully rendered request URL.
        body: Fully rendered request body.
        headers: Extra request headers.
        suppress_errors: Return :data:`SUPPRESSED` on transport failures (connection
            refused, DNS, timeouts) instead of raising.  Has no effect on
            status, content-type or parse failures.

    Raises:
        TransportError: On a transport failure when not suppressed.
        HttpStatusError: On a non-200 status.
        ContentTypeError: On a non-JSON content type.
        ParseError: On an unparsable JSON body.

    """
    try:
        response = await client.post(
            url,
            content=body.encode("utf-8"),
            headers=dict(headers or {}),
        )
    except httpx.TransportError as exc:
        if suppress_errors:
            return SUPPRESSED
        msg = f"Request to {url} failed: {exc!r}"
        raise TransportError(msg) from exc
    return validate_response(response, url).unwrap()


@contextlib.asynccontextmanager
async def client_scope(
    client: httpx.AsyncClient | None,
    *,
    timeout: float = 30.0,
) -> AsyncIterator[httpx.AsyncClient]:
    """Yield *client*, or a fresh client closed on exit when *client* is None."""
    if client is not None:
        yield client
        return
    async with httpx.AsyncClient(timeout=timeout) as owned:
        yield owned
