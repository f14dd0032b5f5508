"""Prowl error hierarchy.

All prowl-specific errors inherit from ProwlError for easy catching.
"""


class ProwlError(Exception):
    """Base error for all prowl operations."""


class ConfigError(ProwlError):
    """Invalid or missing configuration."""


class ConfigMissingError(ConfigError):
    """A route parameter has no matching configuration entry.

    Attributes:
        route: The route template being expanded.
        missing: Names of the unconfigured parameters, in route order.

    """

    def __init__(self, route: str, missing: tuple[str, ...]) -> None:
        self.route = route
        self.missing = missing
        super().__init__(
            f"missing config for parameters ({','.join(missing)}) in route: {route}"
        )


class FetchError(ProwlError):
    """A data fetch for one expansion level failed."""


class HttpStatusError(FetchError):
    """The content API answered with a non-200 status code."""

    def __init__(self, status_code: int, url: str) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(
            f"Request Failed. Received status code: {status_code} on url: {url}"
        )


class ContentTypeError(FetchError):
    """The content API answered with a non-JSON content type."""

    def __init__(self, content_type: str | None, url: str) -> None:
        self.content_type = content_type
        self.url = url
        super().__init__(
            "Invalid content-type. Expected application/json "
            f"but received {content_type} on url: {url}"
        )


class ParseError(FetchError):
    """The response body was not valid JSON."""


class TransportError(FetchError):
    """The request never produced a response (DNS, connect, timeout, ...)."""


class TransformError(ProwlError):
    """A results handler rejected the fetched payload as malformed."""


class ShapeError(ProwlError):
    """An extracted payload is not a sequence of values."""


class ExportError(ProwlError):
    """Error while writing the generated route list."""
