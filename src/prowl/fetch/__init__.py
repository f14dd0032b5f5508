"""Fetch layer — content API requests and response validation."""

from prowl.fetch.http import (
    SUPPRESSED,
    FetchResult,
    client_scope,
    get_json,
    validate_response,
)

__all__ = ["SUPPRESSED", "FetchResult", "client_scope", "get_json", "validate_response"]
