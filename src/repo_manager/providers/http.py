"""Shared REST plumbing for the provider backends.

Both backends talk JSON over a `requests.Session`; this module maps transport
failures and non-2xx answers onto the repo-manager error taxonomy.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from repo_manager.errors import ApiError, ConfigError, NetworkError

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT_SECONDS = 30


def post(
    session: requests.Session,
    url: str,
    *,
    operation: str,
    payload: dict[str, Any] | None = None,
    params: dict[str, Any] | None = None,
) -> requests.Response:
    """POST to `url` and return the response, raising on any non-2xx status."""

    logger.debug("POST request", extra={"url": url, "operation": operation})
    try:
        resp = session.post(url, json=payload, params=params, timeout=REQUEST_TIMEOUT_SECONDS)
    except requests.RequestException as e:
        raise NetworkError(f"Failed to {operation}: {e}") from e

    if not 200 <= resp.status_code < 300:
        raise ApiError(operation, status=resp.status_code, body=_response_text(resp))
    return resp


def parse_id(resp: requests.Response, *, field: str, operation: str) -> int:
    """Extract the integer identifier `field` from a JSON response body."""

    try:
        data = resp.json()
    except ValueError as e:
        raise ApiError(operation, body=f"response is not valid JSON: {e}") from e

    value = data.get(field) if isinstance(data, dict) else None
    # bool is an int subclass; reject it explicitly.
    if not isinstance(value, int) or isinstance(value, bool):
        raise ApiError(operation, body=f"response is missing integer field {field!r}")
    return value


def check_token(token: str) -> None:
    """Raise ConfigError unless the token is usable as an HTTP header value."""
    if not all(" " <= c <= "~" or c == "\t" for c in token):
        raise ConfigError("Invalid token: header value must be printable ASCII")


def _response_text(resp: requests.Response) -> str:
    try:
        return resp.text
    except (UnicodeDecodeError, LookupError):
        return "Unable to read error response"
