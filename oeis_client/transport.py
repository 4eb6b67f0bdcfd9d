"""HTTP request plumbing for the two OEIS endpoint shapes."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from .config import ClientConfig
from .errors import RequestFailedError, UnknownResponseFormatError

logger = logging.getLogger(__name__)


def _get(client: httpx.Client, url: str, params: Optional[dict[str, Any]], timeout_ms: int) -> httpx.Response:
    logger.debug("GET %s params=%s", url, params)
    try:
        return client.get(url, params=params, timeout=timeout_ms / 1000)
    except httpx.HTTPError as exc:
        raise RequestFailedError(str(exc) or exc.__class__.__name__, payload=exc, cause=exc) from exc


def get_json(
    client: httpx.Client,
    url: str,
    params: Optional[dict[str, Any]],
    *,
    timeout_ms: int,
) -> Any:
    """GET *url* and return the decoded JSON body untouched.

    The body may be ``None``, an object or a list depending on the endpoint.
    """
    response = _get(client, url, params, timeout_ms)
    if response.status_code != 200:
        raise RequestFailedError(
            f"HTTP Error: {response.status_code} - {response.text!r}",
            payload=response.text,
        )
    try:
        return response.json()
    except ValueError as exc:
        raise UnknownResponseFormatError(
            "Response body is not valid JSON.", payload=response.text, cause=exc
        ) from exc


def get_text(client: httpx.Client, url: str, *, timeout_ms: int) -> str:
    """GET *url* and return its body as text."""
    response = _get(client, url, None, timeout_ms)
    if response.status_code != 200:
        raise RequestFailedError(
            f"HTTP {response.status_code} - {response.text!r}",
            payload=response.text,
        )
    return response.text


def fetch_by_id(
    client: httpx.Client,
    identifier: str,
    config: ClientConfig,
    *,
    timeout_ms: Optional[int] = None,
) -> Any:
    """Direct lookup: ``GET <base>/<identifier>?fmt=json``."""
    return get_json(
        client,
        config.url(identifier),
        {"fmt": "json"},
        timeout_ms=timeout_ms or config.timeout,
    )


def fetch_search(
    client: httpx.Client,
    params: dict[str, Any],
    config: ClientConfig,
    *,
    timeout_ms: Optional[int] = None,
) -> Any:
    """General search: ``GET <base>/search?q=...&fmt=json[&start=n]``."""
    return get_json(
        client,
        config.url("search"),
        params,
        timeout_ms=timeout_ms or config.timeout,
    )
