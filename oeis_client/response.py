"""Classify decoded OEIS payloads into outcome values."""

from __future__ import annotations

import logging
from typing import Any

from .config import DEFAULT_BASE_URL
from .errors import UnknownResponseFormatError
from .mapper import map_record
from .models import Multi, NoMatch, Partial, SearchError, SearchOutcome, Single

logger = logging.getLogger(__name__)

NO_MATCHES_MESSAGE = "No matches found."
DEFAULT_PAGE_SIZE = 10


def _map_all(results: list[Any], base_url: str):
    records = []
    for item in results:
        if not isinstance(item, dict):
            raise UnknownResponseFormatError("unknown response format", payload=results)
        records.append(map_record(item, base_url))
    return records


def _looks_like_record(payload: Any) -> bool:
    number = payload.get("number")
    return isinstance(number, int) and not isinstance(number, bool) and "data" in payload


def classify_response(
    payload: Any,
    *,
    base_url: str = DEFAULT_BASE_URL,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> SearchOutcome:
    """Map a decoded payload to exactly one outcome.

    - ``None`` or an empty list: :class:`NoMatch`
    - a list of exactly *page_size* items: :class:`Partial` (the service
      truncated the page, more matches probably exist)
    - any other list: :class:`Multi`
    - a record-shaped object: :class:`Single`
    - anything else: an ``unknown_response_format`` :class:`SearchError`
    """
    try:
        if payload is None:
            return NoMatch(message=NO_MATCHES_MESSAGE)

        if isinstance(payload, list):
            if not payload:
                return NoMatch(message=NO_MATCHES_MESSAGE)
            records = _map_all(payload, base_url)
            if len(payload) == page_size:
                logger.warning(
                    "Got a full page of %d results; more matches may exist. "
                    "Narrow the search or page with start.",
                    page_size,
                )
                return Partial(sequences=records)
            return Multi(sequences=records)

        if isinstance(payload, dict) and _looks_like_record(payload):
            return Single(sequence=map_record(payload, base_url))
    except UnknownResponseFormatError as exc:
        return exc.to_outcome()

    return SearchError(
        category=UnknownResponseFormatError.category,
        message="unknown response format",
        payload=payload,
    )
