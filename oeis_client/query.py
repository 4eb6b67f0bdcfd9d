"""
Query construction for the OEIS search endpoint.

This module converts named search parameters into the service's compact
``prefix:value`` syntax. Every check happens here, so a malformed request
never reaches the network.

Supported parameters:
- sequence: list of ints or delimited string; ``signed:`` or ``seq:`` token
- id: exact ``A`` + 6 digit identifier; ``id:`` token
- author: wildcard match, ``author:*name*``
- query: passed through verbatim
- keyword, comment, ref, link, formula, example, name, xref, subseq:
  ``field:value`` tokens
"""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping, Optional

from .errors import BadParameterError
from .terms import normalize_sequence, truncate_sequence

logger = logging.getLogger(__name__)

STRING_FIELDS = (
    "keyword",
    "comment",
    "ref",
    "link",
    "formula",
    "example",
    "name",
    "xref",
    "subseq",
)
SEARCH_FIELDS = ("sequence", "id", "author", "query") + STRING_FIELDS

IDENTIFIER_PATTERN = re.compile(r"A\d{6}")


def format_identifier(number: int) -> str:
    """Zero-pad a numeric id into the canonical ``A000045`` form."""
    return "A" + str(number).rjust(6, "0")


def is_identifier(value: Any) -> bool:
    return isinstance(value, str) and IDENTIFIER_PATTERN.fullmatch(value) is not None


def validate_start(start: Any) -> Optional[int]:
    """Return the pagination offset, or None when absent."""
    if start is None:
        return None
    if isinstance(start, int) and not isinstance(start, bool) and start >= 0:
        return start
    raise BadParameterError(":start must be a non-negative integer.")


def _term_for(key: str, value: Any, *, may_truncate: bool, respect_sign: bool, max_terms: int) -> str:
    if key == "sequence":
        terms = normalize_sequence(value)
        if may_truncate:
            terms = truncate_sequence(terms, max_terms)
        prefix = "signed:" if respect_sign else "seq:"
        return prefix + ",".join(str(term) for term in terms)

    if key == "id":
        if not is_identifier(value):
            raise BadParameterError(
                "ID must be a string starting with 'A' and 7 characters long (e.g., 'A000001')."
            )
        return f"id:{value}"

    if key in STRING_FIELDS:
        if not isinstance(value, str):
            raise BadParameterError(f"{key} must be a string.")
        return f"{key}:{value}"

    if key == "author":
        if not isinstance(value, str):
            raise BadParameterError("Author must be a string.")
        return f"author:*{value}*"

    if key == "query":
        if not isinstance(value, str):
            raise BadParameterError("General query must be a string.")
        return value

    raise BadParameterError(f"Unsupported option: {key!r} with value: {value!r}.")


def build_query_terms(
    params: Mapping[str, Any],
    *,
    may_truncate: bool = True,
    respect_sign: bool = True,
    max_terms: int = 6,
) -> list[str]:
    """
    Build the list of query tokens for *params*, in input order.

    Args:
        params: Search parameters keyed by field name; ``None`` values
            are skipped
        may_truncate: Shorten long sequences (see :func:`truncate_sequence`)
        respect_sign: Use the sign-sensitive ``signed:`` prefix
        max_terms: Term cap applied when truncating

    Returns:
        Query tokens

    Raises:
        BadParameterError: on any malformed or unsupported parameter, or
            when no token was produced
    """
    tokens: list[str] = []
    for key, value in params.items():
        if value is None:
            continue
        tokens.append(
            _term_for(
                key,
                value,
                may_truncate=may_truncate,
                respect_sign=respect_sign,
                max_terms=max_terms,
            )
        )

    if not tokens:
        raise BadParameterError(
            "At least one of sequence, id, keyword, author, or query must be provided."
        )
    return tokens


def build_search_params(
    params: Mapping[str, Any],
    *,
    may_truncate: bool = True,
    respect_sign: bool = True,
    max_terms: int = 6,
    start: Any = None,
) -> dict[str, Any]:
    """Build the query-string parameters for ``GET /search``.

    A ``start`` entry inside *params* is used when *start* is not given.
    """
    terms = dict(params)
    embedded_start = terms.pop("start", None)
    if start is None:
        start = embedded_start

    tokens = build_query_terms(
        terms,
        may_truncate=may_truncate,
        respect_sign=respect_sign,
        max_terms=max_terms,
    )
    query: dict[str, Any] = {"q": " ".join(tokens), "fmt": "json"}

    offset = validate_start(start)
    if offset is not None:
        query["start"] = offset

    logger.debug("Built search query: %s", query)
    return query
