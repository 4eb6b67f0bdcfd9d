"""Public search operations.

Every operation returns an outcome value instead of raising for the documented
error categories. Pass an explicit ``client`` to reuse one connection pool
across calls; otherwise a client is created from ``config`` (or from
:func:`load_config`) and closed before returning.
"""

from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator, Mapping, Optional, Union

import httpx

from . import extra_data
from .client import create_client
from .config import ClientConfig, load_config
from .errors import BadParameterError, OEISError
from .mapper import extract_xref_ids
from .models import (
    FetchOutcome,
    Multi,
    NoMatch,
    OEISSequence,
    SearchError,
    SearchOutcome,
    Single,
)
from .query import build_query_terms, build_search_params, format_identifier, is_identifier, validate_start
from .response import classify_response
from .terms import is_int_list_string
from .transport import fetch_by_id, fetch_search
from .xrefs import resolve_identifiers

logger = logging.getLogger(__name__)

BEHAVIOUR_OPTIONS = ("start", "may_truncate", "respect_sign", "timeout", "max_concurrency")

_DIGITS = re.compile(r"\d+")


@dataclass
class SearchSettings:
    may_truncate: bool
    respect_sign: bool
    timeout: int
    max_concurrency: int
    start: Optional[int] = None


@contextmanager
def _client_scope(client: Optional[httpx.Client], config: ClientConfig) -> Iterator[httpx.Client]:
    if client is not None:
        yield client
        return
    with create_client(config) as owned:
        yield owned


def _bool_option(name: str, value: Any, default: bool) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise BadParameterError(f":{name} must be a boolean.")
    return value


def _positive_int_option(name: str, value: Any, default: int) -> int:
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise BadParameterError(f":{name} must be a positive integer.")
    return value


def _settings(config: ClientConfig, behaviour: Mapping[str, Any]) -> SearchSettings:
    return SearchSettings(
        may_truncate=_bool_option("may_truncate", behaviour.get("may_truncate"), config.may_truncate),
        respect_sign=_bool_option("respect_sign", behaviour.get("respect_sign"), config.respect_sign),
        timeout=_positive_int_option("timeout", behaviour.get("timeout"), config.timeout),
        max_concurrency=_positive_int_option(
            "max_concurrency", behaviour.get("max_concurrency"), config.max_concurrency
        ),
        start=validate_start(behaviour.get("start")),
    )


def _params_from_input(query: Any) -> dict[str, Any]:
    """Turn the positional search input into named search parameters."""
    if query is None:
        return {}
    if isinstance(query, bool):
        raise BadParameterError("Input must be a mapping, a list of integers, or a string.")
    if isinstance(query, int):
        return {"id": format_identifier(query)}
    if isinstance(query, str):
        text = query.strip()
        if not text:
            return {"sequence": text}
        if is_identifier(text):
            return {"id": text}
        if _DIGITS.fullmatch(text):
            return {"id": format_identifier(int(text))}
        if is_int_list_string(text):
            return {"sequence": text}
        return {"query": query}
    if isinstance(query, Mapping):
        return dict(query)
    if isinstance(query, (list, tuple)):
        return {"sequence": list(query)} if query else {}
    raise BadParameterError("Input must be a mapping, a list of integers, or a string.")


def prepare_search(
    query: Any,
    options: Mapping[str, Any],
    config: ClientConfig,
) -> tuple[dict[str, Any], SearchSettings]:
    """Split input and options into search parameters and behaviour settings.

    Validates everything, so a returned pair is always safe to send.
    """
    params = _params_from_input(query)
    behaviour: dict[str, Any] = {}
    for key in BEHAVIOUR_OPTIONS:
        if key in params:
            behaviour[key] = params.pop(key)
    for key, value in options.items():
        if key in BEHAVIOUR_OPTIONS:
            behaviour[key] = value
        else:
            params[key] = value

    settings = _settings(config, behaviour)
    build_query_terms(
        params,
        may_truncate=settings.may_truncate,
        respect_sign=settings.respect_sign,
        max_terms=config.max_sequence_terms,
    )
    return params, settings


def _direct_identifier(params: Mapping[str, Any]) -> Optional[str]:
    present = {key: value for key, value in params.items() if value is not None}
    if list(present) == ["id"]:
        return present["id"]
    return None


def _run(
    http: httpx.Client,
    params: Mapping[str, Any],
    settings: SearchSettings,
    config: ClientConfig,
    *,
    start: Optional[int] = None,
) -> SearchOutcome:
    try:
        identifier = _direct_identifier(params)
        if identifier is not None:
            payload = fetch_by_id(http, identifier, config, timeout_ms=settings.timeout)
        else:
            query_params = build_search_params(
                params,
                may_truncate=settings.may_truncate,
                respect_sign=settings.respect_sign,
                max_terms=config.max_sequence_terms,
                start=settings.start if start is None else start,
            )
            payload = fetch_search(http, query_params, config, timeout_ms=settings.timeout)
    except OEISError as exc:
        return exc.to_outcome()
    return classify_response(payload, base_url=config.base_url, page_size=config.page_size)


def search(
    query: Any = None,
    /,
    *,
    client: Optional[httpx.Client] = None,
    config: Optional[ClientConfig] = None,
    **options: Any,
) -> SearchOutcome:
    """Search the OEIS.

    Args:
        query: ``"A000045"``, ``45`` or ``"45"`` for a direct lookup; a list of
            ints or a ``"1, 2, 3"`` string for a term search; a mapping of
            search parameters; any other string as a free-text query; or
            ``None`` to take everything from *options*.
        client: Optional shared :class:`httpx.Client`.
        config: Optional :class:`ClientConfig`; defaults to :func:`load_config`.
        **options: Search parameters (``sequence``, ``id``, ``keyword``,
            ``author``, ``query``, ``comment``, ``ref``, ``link``, ``formula``,
            ``example``, ``name``, ``xref``, ``subseq``) and behaviour options
            (``start``, ``may_truncate``, ``respect_sign``, ``timeout`` in
            milliseconds, ``max_concurrency``).

    Returns:
        One of :class:`Single`, :class:`Multi`, :class:`Partial`,
        :class:`NoMatch` or :class:`SearchError`.
    """
    config = config or load_config()
    try:
        params, settings = prepare_search(query, options, config)
    except OEISError as exc:
        return exc.to_outcome()

    with _client_scope(client, config) as http:
        return _run(http, params, settings, config)


def iter_search(
    query: Any = None,
    /,
    *,
    client: Optional[httpx.Client] = None,
    config: Optional[ClientConfig] = None,
    **options: Any,
) -> Iterator[OEISSequence]:
    """Yield every matching record, fetching further pages on demand.

    Takes the same arguments as :func:`search`. Paging starts at ``start``
    (default 0) and stops at the first page shorter than the service's page
    size. Records already yielded are skipped.

    Raises:
        OEISError: the exception matching the first error outcome.
    """
    config = config or load_config()
    params, settings = prepare_search(query, options, config)
    offset = settings.start or 0
    seen: set[str] = set()

    with _client_scope(client, config) as http:
        while True:
            outcome = _run(http, params, settings, config, start=offset)
            if isinstance(outcome, SearchError):
                raise outcome.to_exception()
            if isinstance(outcome, NoMatch):
                return
            if isinstance(outcome, Single):
                yield outcome.sequence
                return

            fresh = [sequence for sequence in outcome.sequences if sequence.id not in seen]
            for sequence in fresh:
                seen.add(sequence.id)
                yield sequence
            if isinstance(outcome, Multi) or not fresh:
                return
            offset += len(outcome.sequences)
            logger.debug("Fetching next page at start=%d", offset)


def fetch_more_terms(
    sequence: Any,
    *,
    client: Optional[httpx.Client] = None,
    config: Optional[ClientConfig] = None,
    timeout: Optional[int] = None,
    include_comments: bool = False,
) -> FetchOutcome:
    """Replace a record's terms with the longer list from its b-file.

    Args:
        sequence: A record from :func:`search`.
        timeout: Request timeout in milliseconds.
        include_comments: Also append the b-file's comment lines to the
            record's comments, prefixed with ``"[b-file] "``.

    Returns:
        :class:`MoreTerms` with a new record, or a :class:`SearchError`.
    """
    if not isinstance(sequence, OEISSequence):
        return BadParameterError("Input must be an OEISSequence.").to_outcome()

    config = config or load_config()
    try:
        timeout = _positive_int_option("timeout", timeout, config.timeout)
    except OEISError as exc:
        return exc.to_outcome(sequence)

    with _client_scope(client, config) as http:
        return extra_data.fetch_more_terms(
            http,
            sequence,
            config,
            timeout_ms=timeout,
            include_comments=include_comments,
        )


def fetch_xrefs(
    sequence: Any,
    *,
    client: Optional[httpx.Client] = None,
    config: Optional[ClientConfig] = None,
    timeout: Optional[int] = None,
    max_concurrency: Optional[int] = None,
) -> Union[list[OEISSequence], SearchError]:
    """Fetch every record mentioned in ``sequence.xref``.

    Lookups run concurrently (``max_concurrency`` workers, default 5), each
    bounded by ``timeout`` milliseconds (default 15000). Failed, timed-out or
    non-single lookups are left out of the result.
    """
    if not isinstance(sequence, OEISSequence):
        return BadParameterError("Input must be an OEISSequence.").to_outcome()

    config = config or load_config()
    try:
        settings = _settings(config, {"timeout": timeout, "max_concurrency": max_concurrency})
    except OEISError as exc:
        return exc.to_outcome(sequence)

    identifiers = extract_xref_ids(sequence.xref)
    logger.debug("Resolving %d cross-references of %s", len(identifiers), sequence.id)

    with _client_scope(client, config) as http:

        def lookup(identifier: str) -> SearchOutcome:
            return _run(http, {"id": identifier}, settings, config)

        return resolve_identifiers(
            identifiers,
            lookup,
            max_concurrency=settings.max_concurrency,
            timeout=settings.timeout / 1000,
        )
