"""Extended term lists from OEIS b-files.

A b-file is plain text with one ``index value`` pair per line. Lines starting
with ``#`` are comments.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

import httpx

from .config import ClientConfig
from .errors import NoLinkFoundError, NoMatchError, RequestFailedError
from .models import FetchOutcome, MoreTerms, OEISSequence
from .transport import get_text

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r?\n")
_INTEGER = re.compile(r"[+-]?\d+")
COMMENT_PREFIX = "[b-file] "


@dataclass
class BFile:
    terms: list[int] = field(default_factory=list)
    comments: list[str] = field(default_factory=list)


def parse_b_file(content: str) -> BFile:
    """Parse b-file text.

    The second whitespace-separated column of every row is the term; rows
    without one, or where it is not an integer, are skipped.
    """
    parsed = BFile()
    for line in _LINE_BREAK.split(content):
        stripped = line.strip()
        if not stripped:
            continue
        if stripped.startswith("#"):
            comment = stripped.lstrip("#").strip()
            if comment:
                parsed.comments.append(comment)
            continue
        columns = stripped.split()
        if len(columns) >= 2 and _INTEGER.fullmatch(columns[1]):
            parsed.terms.append(int(columns[1]))
    return parsed


def fetch_more_terms(
    client: httpx.Client,
    sequence: OEISSequence,
    config: ClientConfig,
    *,
    timeout_ms: Optional[int] = None,
    include_comments: bool = False,
) -> FetchOutcome:
    """Replace *sequence*'s terms with the ones from its b-file.

    Returns:
        :class:`MoreTerms` carrying a new record, or a :class:`SearchError`
        (``no_link_found``, ``http_error`` or ``no_match``) carrying the
        untouched original.
    """
    link = sequence.extra_data_link
    if link is None:
        return NoLinkFoundError("No extra data link found for this sequence.").to_outcome(sequence)

    try:
        content = get_text(client, link.url, timeout_ms=timeout_ms or config.timeout)
    except RequestFailedError as exc:
        logger.info("b-file fetch failed for %s: %s", sequence.id, exc.message)
        return RequestFailedError(
            f"Failed to fetch extra data from {link.url}: {exc.message}",
            payload=exc.payload,
            cause=exc.cause,
        ).to_outcome(sequence)

    parsed = parse_b_file(content)
    if not parsed.terms:
        return NoMatchError(
            f"No integer data extracted from extra data for link: {link.label}"
        ).to_outcome(sequence)

    update: dict = {"data": tuple(parsed.terms)}
    if include_comments and parsed.comments:
        update["comment"] = (sequence.comment or ()) + tuple(
            COMMENT_PREFIX + comment for comment in parsed.comments
        )

    logger.debug("Fetched %d terms for %s from %s", len(parsed.terms), sequence.id, link.url)
    return MoreTerms(sequence=sequence.model_copy(update=update))
