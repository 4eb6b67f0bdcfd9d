"""Map raw OEIS JSON objects to :class:`OEISSequence` records.

The service is loosely typed: most text fields are lists of strings, some may
be missing, and a few carry markup. Everything here is lenient; malformed
fields degrade to ``None`` or an empty value instead of failing the record.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Any, Iterable, Optional

from .config import DEFAULT_BASE_URL
from .errors import BadParameterError, UnknownResponseFormatError
from .models import Link, OEISSequence
from .query import format_identifier
from .terms import parse_int_list

logger = logging.getLogger(__name__)

HREF_PATTERN = re.compile(r'href="([^"]*)">([^<]+)</a>')
EXTRA_DATA_PATTERN = re.compile(r"/A\d+/b\d+\.txt$")
AUTHOR_PATTERN = re.compile(r"_([A-Za-z.\s]+?)_")
XREF_PATTERN = re.compile(r"A\d{6}")

_TEXT_LIST_FIELDS = (
    "comment",
    "reference",
    "formula",
    "example",
    "xref",
    "maple",
    "mathematica",
    "program",
    "ext",
)


def _text_list(value: Any) -> Optional[tuple[str, ...]]:
    if value is None:
        return None
    if isinstance(value, str):
        return (value,)
    if isinstance(value, list):
        return tuple(str(item) for item in value)
    return None


def _as_texts(value: Any) -> list[str]:
    if isinstance(value, list):
        return [str(item) for item in value]
    if isinstance(value, str):
        return [value]
    return []


def _optional_int(value: Any) -> Optional[int]:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def parse_data(value: Any) -> tuple[int, ...]:
    """Parse the ``data`` field; anything unparsable gives an empty tuple."""
    if not isinstance(value, str):
        return ()
    try:
        return tuple(parse_int_list(value))
    except BadParameterError:
        logger.debug("Unparsable data field: %r", value)
        return ()


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp; absent or malformed values give None."""
    if not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def parse_keywords(value: Any) -> tuple[str, ...]:
    if not isinstance(value, str):
        return ()
    return tuple(part for part in value.split(",") if part)


def parse_offset(value: Any) -> Optional[tuple[int, int]]:
    if not isinstance(value, str):
        return None
    parts = [part.strip() for part in value.split(",") if part.strip()]
    if len(parts) != 2:
        return None
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        return None


def resolve_url(url: str, base_url: str = DEFAULT_BASE_URL) -> str:
    if url.startswith("/"):
        return base_url.rstrip("/") + url
    return url


def extract_links(link_field: Any, base_url: str = DEFAULT_BASE_URL) -> tuple[Link, ...]:
    """Pull every ``href="...">label</a>`` pair out of the link markup."""
    links: list[Link] = []
    for text in _as_texts(link_field):
        for url, label in HREF_PATTERN.findall(text):
            resolved = resolve_url(url, base_url)
            links.append(
                Link(
                    url=resolved,
                    label=label,
                    extra_data=EXTRA_DATA_PATTERN.search(resolved) is not None,
                )
            )
    return tuple(links)


def extract_author(comments: Any, references: Any) -> Optional[str]:
    """Collect ``_Name_`` mentions from comments and references.

    Unique names are sorted and comma-joined; no mention gives None.
    """
    names = set()
    for text in _as_texts(comments) + _as_texts(references):
        for match in AUTHOR_PATTERN.findall(text):
            name = match.strip()
            if name:
                names.add(name)
    if not names:
        return None
    return ", ".join(sorted(names))


def extract_xref_ids(xrefs: Optional[Iterable[str]]) -> list[str]:
    """Every identifier mentioned in the cross-reference text, deduplicated and sorted."""
    if xrefs is None:
        return []
    if isinstance(xrefs, str):
        xrefs = [xrefs]
    found = set()
    for text in xrefs:
        found.update(XREF_PATTERN.findall(str(text)))
    return sorted(found)


def map_record(raw: dict[str, Any], base_url: str = DEFAULT_BASE_URL) -> OEISSequence:
    """Convert one JSON object from the service into an :class:`OEISSequence`."""
    number = _optional_int(raw.get("number"))
    if number is None:
        raise UnknownResponseFormatError("Record has no numeric id.", payload=raw)
    name = raw.get("name")
    fields = {field: _text_list(raw.get(field)) for field in _TEXT_LIST_FIELDS}

    return OEISSequence(
        id=format_identifier(number),
        number=number,
        name=name if isinstance(name, str) else None,
        data=parse_data(raw.get("data", "")),
        link=extract_links(raw.get("link"), base_url),
        author=extract_author(raw.get("comment"), raw.get("reference")),
        created=parse_timestamp(raw.get("created")),
        time=parse_timestamp(raw.get("time")),
        keyword=parse_keywords(raw.get("keyword")),
        offset=parse_offset(raw.get("offset")),
        revision=_optional_int(raw.get("revision")),
        references=_optional_int(raw.get("references")),
        **fields,
    )
