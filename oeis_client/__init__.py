"""Client for the On-Line Encyclopedia of Integer Sequences (OEIS)."""

from .client import create_client
from .config import ClientConfig, load_config
from .errors import (
    BadParameterError,
    ErrorCategory,
    NoLinkFoundError,
    NoMatchError,
    OEISError,
    RequestFailedError,
    UnknownResponseFormatError,
)
from .models import (
    FetchOutcome,
    Link,
    MoreTerms,
    Multi,
    NoMatch,
    OEISSequence,
    Partial,
    SearchError,
    SearchOutcome,
    Single,
)
from .search import fetch_more_terms, fetch_xrefs, iter_search, search

__all__ = [
    # client
    "create_client",
    # config
    "ClientConfig",
    "load_config",
    # operations
    "search",
    "iter_search",
    "fetch_more_terms",
    "fetch_xrefs",
    # models
    "OEISSequence",
    "Link",
    "Single",
    "Multi",
    "Partial",
    "NoMatch",
    "MoreTerms",
    "SearchError",
    "SearchOutcome",
    "FetchOutcome",
    # errors
    "ErrorCategory",
    "OEISError",
    "BadParameterError",
    "RequestFailedError",
    "UnknownResponseFormatError",
    "NoLinkFoundError",
    "NoMatchError",
]
