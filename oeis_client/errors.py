"""Error taxonomy.

Internal code raises these exceptions; the public operations turn them into
:class:`~oeis_client.models.SearchError` values before returning.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class ErrorCategory(str, Enum):
    BAD_PARAMETER = "bad_parameter"
    HTTP_ERROR = "http_error"
    UNKNOWN_RESPONSE_FORMAT = "unknown_response_format"
    NO_LINK_FOUND = "no_link_found"
    NO_MATCH = "no_match"


class OEISError(Exception):
    """Base class for every failure the client reports."""

    category: ErrorCategory = ErrorCategory.HTTP_ERROR

    def __init__(self, message: str, *, payload: Any = None, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.payload = payload
        self.cause = cause

    def to_outcome(self, original_sequence=None):
        from .models import SearchError

        return SearchError(
            category=self.category,
            message=self.message,
            payload=self.payload,
            original_sequence=original_sequence,
        )


class BadParameterError(OEISError):
    category = ErrorCategory.BAD_PARAMETER


class RequestFailedError(OEISError):
    category = ErrorCategory.HTTP_ERROR


class UnknownResponseFormatError(OEISError):
    category = ErrorCategory.UNKNOWN_RESPONSE_FORMAT


class NoLinkFoundError(OEISError):
    category = ErrorCategory.NO_LINK_FOUND


class NoMatchError(OEISError):
    category = ErrorCategory.NO_MATCH


_BY_CATEGORY = {
    cls.category: cls
    for cls in (
        BadParameterError,
        RequestFailedError,
        UnknownResponseFormatError,
        NoLinkFoundError,
        NoMatchError,
    )
}


def error_for(category: ErrorCategory) -> type[OEISError]:
    """Return the exception class that reports *category*."""
    return _BY_CATEGORY[ErrorCategory(category)]
