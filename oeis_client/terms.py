"""Sequence normalization: turn user input into a list of integers."""

from __future__ import annotations

import re
from typing import Any

from .errors import BadParameterError

_SEPARATORS = re.compile(r"[\s,]+")
_INTEGER = re.compile(r"[+-]?\d+")


def parse_int_list(text: str) -> list[int]:
    """Parse a comma and/or whitespace separated string of integers.

    Raises:
        BadParameterError: if any token is not an integer.
    """
    tokens = [token for token in _SEPARATORS.split(text) if token]
    if not all(_INTEGER.fullmatch(token) for token in tokens):
        raise BadParameterError(
            "Sequence string must be a list of integers (comma or space separated)."
        )
    return [int(token) for token in tokens]


def is_int_list_string(text: str) -> bool:
    try:
        return bool(parse_int_list(text))
    except BadParameterError:
        return False


def normalize_sequence(value: Any) -> list[int]:
    """Coerce a list of integers or a delimited string into a list of integers."""
    if isinstance(value, (list, tuple)):
        if not value:
            raise BadParameterError("Sequence list cannot be empty.")
        # bool is an int subclass but never a sequence term
        if all(isinstance(item, int) and not isinstance(item, bool) for item in value):
            return list(value)
        raise BadParameterError("Sequence list must contain only integers.")

    if isinstance(value, str):
        terms = parse_int_list(value)
        if not terms:
            raise BadParameterError("Sequence string cannot be empty.")
        return terms

    raise BadParameterError("Sequence must be a list of integers or a string of integers.")


def truncate_sequence(terms: list[int], max_terms: int) -> list[int]:
    """Shorten a long search sequence.

    Sequences of at most *max_terms* are returned as-is. Longer ones lose their
    leading run of 0s and 1s (unless that would leave nothing) and are then
    capped to the first *max_terms* values.
    """
    if len(terms) <= max_terms:
        return list(terms)

    start = 0
    while start < len(terms) and terms[start] in (0, 1):
        start += 1
    stripped = terms[start:] or terms
    return list(stripped[:max_terms])
