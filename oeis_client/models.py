"""Records and search outcomes."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Iterator, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict

from .errors import ErrorCategory, OEISError, error_for


class Link(BaseModel):
    """A hyperlink extracted from a record's link markup."""

    model_config = ConfigDict(frozen=True)

    url: str
    label: str
    extra_data: bool = False


class OEISSequence(BaseModel):
    """One OEIS entry.

    Iterating the record iterates its term list::

        >>> list(seq)[:5]
        [0, 1, 1, 2, 3]
    """

    model_config = ConfigDict(frozen=True)

    id: str
    number: int
    name: Optional[str] = None
    data: tuple[int, ...] = ()
    comment: Optional[tuple[str, ...]] = None
    reference: Optional[tuple[str, ...]] = None
    formula: Optional[tuple[str, ...]] = None
    example: Optional[tuple[str, ...]] = None
    link: tuple[Link, ...] = ()
    xref: Optional[tuple[str, ...]] = None
    author: Optional[str] = None
    created: Optional[datetime] = None
    time: Optional[datetime] = None

    keyword: tuple[str, ...] = ()
    offset: Optional[tuple[int, int]] = None
    maple: Optional[tuple[str, ...]] = None
    mathematica: Optional[tuple[str, ...]] = None
    program: Optional[tuple[str, ...]] = None
    ext: Optional[tuple[str, ...]] = None
    revision: Optional[int] = None
    references: Optional[int] = None

    def __iter__(self) -> Iterator[int]:  # type: ignore[override]
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def __bool__(self) -> bool:
        # a record without terms is still a record
        return True

    def __contains__(self, term: object) -> bool:
        return term in self.data

    def __getitem__(self, index):
        return self.data[index]

    @property
    def extra_data_link(self) -> Optional[Link]:
        """The link flagged as pointing to the b-file, if any."""
        return next((link for link in self.link if link.extra_data), None)


class Single(BaseModel):
    kind: Literal["single"] = "single"
    sequence: OEISSequence


class Multi(BaseModel):
    kind: Literal["multi"] = "multi"
    sequences: list[OEISSequence]


class Partial(BaseModel):
    """A full page of results; the service probably has more."""

    kind: Literal["partial"] = "partial"
    sequences: list[OEISSequence]


class NoMatch(BaseModel):
    kind: Literal["no_match"] = "no_match"
    message: str = "No matches found."


class MoreTerms(BaseModel):
    kind: Literal["more_terms"] = "more_terms"
    sequence: OEISSequence


class SearchError(BaseModel):
    kind: Literal["error"] = "error"
    category: ErrorCategory
    message: str
    payload: Any = None
    original_sequence: Optional[OEISSequence] = None

    def to_exception(self) -> OEISError:
        return error_for(self.category)(self.message, payload=self.payload)


SearchOutcome = Union[Single, Multi, Partial, NoMatch, SearchError]
FetchOutcome = Union[MoreTerms, SearchError]
