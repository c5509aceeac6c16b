"""Data models for quote lookups, paging state, and rendered responses."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class ResultItem:
    """A single movie matching a quote."""

    quote: str
    title: str
    year: int

    def to_dict(self) -> dict:
        return {"quote": self.quote, "title": self.title, "year": self.year}

    @classmethod
    def from_dict(cls, data: dict) -> ResultItem:
        return cls(quote=data["quote"], title=data["title"], year=int(data["year"]))


@dataclass(frozen=True)
class PagingCursor:
    """Position within the result set of the current search.

    ``next_index`` counts how many results have already been emitted.
    """

    results: tuple[ResultItem, ...] = ()
    next_index: int = 0
    phrase: str = ""

    def __post_init__(self):
        if not 0 <= self.next_index <= len(self.results):
            raise ValueError(
                f"next_index {self.next_index} out of range for {len(self.results)} results"
            )

    @property
    def remaining(self) -> int:
        return len(self.results) - self.next_index

    @property
    def is_exhausted(self) -> bool:
        return self.next_index >= len(self.results)

    def advance(self, count: int) -> PagingCursor:
        return replace(self, next_index=self.next_index + count)


class PageKind(str, Enum):
    RESULTS = "results"
    NO_RESULTS = "no_results"
    NO_ACTIVE_SEARCH = "no_active_search"
    ALL_CONSUMED = "all_consumed"


@dataclass(frozen=True)
class Page:
    """The slice of a result set emitted for one request."""

    kind: PageKind
    items: tuple[ResultItem, ...] = ()
    has_more: bool = False
    start_index: int = 0   # absolute position of items[0] in the result set
    phrase: str = ""


@dataclass(frozen=True)
class RenderedOutput:
    """Spoken and visual output for one turn of the conversation."""

    spoken_script: str
    visual_summary: str = ""
    follow_up_prompt: str = ""
    card_title: Optional[str] = None
    should_end_session: bool = False
