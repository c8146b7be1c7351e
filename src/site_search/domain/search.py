"""Value objects returned by the search engine."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from site_search.domain.model import DocumentId


SearchStatus = Literal["results", "empty_query", "loading", "failed"]
ResultSource = Literal["primary", "fallback"]


class SearchResult(BaseModel):
    """A single ranked result, ready for rendering.

    ``excerpt`` and ``title_html`` are HTML-safe; every other display field is
    copied verbatim from the referenced document.
    """

    model_config = ConfigDict(frozen=True)

    document_id: DocumentId
    score: float
    excerpt: str
    title: str
    title_html: str
    url: str
    date: str = ""
    tags: tuple[str, ...] = ()
    categories: tuple[str, ...] = ()


class SearchResponse(BaseModel):
    """Outcome of a single query.

    The status separates the cases the UI renders differently:
    ``empty_query`` clears the panel, ``loading`` shows a pending indicator,
    ``failed`` asks the user to retry and ``results`` (possibly empty) lists
    matches or a "no results" message.
    """

    model_config = ConfigDict(frozen=True)

    status: SearchStatus
    query: str = ""
    results: tuple[SearchResult, ...] = ()
    source: ResultSource | None = None
    error: str | None = Field(default=None, description="Generic failure message when status is 'failed'")

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def has_results(self) -> bool:
        return bool(self.results)

    @classmethod
    def empty_query(cls, query: str = "") -> "SearchResponse":
        return cls(status="empty_query", query=query)

    @classmethod
    def loading(cls, query: str) -> "SearchResponse":
        return cls(status="loading", query=query)

    @classmethod
    def failed(cls, query: str, message: str = "Search failed, please retry") -> "SearchResponse":
        return cls(status="failed", query=query, error=message)
