"""Error taxonomy for corpus loading and query evaluation."""

from __future__ import annotations


class SiteSearchError(Exception):
    """Base class for all search engine errors."""


class CorpusLoadFailed(SiteSearchError):
    """The corpus payload could not be read or decoded."""


class CorpusMalformed(SiteSearchError):
    """A corpus entry is missing a required field or has the wrong shape."""

    def __init__(self, message: str, *, position: int | None = None, field: str | None = None) -> None:
        super().__init__(message)
        self.position = position
        self.field = field


class IndexNotBuilt(SiteSearchError):
    """The index was queried before a successful build."""


class QueryError(SiteSearchError):
    """Unexpected failure while evaluating a query."""


class DocumentNotFound(SiteSearchError, KeyError):
    """No document with the requested id exists in the loaded corpus."""

    def __str__(self) -> str:
        return Exception.__str__(self)
