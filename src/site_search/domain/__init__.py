"""Domain layer - corpus documents and search value objects.

Pure pydantic models with no dependencies on the index or the UI:
- Document: one entry of the pre-generated site corpus
- SearchResult: a ranked, excerpt-annotated document for display
- SearchResponse: the outcome of one query, including the loading,
  empty-query and failed signals the UI distinguishes
"""

from site_search.domain.model import Document, DocumentId
from site_search.domain.search import ResultSource, SearchResponse, SearchResult, SearchStatus


__all__ = [
    "Document",
    "DocumentId",
    "ResultSource",
    "SearchResponse",
    "SearchResult",
    "SearchStatus",
]
