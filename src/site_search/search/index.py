"""Inverted index with fixed field weights.

``build_index`` is a pure function: it takes the corpus and an
``IndexSchema`` and returns an immutable ``InvertedIndex``. ``PrimaryIndex``
owns the current build and refuses queries until one exists.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
import logging
from types import MappingProxyType

from site_search.domain.model import Document, DocumentId
from site_search.errors import IndexNotBuilt, QueryError, SiteSearchError
from site_search.search.analyzers import StandardAnalyzer, get_analyzer
from site_search.search.models import Posting, RankedDocument
from site_search.search.schema import IndexSchema, create_default_schema


logger = logging.getLogger(__name__)


def rank(scores: Mapping[DocumentId, float], order: Mapping[DocumentId, int]) -> list[RankedDocument]:
    """Order scored documents by score descending, then by corpus position."""
    ranked = [RankedDocument(doc_id, score) for doc_id, score in scores.items() if score > 0]
    ranked.sort(key=lambda item: (-item.score, order[item.doc_id]))
    return ranked


@dataclass(frozen=True)
class InvertedIndex:
    """Immutable token -> postings map built from one corpus."""

    schema: IndexSchema
    postings: Mapping[str, tuple[Posting, ...]]
    doc_order: Mapping[DocumentId, int]
    analyzer: StandardAnalyzer

    @property
    def document_count(self) -> int:
        return len(self.doc_order)

    @property
    def term_count(self) -> int:
        return len(self.postings)

    def query_terms(self, query: str) -> list[str]:
        """Tokenize a query the same way documents were tokenized, dropping repeats."""
        return list(dict.fromkeys(self.analyzer.terms(query)))

    def search(self, query: str) -> list[RankedDocument]:
        """Score every document containing at least one query term."""
        scores: dict[DocumentId, float] = defaultdict(float)
        for term in self.query_terms(query):
            for posting in self.postings.get(term, ()):
                scores[posting.doc_id] += posting.frequency * self.schema.get_weight(posting.field)
        return rank(scores, self.doc_order)


def _field_terms(analyzer: StandardAnalyzer, values: Iterable[str]) -> Counter[str]:
    counts: Counter[str] = Counter()
    for value in values:
        counts.update(analyzer.terms(value))
    return counts


def build_index(documents: Sequence[Document], schema: IndexSchema | None = None) -> InvertedIndex:
    """Tokenize every indexed field of every document into postings."""
    schema = schema or create_default_schema()
    analyzer = get_analyzer(stemming=schema.stemming)
    postings: dict[str, list[Posting]] = defaultdict(list)
    doc_order: dict[DocumentId, int] = {}

    for position, document in enumerate(documents):
        doc_order[document.id] = position
        for index_field in schema:
            counts = _field_terms(analyzer, document.field_values(index_field.name))
            for term, frequency in counts.items():
                postings[term].append(
                    Posting(
                        doc_id=document.id,
                        field=index_field.name,
                        frequency=frequency if index_field.per_token else 1,
                    )
                )

    frozen = {term: tuple(entries) for term, entries in postings.items()}
    return InvertedIndex(
        schema=schema,
        postings=MappingProxyType(frozen),
        doc_order=MappingProxyType(doc_order),
        analyzer=analyzer,
    )


class PrimaryIndex:
    """Ranked full-text search over weighted document fields."""

    def __init__(self, schema: IndexSchema | None = None) -> None:
        self.schema = schema or create_default_schema()
        self._index: InvertedIndex | None = None

    @property
    def is_built(self) -> bool:
        return self._index is not None

    @property
    def document_count(self) -> int:
        return self._index.document_count if self._index else 0

    @property
    def term_count(self) -> int:
        return self._index.term_count if self._index else 0

    def build(self, documents: Sequence[Document]) -> None:
        """Replace the current index with one built from ``documents``."""
        self._index = None
        self._index = build_index(documents, self.schema)
        logger.debug(
            "Built index with %d terms over %d documents", self._index.term_count, self._index.document_count
        )

    def reset(self) -> None:
        self._index = None

    def search(self, query: str) -> list[RankedDocument]:
        """Return matching documents ordered by score descending.

        Raises:
            IndexNotBuilt: If called before ``build``.
            QueryError: If evaluation fails unexpectedly.
        """
        if self._index is None:
            raise IndexNotBuilt("Search index has not been built")
        if not query.strip():
            return []
        try:
            return self._index.search(query)
        except SiteSearchError:
            raise
        except Exception as exc:
            raise QueryError(f"Failed to evaluate query {query!r}: {exc}") from exc
