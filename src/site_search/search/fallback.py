"""Substring scorer used when the inverted index finds nothing.

Catches partial-word and punctuation-adjacent matches the tokenizer cannot,
e.g. ``"lang"`` inside the tag ``"rustlang"``.
"""

from __future__ import annotations

from collections.abc import Sequence
import logging

from site_search.domain.model import Document, DocumentId
from site_search.search.index import rank
from site_search.search.models import RankedDocument
from site_search.search.schema import IndexSchema, create_default_schema


logger = logging.getLogger(__name__)

DEFAULT_RESULT_LIMIT = 10


class FallbackScorer:
    """Case-insensitive substring scan over the weighted fields.

    Each field that contains the query adds its weight once, no matter how
    many times or in how many of its values (tags, categories) it matches.
    """

    def __init__(self, schema: IndexSchema | None = None, *, limit: int = DEFAULT_RESULT_LIMIT) -> None:
        self.schema = schema or create_default_schema()
        self.limit = limit

    def score(self, document: Document, needle: str) -> float:
        """Return the summed weight of the fields containing ``needle``."""
        total = 0.0
        for index_field in self.schema:
            if any(needle in value.lower() for value in document.field_values(index_field.name)):
                total += index_field.weight
        return total

    def search(self, query: str, documents: Sequence[Document]) -> list[RankedDocument]:
        needle = query.strip().lower()
        if not needle:
            return []

        scores: dict[DocumentId, float] = {}
        order: dict[DocumentId, int] = {}
        for position, document in enumerate(documents):
            order[document.id] = position
            scores[document.id] = self.score(document, needle)

        ranked = rank(scores, order)[: self.limit]
        logger.debug("Fallback scorer matched %d documents for %r", len(ranked), query)
        return ranked
