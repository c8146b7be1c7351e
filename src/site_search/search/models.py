"""Search data models."""

from dataclasses import dataclass
from typing import NamedTuple

from site_search.domain.model import DocumentId


@dataclass(frozen=True)
class Posting:
    """A posting records how often a term occurs in one field of one document."""

    doc_id: DocumentId
    field: str
    frequency: int = 1


class RankedDocument(NamedTuple):
    """A scored reference to a document, produced by the index or the fallback scorer."""

    doc_id: DocumentId
    score: float
