"""In-memory document store holding the loaded site corpus."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
import logging
from typing import Any

from pydantic import ValidationError

from site_search.domain.model import REQUIRED_FIELDS, Document, DocumentId
from site_search.errors import CorpusMalformed, DocumentNotFound


logger = logging.getLogger(__name__)


def validate_entry(entry: Mapping[str, Any] | Document, position: int) -> Document:
    """Validate a raw corpus entry and return a Document.

    Raises:
        CorpusMalformed: If a required field is missing or has the wrong type.
    """
    if isinstance(entry, Document):
        document = entry
    else:
        if not isinstance(entry, Mapping):
            msg = f"Corpus entry {position} must be an object, got {type(entry).__name__}"
            raise CorpusMalformed(msg, position=position)

        missing = [name for name in REQUIRED_FIELDS if name not in entry]
        if missing:
            msg = f"Corpus entry {position} is missing required field(s): {', '.join(missing)}"
            raise CorpusMalformed(msg, position=position, field=missing[0])

        try:
            document = Document.model_validate(entry)
        except ValidationError as exc:
            error = exc.errors()[0]
            field = str(error["loc"][0]) if error.get("loc") else None
            msg = f"Corpus entry {position} has an invalid '{field}' field: {error['msg']}"
            raise CorpusMalformed(msg, position=position, field=field) from exc

    if document.id is None:
        document = document.model_copy(update={"id": position})
    return document


class DocumentStore:
    """Immutable corpus of indexable documents.

    ``load`` replaces the whole corpus; there is no partial update. Corpus
    order is preserved and used to break ranking ties.
    """

    def __init__(self) -> None:
        self._documents: tuple[Document, ...] = ()
        self._by_id: dict[DocumentId, Document] = {}
        self._positions: dict[DocumentId, int] = {}

    def load(self, documents: Sequence[Mapping[str, Any] | Document]) -> None:
        """Validate every entry and atomically replace the corpus.

        Raises:
            CorpusMalformed: If any entry is malformed or two entries share an id.
                The previously loaded corpus is left untouched.
        """
        validated: list[Document] = []
        by_id: dict[DocumentId, Document] = {}
        positions: dict[DocumentId, int] = {}

        for position, entry in enumerate(documents):
            document = validate_entry(entry, position)
            if document.id in by_id:
                msg = f"Corpus entry {position} reuses document id {document.id!r}"
                raise CorpusMalformed(msg, position=position, field="id")
            validated.append(document)
            by_id[document.id] = document
            positions[document.id] = position

        self._documents = tuple(validated)
        self._by_id = by_id
        self._positions = positions
        logger.debug("Document store loaded %d documents", len(validated))

    def clear(self) -> None:
        self._documents = ()
        self._by_id = {}
        self._positions = {}

    def get(self, doc_id: DocumentId) -> Document:
        """Return the document for ``doc_id``.

        Raises:
            DocumentNotFound: If the id is not part of the loaded corpus.
        """
        try:
            return self._by_id[doc_id]
        except KeyError:
            raise DocumentNotFound(f"Document {doc_id!r} not found") from None

    def position(self, doc_id: DocumentId) -> int:
        """Return the corpus position of ``doc_id``."""
        try:
            return self._positions[doc_id]
        except KeyError:
            raise DocumentNotFound(f"Document {doc_id!r} not found") from None

    @property
    def documents(self) -> tuple[Document, ...]:
        return self._documents

    def __len__(self) -> int:
        return len(self._documents)

    def __iter__(self) -> Iterator[Document]:
        return iter(self._documents)

    def __contains__(self, doc_id: object) -> bool:
        return doc_id in self._by_id
