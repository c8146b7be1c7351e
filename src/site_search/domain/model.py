"""Domain model for corpus documents.

Documents are value objects: validated once at load time and never mutated.
The shape follows the ``search.json`` entries emitted by the site generator.
"""

from pydantic import BaseModel, ConfigDict, Field


DocumentId = int | str

REQUIRED_FIELDS: tuple[str, ...] = ("title", "content", "tags", "categories", "url")


class Document(BaseModel):
    """Immutable, indexable document of the site corpus.

    ``id`` may be omitted in the raw payload; the store then assigns the
    entry's position in the corpus.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: DocumentId | None = None
    title: str
    content: str
    tags: tuple[str, ...]
    categories: tuple[str, ...]
    url: str
    date: str = ""
    slug: str = Field(default="", description="URL slug emitted by the generator, display only")

    def field_values(self, name: str) -> tuple[str, ...]:
        """Return the values of a searchable field as a tuple of strings."""
        value = getattr(self, name)
        if isinstance(value, tuple):
            return value
        return (value,)
