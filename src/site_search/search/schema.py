"""
Index configuration for the site search.

An ``IndexSchema`` is a plain configuration value consumed by the pure
``build_index`` function. It declares:
- which document fields are indexed
- each field's fixed weight in scoring
- whether a field counts term frequency or only presence
- whether the analyzer applies stemming (off by default)
"""

from __future__ import annotations

from dataclasses import dataclass, field


TITLE_WEIGHT = 10.0
CONTENT_WEIGHT = 5.0
TAGS_WEIGHT = 8.0
CATEGORIES_WEIGHT = 6.0


@dataclass(frozen=True)
class IndexField:
    """
    A weighted, searchable document field.

    Args:
        name: Document attribute name (e.g., "title", "tags")
        weight: Fixed multiplier applied to matches in this field
        per_token: Count every occurrence of a term (True) or only its
            presence in the field (False, used for tags and categories)
    """

    name: str
    weight: float
    per_token: bool = True


@dataclass(frozen=True)
class IndexSchema:
    """
    Explicit index configuration.

    Example:
        schema = IndexSchema(
            fields=(
                IndexField("title", 10.0),
                IndexField("tags", 8.0, per_token=False),
            ),
            stemming=False,
        )
    """

    fields: tuple[IndexField, ...]
    stemming: bool = False
    _field_map: dict[str, IndexField] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        field_map = {f.name: f for f in self.fields}
        if len(field_map) != len(self.fields):
            msg = "Index schema declares the same field twice"
            raise ValueError(msg)
        for index_field in self.fields:
            if index_field.weight <= 0:
                msg = f"Field '{index_field.name}' must have a positive weight"
                raise ValueError(msg)
        object.__setattr__(self, "_field_map", field_map)

    def __getitem__(self, name: str) -> IndexField:
        return self._field_map[name]

    def __contains__(self, name: object) -> bool:
        return name in self._field_map

    def __iter__(self):
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def get_weight(self, field_name: str) -> float:
        """Get the weight of a field, 0.0 for undeclared fields."""
        if field_name in self._field_map:
            return self._field_map[field_name].weight
        return 0.0


def create_default_schema() -> IndexSchema:
    """
    Create the boost table used for site search.

    Fields:
    - title: weight 10
    - content: weight 5
    - tags: weight 8, presence per document
    - categories: weight 6, presence per document
    """
    return IndexSchema(
        fields=(
            IndexField("title", TITLE_WEIGHT),
            IndexField("content", CONTENT_WEIGHT),
            IndexField("tags", TAGS_WEIGHT, per_token=False),
            IndexField("categories", CATEGORIES_WEIGHT, per_token=False),
        ),
        stemming=False,
    )
