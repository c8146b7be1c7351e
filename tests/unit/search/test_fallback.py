"""Unit tests for the substring fallback scorer."""

import pytest

from site_search.search.fallback import FallbackScorer
from site_search.search.models import RankedDocument
from tests.fixtures.corpus import make_documents, make_entry


pytestmark = pytest.mark.unit


def test_mid_word_tag_match_scores_tag_weight():
    documents = make_documents([make_entry("sys", title="Systems", content="memory notes", tags=["rustlang"])])

    results = FallbackScorer().search("lang", documents)

    assert results == [RankedDocument("sys", 8.0)]


def test_weights_add_across_distinct_fields():
    documents = make_documents(
        [make_entry(1, title="Rustacean", content="rustacean things", tags=["rusty"], categories=["rustbelt"])]
    )

    assert FallbackScorer().search("rust", documents) == [RankedDocument(1, 29.0)]


def test_field_weight_counts_once_per_field():
    documents = make_documents([make_entry(1, content="rust rust rust", tags=["rust1", "rust2"])])

    assert FallbackScorer().search("rust", documents) == [RankedDocument(1, 13.0)]


def test_match_is_case_insensitive():
    documents = make_documents([make_entry(1, title="Language Server")])

    assert FallbackScorer().search("LANG", documents) == [RankedDocument(1, 10.0)]


def test_query_matches_punctuation_adjacent_text():
    documents = make_documents([make_entry(1, content="see foo.bar(baz) for details")])

    assert FallbackScorer().search("bar(baz", documents) == [RankedDocument(1, 5.0)]


def test_results_sorted_by_score_then_corpus_order():
    documents = make_documents(
        [
            make_entry("a", content="xlang"),
            make_entry("b", title="xlang"),
            make_entry("c", content="xlang"),
        ]
    )

    results = FallbackScorer().search("lang", documents)

    assert [r.doc_id for r in results] == ["b", "a", "c"]


def test_results_are_capped():
    documents = make_documents([make_entry(n, title=f"post {n} golang") for n in range(15)])

    results = FallbackScorer().search("lang", documents)

    assert [r.doc_id for r in results] == list(range(10))


def test_custom_limit():
    documents = make_documents([make_entry(n, title="golang") for n in range(5)])

    assert len(FallbackScorer(limit=2).search("lang", documents)) == 2


def test_no_match_and_blank_query_return_empty():
    documents = make_documents([make_entry(1, title="Rust")])

    assert FallbackScorer().search("python", documents) == []
    assert FallbackScorer().search("  ", documents) == []
