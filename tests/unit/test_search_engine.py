"""Unit tests for the search orchestrator."""

import json
from unittest.mock import patch

import pytest

from site_search.config import Settings
from site_search.engine import SearchEngine, create_search_engine
from site_search.errors import CorpusLoadFailed, CorpusMalformed
from site_search.observability.metrics import SEARCH_REQUESTS
from site_search.search.fallback import FallbackScorer
from site_search.search.index import PrimaryIndex
from site_search.search.snippet import strip_highlights
from tests.fixtures.corpus import make_entry


pytestmark = pytest.mark.unit


def _engine_with(entries):
    index = PrimaryIndex()
    fallback = FallbackScorer(index.schema)
    engine = SearchEngine(index=index, fallback=fallback)
    engine.load(entries)
    return engine, index, fallback


class TestQueryGate:
    @pytest.mark.parametrize("query", ["", "   ", "\t\n"])
    def test_blank_query_skips_index_and_fallback(self, rust_corpus, query):
        engine, index, fallback = _engine_with(rust_corpus)

        with patch.object(index, "search") as index_search, patch.object(fallback, "search") as fallback_search:
            response = engine.search(query)

        assert response.status == "empty_query"
        assert response.results == ()
        index_search.assert_not_called()
        fallback_search.assert_not_called()

    def test_query_before_load_reports_loading(self):
        engine = SearchEngine()

        response = engine.search("rust")

        assert response.status == "loading"
        assert response.results == ()
        assert engine.is_loaded is False

    def test_blank_query_before_load_is_still_empty_query(self):
        assert SearchEngine().search(" ").status == "empty_query"


class TestRanking:
    def test_end_to_end_rust_scenario(self, engine):
        response = engine.search("rust")

        assert response.status == "results"
        assert response.source == "primary"
        assert [r.document_id for r in response.results] == [1, 2]
        assert response.results[0].score > response.results[1].score
        assert response.results[1].score == 5.0

    def test_result_carries_display_fields(self, engine):
        first = engine.search("rust").results[0]

        assert first.title == "Rust Guide"
        assert first.title_html == "<mark>Rust</mark> Guide"
        assert first.excerpt == "Learn <mark>Rust</mark> today"
        assert first.url == "/a"
        assert first.date == "2024"
        assert first.tags == ("rust",)

    def test_title_match_outranks_content_match(self):
        engine, _, _ = _engine_with(
            [
                make_entry("content", title="Misc", content="python snippets"),
                make_entry("title", title="Python tips", content="misc"),
            ]
        )

        scores = {r.document_id: r.score for r in engine.search("python").results}

        assert scores["title"] == 10.0
        assert scores["content"] == 5.0

    def test_no_matches_anywhere_returns_empty_results(self, engine):
        response = engine.search("haskell")

        assert response.status == "results"
        assert response.source == "fallback"
        assert response.results == ()


class TestFallback:
    def test_fallback_used_only_when_primary_is_empty(self):
        engine, index, fallback = _engine_with(
            [make_entry("sys", title="Systems", content="memory notes", tags=["rustlang"])]
        )

        with patch.object(fallback, "search", wraps=fallback.search) as fallback_search:
            response = engine.search("lang")

        fallback_search.assert_called_once()
        assert response.source == "fallback"
        assert [r.document_id for r in response.results] == ["sys"]
        assert response.results[0].score >= 8

    def test_fallback_not_called_when_primary_matches(self, rust_corpus):
        engine, _, fallback = _engine_with(rust_corpus)

        with patch.object(fallback, "search") as fallback_search:
            response = engine.search("rust")

        fallback_search.assert_not_called()
        assert response.source == "primary"

    def test_fallback_finds_cjk_substring(self):
        engine, _, _ = _engine_with([make_entry(1, title="公告", content="欢迎使用中文搜索功能")])

        response = engine.search("搜索")

        assert response.source == "fallback"
        assert response.results[0].score == 5.0
        assert "<mark>搜索</mark>" in response.results[0].excerpt


class TestExcerpts:
    def test_excerpt_escapes_markup_in_query(self):
        engine, _, _ = _engine_with([make_entry(1, title="HTML", content="use <b> tags sparingly")])

        result = engine.search("<b>").results[0]

        assert result.excerpt == "use <mark>&lt;b&gt;</mark> tags sparingly"

    def test_excerpt_without_literal_match_has_no_highlight(self):
        engine, _, _ = _engine_with([make_entry(1, title="Rust", content="x" * 300)])

        result = engine.search("rust").results[0]

        assert "<mark>" not in result.excerpt
        assert len(strip_highlights(result.excerpt)) <= 156


class TestFailures:
    def test_query_error_becomes_failed_response(self, rust_corpus):
        engine, index, _ = _engine_with(rust_corpus)

        with patch.object(index, "search", side_effect=RuntimeError("pathological")):
            response = engine.search("rust")

        assert response.status == "failed"
        assert response.error
        assert engine.search("rust").status == "results"

    def test_malformed_reload_leaves_engine_unloaded(self, engine):
        with pytest.raises(CorpusMalformed):
            engine.load([{"title": "no url"}])

        assert engine.is_loaded is False
        assert engine.search("rust").status == "loading"

    def test_explicit_reload_recovers(self, engine, rust_corpus):
        with pytest.raises(CorpusMalformed):
            engine.load([{"title": "no url"}])

        engine.load(rust_corpus)

        assert engine.search("rust").status == "results"

    def test_undecodable_payload_is_load_failure(self, engine):
        with pytest.raises(CorpusLoadFailed):
            engine.load_payload(b"not json")

        assert engine.is_loaded is False
        assert len(engine.store) == 0

    def test_non_list_entries_are_malformed(self, engine):
        with pytest.raises(CorpusMalformed, match="list of entries"):
            engine.load({"title": "not a list"})

        assert engine.is_loaded is False
        assert len(engine.store) == 0


class TestAsyncLoad:
    @pytest.mark.asyncio
    async def test_aload_builds_index(self, rust_corpus):
        engine = SearchEngine()

        async def fetch():
            return json.dumps(rust_corpus).encode("utf-8")

        assert await engine.aload(fetch) is True
        assert engine.is_loaded is True
        assert len(engine.search("rust").results) == 2

    @pytest.mark.asyncio
    async def test_aload_transport_failure_is_logged_not_raised(self, caplog):
        engine = SearchEngine()

        async def fetch():
            raise OSError("connection reset")

        assert await engine.aload(fetch) is False
        assert engine.search("rust").status == "loading"
        assert "connection reset" in caplog.text

    @pytest.mark.asyncio
    async def test_aload_malformed_payload_returns_false(self):
        engine = SearchEngine()

        async def fetch():
            return [{"title": "missing everything else"}]

        assert await engine.aload(fetch) is False
        assert engine.is_loaded is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [None, 42, {"title": "Rust"}])
    async def test_aload_non_corpus_payload_returns_false(self, payload):
        engine = SearchEngine()

        async def fetch():
            return payload

        assert await engine.aload(fetch) is False
        assert engine.is_loaded is False
        assert engine.search("rust").status == "loading"


class TestNavigatorReset:
    def test_new_results_reset_selection(self, engine):
        engine.search("rust")
        engine.navigator.next()
        assert engine.navigator.selected_index == 0

        engine.search("cooking")

        assert engine.navigator.selected_index == -1
        assert engine.navigator.targets == ("/b",)

    @pytest.mark.parametrize("next_query", ["RUST", "rust ", "rust"])
    def test_every_query_resets_selection_even_with_same_results(self, engine, next_query):
        first = engine.search("rust")
        engine.navigator.next()

        second = engine.search(next_query)

        assert second.results == first.results
        assert engine.navigator.selected_index == -1
        assert engine.navigator.targets == ("/a", "/b")

    def test_clear_resets_without_counting_a_query(self, engine):
        engine.search("rust")
        engine.navigator.next()
        before = SEARCH_REQUESTS.labels(status="empty_query", source="none")._value.get()

        engine.clear()

        assert engine.last_response.status == "empty_query"
        assert engine.navigator.selected_index == -1
        assert len(engine.navigator) == 0
        assert SEARCH_REQUESTS.labels(status="empty_query", source="none")._value.get() == before

    def test_clearing_query_empties_navigator(self, engine):
        engine.search("rust")
        engine.navigator.next()

        engine.search("")

        assert engine.navigator.selected_index == -1
        assert len(engine.navigator) == 0

    def test_navigator_targets_follow_result_order(self, engine):
        engine.search("rust")

        assert engine.navigator.targets == ("/a", "/b")
        engine.navigator.prev()
        assert engine.navigator.activate() == "/b"


class TestFactory:
    def test_factory_loads_configured_corpus(self, tmp_path, rust_corpus):
        path = tmp_path / "search.json"
        path.write_text(json.dumps(rust_corpus), encoding="utf-8")

        engine = create_search_engine(Settings(corpus_path=path, fallback_result_limit=1))

        assert engine.is_loaded is True
        assert engine.search("rust").status == "results"

    def test_factory_applies_fallback_limit(self, tmp_path):
        path = tmp_path / "search.json"
        path.write_text(json.dumps([make_entry(n, title=f"golang {n}") for n in range(4)]), encoding="utf-8")

        engine = create_search_engine(Settings(corpus_path=path, fallback_result_limit=2))

        assert len(engine.search("lang").results) == 2

    def test_factory_survives_missing_corpus(self, tmp_path):
        engine = create_search_engine(Settings(corpus_path=tmp_path / "missing.json"))

        assert engine.is_loaded is False
        assert engine.search("rust").status == "loading"

    def test_factory_without_corpus_path(self):
        engine = create_search_engine(Settings())

        assert engine.is_loaded is False

    def test_factory_configures_observability_on_request(self):
        settings = Settings(log_level="debug", log_json=False, service_name="docs-site")

        with (
            patch("site_search.engine.configure_logging") as configure_logging,
            patch("site_search.engine.init_tracing") as init_tracing,
        ):
            create_search_engine(settings, observability=True)
            create_search_engine(settings)

        configure_logging.assert_called_once_with("debug", json_output=False)
        init_tracing.assert_called_once_with("docs-site")
