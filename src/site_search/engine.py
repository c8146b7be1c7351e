"""Site Search Engine - orchestrates corpus, index, fallback and excerpts.

Design:
- Components are injected at construction; nothing is looked up globally
- Queries are gated on a loaded flag that flips only after a complete build
- A reload clears the flag first and rebuilds from scratch
- Query-time failures become a ``failed`` response, never an exception
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping, Sequence
import logging
from pathlib import Path
from typing import Any

from site_search.config import Settings
from site_search.corpus import parse_corpus, read_corpus_file
from site_search.domain.model import Document
from site_search.domain.search import ResultSource, SearchResponse, SearchResult
from site_search.errors import CorpusLoadFailed, CorpusMalformed, SiteSearchError
from site_search.navigator import ResultNavigator
from site_search.observability.logging import configure_logging
from site_search.observability.metrics import (
    CORPUS_LOADS,
    INDEX_DOC_COUNT,
    SEARCH_LATENCY,
    SEARCH_REQUESTS,
    track_latency,
)
from site_search.observability.tracing import create_span, init_tracing
from site_search.search.fallback import FallbackScorer
from site_search.search.index import PrimaryIndex
from site_search.search.models import RankedDocument
from site_search.search.snippet import ExcerptGenerator
from site_search.store import DocumentStore


logger = logging.getLogger(__name__)

CorpusEntries = Sequence[Mapping[str, Any] | Document]
CorpusPayload = bytes | bytearray | str | CorpusEntries


class SearchEngine:
    """Client-side search over a loaded site corpus.

    Interface Methods:
    - load(entries) / load_payload(raw) / aload(fetch): (re)build the corpus and index
    - search(query) -> SearchResponse
    - navigator: selection state for the current results
    """

    def __init__(
        self,
        store: DocumentStore | None = None,
        index: PrimaryIndex | None = None,
        fallback: FallbackScorer | None = None,
        excerpts: ExcerptGenerator | None = None,
        navigator: ResultNavigator | None = None,
    ) -> None:
        self._store = store or DocumentStore()
        self._index = index or PrimaryIndex()
        self._fallback = fallback or FallbackScorer(self._index.schema)
        self._excerpts = excerpts or ExcerptGenerator()
        self._navigator = navigator or ResultNavigator()
        self._loaded = False
        self._last_response: SearchResponse | None = None

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def store(self) -> DocumentStore:
        return self._store

    @property
    def index(self) -> PrimaryIndex:
        return self._index

    @property
    def navigator(self) -> ResultNavigator:
        return self._navigator

    @property
    def last_response(self) -> SearchResponse | None:
        return self._last_response

    # ------------------------------------------------------------------
    # Corpus loading
    # ------------------------------------------------------------------

    def load(self, entries: CorpusEntries) -> None:
        """Replace the corpus and rebuild the index.

        The engine is unavailable for queries from the start of the call
        until the build completes. On failure it stays unavailable.

        Raises:
            CorpusMalformed: If ``entries`` is not a list or any entry lacks a
                required field.
        """
        self._loaded = False
        self._index.reset()
        self.clear()
        if not isinstance(entries, (list, tuple)):
            exc = CorpusMalformed(f"Corpus must be a list of entries, got {type(entries).__name__}")
            self._mark_unavailable(exc)
            raise exc

        with create_span("search.load", attributes={"corpus.entries": len(entries)}):
            try:
                self._store.load(entries)
                self._index.build(self._store.documents)
            except SiteSearchError as exc:
                self._store.clear()
                self._index.reset()
                CORPUS_LOADS.labels(status="failed").inc()
                INDEX_DOC_COUNT.set(0)
                logger.error("Search corpus load failed: %s", exc)
                raise

        self._loaded = True
        CORPUS_LOADS.labels(status="loaded").inc()
        INDEX_DOC_COUNT.set(len(self._store))
        logger.info("Search index loaded with %d documents", len(self._store))

    def load_payload(self, payload: CorpusPayload) -> None:
        """Load a raw ``search.json`` payload or an already-decoded entry list.

        Raises:
            CorpusLoadFailed: If the payload cannot be decoded.
            CorpusMalformed: If the payload or one of its entries is malformed.
        """
        if isinstance(payload, (bytes, bytearray, str)):
            try:
                entries: CorpusEntries = parse_corpus(payload)
            except SiteSearchError as exc:
                self._mark_unavailable(exc)
                raise
        else:
            entries = payload
        self.load(entries)

    def load_file(self, path: Path | str) -> None:
        """Load the corpus from a local ``search.json`` file."""
        try:
            entries = read_corpus_file(path)
        except SiteSearchError as exc:
            self._mark_unavailable(exc)
            raise
        self.load(entries)

    async def aload(self, fetch: Callable[[], Awaitable[CorpusPayload]]) -> bool:
        """Fetch the corpus with ``fetch`` and build the index.

        Failures are logged and leave the engine unavailable; queries then
        return the loading signal.

        Returns:
            True if the index was built.
        """
        self._loaded = False
        try:
            payload = await fetch()
        except Exception as exc:
            self._mark_unavailable(CorpusLoadFailed(f"Corpus fetch failed: {exc}"))
            return False

        try:
            self.load_payload(payload)
        except SiteSearchError:
            return False
        return True

    def _mark_unavailable(self, exc: SiteSearchError) -> None:
        self._loaded = False
        self._store.clear()
        self._index.reset()
        INDEX_DOC_COUNT.set(0)
        CORPUS_LOADS.labels(status="failed").inc()
        logger.error("Search corpus load failed: %s", exc)

    # ------------------------------------------------------------------
    # Querying
    # ------------------------------------------------------------------

    def clear(self) -> None:
        """Drop the current results and selection without running a query."""
        self._set_results(SearchResponse.empty_query())

    def search(self, query: str) -> SearchResponse:
        """Run a query through the index, falling back to substring matching.

        Returns:
            SearchResponse whose status is ``empty_query`` for blank input,
            ``loading`` before the index is built, ``failed`` when evaluation
            breaks, and ``results`` otherwise (possibly with no results).
            Every call replaces the navigator targets and clears the selection.
        """
        needle = query.strip()
        if not needle:
            SEARCH_REQUESTS.labels(status="empty_query", source="none").inc()
            return self._set_results(SearchResponse.empty_query(query))

        if not self._loaded:
            SEARCH_REQUESTS.labels(status="loading", source="none").inc()
            return self._set_results(SearchResponse.loading(query))

        with create_span("search.query", attributes={"search.query": needle}) as span:
            try:
                ranked, source = self._rank(query)
                results = tuple(self._to_result(item, needle) for item in ranked)
            except Exception:
                logger.exception("Search failed for query %r", query)
                SEARCH_REQUESTS.labels(status="failed", source="none").inc()
                return self._set_results(SearchResponse.failed(query))

            span.set_attribute("search.source", source)
            span.set_attribute("search.results", len(results))

        SEARCH_REQUESTS.labels(status="results", source=source).inc()
        logger.debug("Query %r matched %d documents via %s", query, len(results), source)
        return self._set_results(SearchResponse(status="results", query=query, results=results, source=source))

    def _rank(self, query: str) -> tuple[list[RankedDocument], ResultSource]:
        with track_latency(SEARCH_LATENCY, source="primary"):
            ranked = self._index.search(query)
        if ranked:
            return ranked, "primary"
        with track_latency(SEARCH_LATENCY, source="fallback"):
            return self._fallback.search(query, self._store.documents), "fallback"

    def _to_result(self, item: RankedDocument, query: str) -> SearchResult:
        document = self._store.get(item.doc_id)
        return SearchResult(
            document_id=item.doc_id,
            score=item.score,
            excerpt=self._excerpts.generate(document.content, query),
            title=document.title,
            title_html=self._excerpts.highlight(document.title, query),
            url=document.url,
            date=document.date,
            tags=document.tags,
            categories=document.categories,
        )

    def _set_results(self, response: SearchResponse) -> SearchResponse:
        self._last_response = response
        self._navigator.replace([result.url for result in response.results])
        return response


def create_search_engine(settings: Settings | None = None, *, observability: bool = False) -> SearchEngine:
    """Factory wiring default components from settings.

    Loads ``settings.corpus_path`` when configured; a failed load is logged
    and leaves the engine returning the loading signal. With
    ``observability=True`` the root logger and tracer provider are set up
    from ``log_level``, ``log_json`` and ``service_name`` first.
    """
    settings = settings or Settings()
    if observability:
        configure_logging(settings.log_level, json_output=settings.log_json)
        init_tracing(settings.service_name)

    index = PrimaryIndex()
    engine = SearchEngine(
        index=index,
        fallback=FallbackScorer(index.schema, limit=settings.fallback_result_limit),
        excerpts=ExcerptGenerator(
            settings.excerpt_max_length,
            context_before=settings.excerpt_context_before,
            context_after=settings.excerpt_context_after,
        ),
    )
    if settings.has_corpus_path():
        try:
            engine.load_file(settings.corpus_path)
        except SiteSearchError:
            logger.warning("Search engine started without a corpus; queries will report loading")
    return engine
