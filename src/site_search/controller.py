"""UI-facing controller translating panel events into engine calls.

The controller holds no DOM state. A page script forwards input, key and
open/close events, then renders ``response`` and ``navigator.selected_index``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging

from site_search.domain.search import SearchResponse
from site_search.engine import SearchEngine
from site_search.navigator import ResultNavigator


logger = logging.getLogger(__name__)


class Key(str, Enum):
    """Keys the search panel reacts to."""

    ARROW_DOWN = "ArrowDown"
    ARROW_UP = "ArrowUp"
    ENTER = "Enter"
    ESCAPE = "Escape"


class KeyAction(str, Enum):
    """What the UI should do after a key press."""

    NONE = "none"
    SELECT = "select"
    NAVIGATE = "navigate"
    CLOSE = "close"


@dataclass(frozen=True)
class KeyOutcome:
    """Result of a key press: the action plus the selection or target it concerns."""

    action: KeyAction
    selected_index: int = -1
    url: str | None = None


class SearchController:
    """Search panel state driven by UI events."""

    def __init__(self, engine: SearchEngine) -> None:
        self._engine = engine
        self._is_open = False
        self._query = ""

    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    def query(self) -> str:
        return self._query

    @property
    def response(self) -> SearchResponse:
        return self._engine.last_response or SearchResponse.empty_query()

    @property
    def navigator(self) -> ResultNavigator:
        return self._engine.navigator

    def on_open(self) -> None:
        self._is_open = True
        self.navigator.reset()

    def on_close(self) -> None:
        """Hide the panel and clear query, results and selection."""
        self._is_open = False
        self._query = ""
        self._engine.clear()

    def on_query_changed(self, text: str) -> SearchResponse:
        self._query = text
        return self._engine.search(text)

    def on_key(self, key: str | Key) -> KeyOutcome:
        """Apply a key press to the selection state.

        Unknown keys are ignored and reported as ``KeyAction.NONE``.
        """
        try:
            pressed = Key(key)
        except ValueError:
            return KeyOutcome(KeyAction.NONE, self.navigator.selected_index)

        if pressed is Key.ESCAPE:
            self.on_close()
            return KeyOutcome(KeyAction.CLOSE)
        if pressed is Key.ARROW_DOWN:
            return KeyOutcome(KeyAction.SELECT, self.navigator.next())
        if pressed is Key.ARROW_UP:
            return KeyOutcome(KeyAction.SELECT, self.navigator.prev())

        url = self.navigator.activate()
        if url is None:
            return KeyOutcome(KeyAction.NONE, self.navigator.selected_index)
        logger.info("Navigating to search result %s", url)
        return KeyOutcome(KeyAction.NAVIGATE, self.navigator.selected_index, url)

    @property
    def status_text(self) -> str:
        """Short status line for the current response."""
        response = self.response
        status = response.status
        if status == "empty_query":
            return ""
        if status == "loading":
            return "Search index loading..."
        if status == "failed":
            return response.error or "Search failed, please retry"
        if not response.has_results:
            return "No results found"
        noun = "result" if response.total == 1 else "results"
        return f"Found {response.total} {noun}"
