"""Excerpt extraction and highlighting for search results.

Excerpts are HTML-safe: document text and the echoed query are escaped,
and only the ``<mark>`` wrappers added here are markup.

Smart Defaults:
- Window keeps 50 characters before and 100 after the first literal match
- The visible window never exceeds ``max_length`` characters
- No literal match (the index matched tokens, not the phrase) means no
  highlighting, just the opening of the content
"""

from __future__ import annotations

from html import escape, unescape
import re


ELLIPSIS = "..."
HIGHLIGHT_OPEN = "<mark>"
HIGHLIGHT_CLOSE = "</mark>"

DEFAULT_MAX_LENGTH = 150
DEFAULT_CONTEXT_BEFORE = 50
DEFAULT_CONTEXT_AFTER = 100


def _literal_pattern(query: str) -> re.Pattern[str]:
    return re.compile(re.escape(query), re.IGNORECASE)


def highlight(text: str, query: str) -> str:
    """Wrap every case-insensitive literal occurrence of ``query`` in ``<mark>``.

    Args:
        text: Text to highlight.
        query: Literal string to look for; regex metacharacters match themselves.

    Returns:
        ``text`` unchanged for a blank query, otherwise the escaped text with
        highlighted matches.
    """
    if not query.strip():
        return text

    parts: list[str] = []
    last = 0
    for match in _literal_pattern(query).finditer(text):
        parts.append(escape(text[last : match.start()]))
        parts.append(f"{HIGHLIGHT_OPEN}{escape(match.group(0))}{HIGHLIGHT_CLOSE}")
        last = match.end()
    parts.append(escape(text[last:]))
    return "".join(parts)


def excerpt_window(
    content_length: int,
    match_start: int,
    match_end: int,
    *,
    max_length: int = DEFAULT_MAX_LENGTH,
    context_before: int = DEFAULT_CONTEXT_BEFORE,
    context_after: int = DEFAULT_CONTEXT_AFTER,
) -> tuple[int, int]:
    """Return the ``(start, end)`` bounds of the excerpt around a match.

    Trailing context is trimmed first when the window would exceed
    ``max_length``; a match longer than the window starts it at the match.
    """
    start = max(0, match_start - context_before)
    end = min(content_length, match_end + context_after)
    if end - start > max_length:
        end = start + max_length
        if end < match_end:
            start = match_start
            end = min(content_length, start + max_length)
    return start, end


def generate_excerpt(
    content: str,
    query: str,
    max_length: int = DEFAULT_MAX_LENGTH,
    *,
    context_before: int = DEFAULT_CONTEXT_BEFORE,
    context_after: int = DEFAULT_CONTEXT_AFTER,
) -> str:
    """Build a bounded, highlighted excerpt around the first match of ``query``.

    Args:
        content: Full document text.
        query: Literal query string.
        max_length: Maximum visible characters, ellipses excluded.
        context_before: Characters kept before the match.
        context_after: Characters kept after the match.

    Returns:
        HTML-safe excerpt, with ``...`` on each side that was cut.
    """
    match = _literal_pattern(query).search(content) if query.strip() else None

    if match is None:
        head = escape(content[:max_length])
        return head + ELLIPSIS if len(content) > max_length else head

    start, end = excerpt_window(
        len(content),
        match.start(),
        match.end(),
        max_length=max_length,
        context_before=context_before,
        context_after=context_after,
    )
    excerpt = highlight(content[start:end], query)
    if start > 0:
        excerpt = ELLIPSIS + excerpt
    if end < len(content):
        excerpt = excerpt + ELLIPSIS
    return excerpt


def strip_highlights(text: str) -> str:
    """Remove highlight markup and decode entities, leaving the excerpt's visible text."""
    return unescape(text.replace(HIGHLIGHT_OPEN, "").replace(HIGHLIGHT_CLOSE, ""))


class ExcerptGenerator:
    """Excerpt builder bound to configured window sizes."""

    def __init__(
        self,
        max_length: int = DEFAULT_MAX_LENGTH,
        *,
        context_before: int = DEFAULT_CONTEXT_BEFORE,
        context_after: int = DEFAULT_CONTEXT_AFTER,
    ) -> None:
        self.max_length = max_length
        self.context_before = context_before
        self.context_after = context_after

    def generate(self, content: str, query: str) -> str:
        return generate_excerpt(
            content,
            query,
            self.max_length,
            context_before=self.context_before,
            context_after=self.context_after,
        )

    def highlight(self, text: str, query: str) -> str:
        return highlight(text, query)
