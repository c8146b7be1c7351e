"""Tokenizer and filter pipeline used by the index and its queries.

Text is split on whitespace and hyphens, stripped of leading and trailing
punctuation, then lowercased. Stemming is off by default so CJK and other
non-Latin runs are indexed as raw tokens instead of truncated stems.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass
import re
from typing import Protocol


@dataclass
class Token:
    """Represents a token emitted by analyzers."""

    text: str
    position: int
    start_char: int
    end_char: int

    def copy_with(self, **updates: object) -> Token:
        data = {
            "text": self.text,
            "position": self.position,
            "start_char": self.start_char,
            "end_char": self.end_char,
        }
        data.update(updates)
        return Token(**data)  # type: ignore[arg-type]


class Analyzer(Protocol):
    """Protocol implemented by analyzers."""

    def __call__(self, text: str) -> list[Token]:  # pragma: no cover - interface definition
        ...


class Tokenizer(Protocol):
    """Protocol implemented by tokenizers."""

    def __call__(self, text: str) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


class TokenFilter(Protocol):
    """Protocol implemented by token filters."""

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


class SeparatorTokenizer:
    """Yields runs of text between separators (whitespace and hyphens by default)."""

    def __init__(self, pattern: str = r"[^\s\-]+", flags: int = re.UNICODE) -> None:
        self.pattern = re.compile(pattern, flags)

    def __call__(self, text: str) -> Iterator[Token]:
        for position, match in enumerate(self.pattern.finditer(text)):
            yield Token(
                text=match.group(0),
                position=position,
                start_char=match.start(),
                end_char=match.end(),
            )


class TrimFilter:
    """Strips leading and trailing non-word characters, dropping tokens left empty."""

    _LEADING = re.compile(r"^\W+", re.UNICODE)
    _TRAILING = re.compile(r"\W+$", re.UNICODE)

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            leading = self._LEADING.match(token.text)
            trimmed = self._LEADING.sub("", token.text)
            trimmed = self._TRAILING.sub("", trimmed)
            if not trimmed:
                continue
            if trimmed == token.text:
                yield token
                continue
            start = token.start_char + (leading.end() if leading else 0)
            yield token.copy_with(text=trimmed, start_char=start, end_char=start + len(trimmed))


class LowercaseFilter:
    """Filter that lowercases token text."""

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if token.text.islower():
                yield token
            else:
                yield token.copy_with(text=token.text.lower())


_SUFFIX_RULES: tuple[tuple[str, str], ...] = (
    ("ization", "ize"),
    ("ational", "ate"),
    ("fulness", "ful"),
    ("iveness", "ive"),
    ("tional", "tion"),
    ("ation", "ate"),
    ("ness", ""),
    ("ment", ""),
)

_SIMPLE_SUFFIXES: tuple[str, ...] = ("ingly", "edly", "ing", "ed", "ly", "es", "s")


def _stem(word: str) -> str:
    for suffix, replacement in _SUFFIX_RULES:
        if word.endswith(suffix) and len(word) - len(suffix) >= 2:
            return word[: -len(suffix)] + replacement
    for suffix in _SIMPLE_SUFFIXES:
        if word.endswith(suffix) and len(word) - len(suffix) >= 2:
            return word[: -len(suffix)]
    return word


class StemFilter:
    """Applies a small English suffix-stripping stemmer to ASCII tokens."""

    def __init__(self, stem: Callable[[str], str] = _stem) -> None:
        self._stem = stem

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if token.text.isascii():
                yield token.copy_with(text=self._stem(token.text))
            else:
                yield token


class AnalyzerPipeline:
    """Composable analyzer pipeline (tokenizer + filters)."""

    def __init__(self, tokenizer: Tokenizer, filters: Sequence[TokenFilter] | None = None) -> None:
        self.tokenizer = tokenizer
        self.filters = list(filters or [])

    def __call__(self, text: str) -> list[Token]:
        stream: Iterable[Token] = self.tokenizer(text)
        for token_filter in self.filters:
            stream = token_filter(stream)
        tokens = list(stream)
        for idx, token in enumerate(tokens):  # normalize positions post-filtering
            token.position = idx
        return tokens


class StandardAnalyzer:
    """Default analyzer shared by every indexed field and by queries."""

    def __init__(self, *, apply_stemming: bool = False) -> None:
        filters: list[TokenFilter] = [TrimFilter(), LowercaseFilter()]
        if apply_stemming:
            filters.append(StemFilter())
        self.pipeline = AnalyzerPipeline(SeparatorTokenizer(), filters)

    def __call__(self, text: str) -> list[Token]:
        if not text:
            return []
        return self.pipeline(text)

    def terms(self, text: str) -> list[str]:
        """Return token texts only, in order of appearance."""
        return [token.text for token in self(text)]


def get_analyzer(*, stemming: bool = False) -> StandardAnalyzer:
    """Return the analyzer matching an index's stemming setting."""
    return StandardAnalyzer(apply_stemming=stemming)
