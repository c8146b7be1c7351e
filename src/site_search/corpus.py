"""Decoding of the generated ``search.json`` corpus payload."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import orjson

from site_search.errors import CorpusLoadFailed, CorpusMalformed


logger = logging.getLogger(__name__)


def parse_corpus(payload: bytes | bytearray | str) -> list[dict[str, Any]]:
    """Decode a raw corpus payload into a list of entries.

    Raises:
        CorpusLoadFailed: If the payload is not valid JSON.
        CorpusMalformed: If the payload is valid JSON but not an array.
    """
    try:
        data = orjson.loads(payload)
    except orjson.JSONDecodeError as exc:
        raise CorpusLoadFailed(f"Corpus payload is not valid JSON: {exc}") from exc

    if not isinstance(data, list):
        msg = f"Corpus payload must be a JSON array, got {type(data).__name__}"
        raise CorpusMalformed(msg)
    return data


def read_corpus_file(path: Path | str) -> list[dict[str, Any]]:
    """Read and decode a corpus file from disk.

    Raises:
        CorpusLoadFailed: If the file cannot be read or decoded.
        CorpusMalformed: If the file does not hold a JSON array.
    """
    corpus_path = Path(path)
    try:
        payload = corpus_path.read_bytes()
    except OSError as exc:
        raise CorpusLoadFailed(f"Unable to read corpus file {corpus_path}: {exc}") from exc

    entries = parse_corpus(payload)
    logger.debug("Read %d corpus entries from %s", len(entries), corpus_path)
    return entries
