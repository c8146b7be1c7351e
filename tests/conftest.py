"""Shared test fixtures and configuration."""

import os
from pathlib import Path
import sys

import pytest


REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))


# Clear any SITE_SEARCH_* values leaking in from the developer's shell
for key in [name for name in os.environ if name.upper().startswith("SITE_SEARCH_")]:
    del os.environ[key]

# Now we can safely import config-dependent modules
from site_search.engine import SearchEngine
from tests.fixtures.corpus import RUST_CORPUS


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Make sure settings come from defaults unless a test overrides them."""
    for key in [name for name in os.environ if name.upper().startswith("SITE_SEARCH_")]:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def rust_corpus():
    """Fresh copy of the two-document rust corpus."""
    return [dict(entry) for entry in RUST_CORPUS]


@pytest.fixture
def engine(rust_corpus):
    """Search engine loaded with the rust corpus."""
    search_engine = SearchEngine()
    search_engine.load(rust_corpus)
    return search_engine
