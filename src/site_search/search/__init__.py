"""
Search indexing and query package.

This package provides the pure-Python search stack behind the site search:
- schema: Indexed fields and their fixed weights
- analyzers: Tokenizer and filters (trim, lowercase, optional stemming)
- index: Inverted index build and weighted scoring
- fallback: Substring scorer for queries the index misses
- snippet: Excerpt windows and HTML-safe highlighting
"""
