"""
Search indexing and query engine package.

This package provides a pure-Python search stack:
- analyzers: Mixed-script tokenization (ASCII words + character bigrams)
- indexer: Inverted index and corpus statistics
- stats: BM25 term saturation and IDF
- bm25_engine: Query scoring engine
- snippet: Snippet windows and <mark> highlighting
- search_index: The public search() entry point
"""
