"""
In-memory indexing and TF-IDF ranking package.

- analyzers: Tokenizer pipeline and the ``tokenize`` helper
- models: Document, Posting and RankedDocument value types
- stats: TF-IDF scoring helpers
- index_engine: Document store, inverted index, and query ranking
"""
