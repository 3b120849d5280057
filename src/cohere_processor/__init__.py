"""
Cohere record processor for stream-processing pipelines.

Forwards each record's payload to one of Cohere's model families and writes
the response back into a configurable field of the record:
- Command (chat / text generation)
- Embed (embeddings, with backoff retries on transient failures)
- Rerank (document relevance scoring)

Architecture: host lifecycle (configure → specification → process) + Cohere SDK over httpx
"""

__version__ = "0.1.0"
