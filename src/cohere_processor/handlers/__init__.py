"""
Request handlers, one per Cohere model family.

Components:
- RequestHandler: Abstract per-record loop (stops at the first failed record)
- CommandHandler: Chat, no retry
- EmbedHandler: Embeddings, backoff retries on transient vendor errors
- RerankHandler: Rerank, no retry
"""

from cohere_processor.handlers.base import RequestHandler
from cohere_processor.handlers.command import CommandHandler
from cohere_processor.handlers.embed import EmbedHandler
from cohere_processor.handlers.exceptions import PayloadError
from cohere_processor.handlers.rerank import RerankHandler

__all__ = [
    "RequestHandler",
    "CommandHandler",
    "EmbedHandler",
    "RerankHandler",
    "PayloadError",
]
