"""
Vendor-facing request/result models.

These models are internal to the processor and decouple the request handlers
from the Cohere SDK types. The client adapter (cohere_processor.llm) translates
them to SDK calls and back.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ChatRequest(BaseModel):
    """Single-turn chat request: one user message for one model."""
    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model: str = Field(..., description="Model identifier (e.g., 'command-r-plus')")
    message: str = Field(..., description="User message content")


class ChatResult(BaseModel):
    """Chat response reduced to the generated text."""
    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Generated text (text content items concatenated)")
    finish_reason: Optional[str] = Field(default=None, description="Why generation stopped")
    latency_ms: int = Field(default=0, ge=0, description="Call latency in milliseconds")


class EmbedRequest(BaseModel):
    """Embedding request for a list of texts."""
    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model: str = Field(..., description="Embed model identifier (e.g., 'embed-english-v3.0')")
    texts: list[str] = Field(..., min_length=1)
    input_type: Optional[str] = Field(default=None, description="Omitted from the call when None")
    embedding_types: list[str] = Field(default_factory=list)
    truncate: str = Field(default="NONE")


class EmbedResult(BaseModel):
    """
    Embeddings keyed by embedding type.

    Each value holds one vector per input text, e.g. {"float": [[0.1, 0.2]], "int8": [[3, -7]]}.
    """
    model_config = ConfigDict(frozen=True)

    embeddings: dict[str, list[list[Any]]] = Field(default_factory=dict)
    latency_ms: int = Field(default=0, ge=0)


class RerankRequest(BaseModel):
    """Rerank a list of documents against a query."""
    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model: str
    query: str
    documents: list[str] = Field(..., min_length=1)
    top_n: Optional[int] = Field(default=None, ge=1)


class RerankHit(BaseModel):
    """Relevance of one input document (index refers to RerankRequest.documents)."""
    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0)
    relevance_score: float


class RerankResult(BaseModel):
    """Rerank hits, most relevant first."""
    model_config = ConfigDict(frozen=True)

    results: list[RerankHit] = Field(default_factory=list)
    latency_ms: int = Field(default=0, ge=0)
