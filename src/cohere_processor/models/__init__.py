"""
Pydantic data models for the Cohere processor.

Includes:
- Enums (ModelFamily, InputType, EmbeddingType, Truncate, Operation)
- ProcessorConfig / EmbedConfig (parsed host configuration)
- Specification / Parameter (host-facing metadata)
- LLM models (ChatRequest, EmbedRequest, RerankRequest and their results)
"""

from cohere_processor.models.enums import (
    ALLOWED_EMBEDDING_TYPES,
    ALLOWED_INPUT_TYPES,
    EmbeddingType,
    InputType,
    ModelFamily,
    Operation,
    Truncate,
)
from cohere_processor.models.processor_config import (
    EmbedConfig,
    ProcessorConfig,
    parse_config,
)
from cohere_processor.models.specification import (
    Parameter,
    ParameterValidation,
    Specification,
)
from cohere_processor.models.llm_models import (
    ChatRequest,
    ChatResult,
    EmbedRequest,
    EmbedResult,
    RerankHit,
    RerankRequest,
    RerankResult,
)

__all__ = [
    # Enums
    "ModelFamily",
    "InputType",
    "EmbeddingType",
    "Truncate",
    "Operation",
    "ALLOWED_EMBEDDING_TYPES",
    "ALLOWED_INPUT_TYPES",
    # Configuration
    "EmbedConfig",
    "ProcessorConfig",
    "parse_config",
    # Specification
    "Parameter",
    "ParameterValidation",
    "Specification",
    # LLM models
    "ChatRequest",
    "ChatResult",
    "EmbedRequest",
    "EmbedResult",
    "RerankHit",
    "RerankRequest",
    "RerankResult",
]
