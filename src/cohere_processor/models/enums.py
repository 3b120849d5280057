"""
Enumerations for Cohere processor configuration and records.

All enums are closed taxonomies - no values outside these sets are permitted.
"""

from enum import Enum


class ModelFamily(str, Enum):
    """
    Cohere model family served by a processor instance.

    Selects the request handler once, at configuration time.
    """

    COMMAND = "command"
    EMBED = "embed"
    RERANK = "rerank"


class InputType(str, Enum):
    """Type of input passed to an embed model (required for v3 models and higher)."""

    SEARCH_DOCUMENT = "search_document"
    SEARCH_QUERY = "search_query"
    CLASSIFICATION = "classification"
    CLUSTERING = "clustering"
    IMAGE = "image"


class EmbeddingType(str, Enum):
    """Embedding encodings an embed model can return."""

    FLOAT = "float"
    INT8 = "int8"
    UINT8 = "uint8"
    BINARY = "binary"
    UBINARY = "ubinary"


class Truncate(str, Enum):
    """
    Handling of inputs longer than the model's maximum token length.

    START trims from the beginning, END from the end, NONE returns an error.
    """

    NONE = "NONE"
    START = "START"
    END = "END"


class Operation(str, Enum):
    """Change operation carried by a record."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    SNAPSHOT = "snapshot"


ALLOWED_EMBEDDING_TYPES: frozenset[str] = frozenset(e.value for e in EmbeddingType)
ALLOWED_INPUT_TYPES: frozenset[str] = frozenset(i.value for i in InputType)
