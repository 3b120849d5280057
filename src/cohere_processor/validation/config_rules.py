"""
Cross-field configuration rules.

Applied after parsing, in a fixed order: the first violated rule is reported
and evaluation stops (errors are not aggregated).

Rules for model == "embed":
    1. modelVersion belongs to the embed family
    2. embedConfig is present
    3. v3 models carry a valid inputType
    4. inputType, when set, is an allowed value
    5. at least one embeddingType
    6. every embeddingType is an allowed value

Other models must not carry embedConfig.
"""

from typing import TYPE_CHECKING

import structlog

from cohere_processor.models.enums import (
    ALLOWED_EMBEDDING_TYPES,
    ALLOWED_INPUT_TYPES,
    ModelFamily,
)
from cohere_processor.validation.exceptions import ConfigValidationError

if TYPE_CHECKING:
    from cohere_processor.models.processor_config import ProcessorConfig

logger = structlog.get_logger(__name__)


def validate_config(config: "ProcessorConfig") -> None:
    """
    Validate cross-field rules of a parsed configuration.

    Raises:
        ConfigValidationError: On the first violated rule
    """
    if config.model == ModelFamily.EMBED.value:
        validate_embed_model(config)
    elif config.embed_config is not None:
        raise ConfigValidationError(
            "embedConfig is only supported when model is 'embed'",
            rule_name="embed_config_unexpected",
            invalid_value=config.model,
        )

    logger.debug("Configuration validated", model=config.model, model_version=config.model_version)


def validate_embed_model(config: "ProcessorConfig") -> None:
    """Validate configuration specific to the embed model."""
    if ModelFamily.EMBED.value not in config.model_version:
        raise ConfigValidationError(
            "modelVersion does not belong to provided model",
            rule_name="model_version_family",
            invalid_value=config.model_version,
        )

    embed = config.embed_config
    if embed is None:
        raise ConfigValidationError(
            "embedConfig is required when model is 'embed'",
            rule_name="embed_config_required",
        )

    if "v3" in config.model_version and embed.input_type not in ALLOWED_INPUT_TYPES:
        raise ConfigValidationError(
            f"invalid or missing inputType for v3 models: {embed.input_type}",
            rule_name="input_type_v3",
            invalid_value=embed.input_type,
        )

    if embed.input_type and embed.input_type not in ALLOWED_INPUT_TYPES:
        raise ConfigValidationError(
            f"invalid inputType: {embed.input_type}",
            rule_name="input_type_allowed",
            invalid_value=embed.input_type,
        )

    if not embed.embedding_types:
        raise ConfigValidationError(
            "at least one embeddingType must be provided",
            rule_name="embedding_types_required",
        )

    for embedding_type in embed.embedding_types:
        if embedding_type not in ALLOWED_EMBEDDING_TYPES:
            raise ConfigValidationError(
                f"invalid embeddingType: {embedding_type}",
                rule_name="embedding_type_allowed",
                invalid_value=embedding_type,
            )
