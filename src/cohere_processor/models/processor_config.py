"""
Processor configuration model.

The host hands the processor a flat map of string values
({"model": "embed", "backoffRetry.count": "2", "embedConfig.embeddingTypes": "float,int8"}).
parse_config() maps it onto the immutable ProcessorConfig below, applying
defaults and type conversion. Cross-field rules live in
cohere_processor.validation.config_rules.
"""

from datetime import timedelta
from enum import Enum
from typing import Any, Mapping, Optional, get_origin

import annotated_types
from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.fields import FieldInfo

from cohere_processor.models.durations import format_duration, parse_duration
from cohere_processor.models.enums import ModelFamily, Truncate
from cohere_processor.models.specification import Parameter, ParameterValidation
from cohere_processor.validation.exceptions import ConfigParseError

EMBED_CONFIG_PREFIX = "embedConfig."


class EmbedConfig(BaseModel):
    """Options that only apply to the embed model family."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    input_type: str = Field(
        default="",
        alias="inputType",
        description=(
            "Specifies the type of input passed to the model. Required for embedding models v3 and higher. "
            "Allowed values: search_document, search_query, classification, clustering, image."
        ),
    )
    embedding_types: tuple[str, ...] = Field(
        default=(),
        alias="embeddingTypes",
        description=(
            "Specifies the types of embeddings you want to get back. Can be one or more of the allowed values. "
            "Allowed values: float, int8, uint8, binary, ubinary."
        ),
    )
    truncate: Truncate = Field(
        default=Truncate.NONE,
        description=(
            "Handles input exceeding max token length: START trims from the beginning, "
            "END from the end, NONE returns an error."
        ),
    )

    @field_validator("embedding_types", mode="before")
    @classmethod
    def split_embedding_types(cls, value: Any) -> Any:
        """Accept the comma-separated form the host sends."""
        if isinstance(value, str):
            return tuple(part.strip() for part in value.split(",") if part.strip())
        return value


class ProcessorConfig(BaseModel):
    """
    Validated configuration snapshot of one processor instance.

    Created once in Processor.configure() and read-only afterwards.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        protected_namespaces=(),
    )

    model: str = Field(
        default=ModelFamily.COMMAND.value,
        description="Model is one of the Cohere models (command, embed, rerank).",
    )
    model_version: str = Field(
        ...,
        alias="modelVersion",
        min_length=1,
        description="ModelVersion is the version of one of the models (command, embed, rerank).",
    )
    api_key: SecretStr = Field(
        ...,
        alias="apiKey",
        description="APIKey is the API key for Cohere API calls.",
    )
    backoff_retry_count: float = Field(
        default=0,
        alias="backoffRetry.count",
        gt=-1,
        description="Maximum number of retries for an individual record when backing off following an error.",
    )
    backoff_retry_factor: float = Field(
        default=2,
        alias="backoffRetry.factor",
        gt=0,
        description="The multiplying factor for each increment step.",
    )
    backoff_retry_min: timedelta = Field(
        default=timedelta(milliseconds=100),
        alias="backoffRetry.min",
        description="The minimum waiting time before retrying.",
    )
    backoff_retry_max: timedelta = Field(
        default=timedelta(seconds=5),
        alias="backoffRetry.max",
        description="The maximum waiting time before retrying.",
    )
    response_body: str = Field(
        default=".Payload.After",
        alias="response.body",
        min_length=1,
        description="Specifies in which field should the response body be saved.",
    )
    embed_config: Optional[EmbedConfig] = Field(
        default=None,
        alias="embedConfig",
        description="Config specific to the embed model.",
    )

    @field_validator("api_key")
    @classmethod
    def api_key_not_empty(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value():
            raise ValueError("required parameter is not provided")
        return value

    @field_validator("backoff_retry_min", "backoff_retry_max", mode="before")
    @classmethod
    def parse_durations(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_duration(value)
        return value

    @property
    def model_family(self) -> Optional[ModelFamily]:
        """Configured family, or None when the model name is not a known family."""
        try:
            return ModelFamily(self.model)
        except ValueError:
            return None

    @classmethod
    def parameters(cls) -> dict[str, Parameter]:
        """
        Host-facing parameter schema, keyed by flat configuration key.

        Nested embed options are flattened under the "embedConfig." prefix.
        """
        params: dict[str, Parameter] = {}
        for name, field in cls.model_fields.items():
            if name == "embed_config":
                continue
            params[field.alias or name] = _describe_field(field)

        for name, field in EmbedConfig.model_fields.items():
            params[f"{EMBED_CONFIG_PREFIX}{field.alias or name}"] = _describe_field(field)

        return params


def parse_config(raw: Mapping[str, Any]) -> ProcessorConfig:
    """
    Map the host's flat configuration onto ProcessorConfig.

    Keys prefixed with "embedConfig." are grouped into EmbedConfig; when none
    is present, embed_config stays None.

    Args:
        raw: Flat key/value configuration from the host

    Returns:
        Immutable ProcessorConfig with defaults applied

    Raises:
        ConfigParseError: Missing required keys, unknown keys or wrong value types
    """
    data: dict[str, Any] = {}
    embed: dict[str, Any] = {}

    for key, value in raw.items():
        if key.startswith(EMBED_CONFIG_PREFIX):
            embed[key[len(EMBED_CONFIG_PREFIX):]] = value
        else:
            data[key] = value

    if embed:
        nested = data.get("embedConfig")
        data["embedConfig"] = {**nested, **embed} if isinstance(nested, Mapping) else embed

    try:
        return ProcessorConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigParseError.from_validation_error(e) from e


def _describe_field(field: FieldInfo) -> Parameter:
    annotation = field.annotation
    validations: list[ParameterValidation] = []

    if field.is_required():
        validations.append(ParameterValidation(type="required"))

    for constraint in field.metadata:
        if isinstance(constraint, annotated_types.Gt):
            validations.append(
                ParameterValidation(type="greater-than", value=f"{constraint.gt:g}")
            )

    if get_origin(annotation) is None and isinstance(annotation, type) and issubclass(annotation, Enum):
        validations.append(
            ParameterValidation(
                type="inclusion",
                value=",".join(member.value for member in annotation),
            )
        )

    if annotation is timedelta:
        param_type = "duration"
    elif annotation is float:
        param_type = "float"
    else:
        param_type = "string"

    return Parameter(
        default=_format_default(field),
        description=field.description or "",
        type=param_type,
        validations=validations,
    )


def _format_default(field: FieldInfo) -> str:
    if field.is_required():
        return ""

    default = field.get_default(call_default_factory=True)
    if isinstance(default, timedelta):
        return format_duration(default)
    if isinstance(default, Enum):
        return str(default.value)
    if isinstance(default, float) or isinstance(default, int):
        return f"{default:g}"
    if isinstance(default, (tuple, list)):
        return ",".join(default)
    return str(default)
