"""
Cohere processor: the host-facing lifecycle.

The host calls, in order:
1. configure(raw_config) - parse + validate, build backoff, response-field
   resolver, vendor client and the model-family handler (no network I/O)
2. specification() - static metadata and parameter schema
3. await process(records) - dispatch the batch to the configured handler
4. await teardown() - release the vendor client's connections
"""

import asyncio
from typing import Any, Mapping, Optional, Sequence

import httpx
import structlog

from cohere_processor import __version__
from cohere_processor.config import Settings
from cohere_processor.config import settings as default_settings
from cohere_processor.handlers.base import RequestHandler
from cohere_processor.handlers.command import CommandHandler
from cohere_processor.handlers.embed import EmbedHandler
from cohere_processor.handlers.rerank import RerankHandler
from cohere_processor.llm.base_client import BaseVendorClient
from cohere_processor.llm.cohere_client import CohereClient
from cohere_processor.logging_config import configure_logging
from cohere_processor.models.enums import ModelFamily
from cohere_processor.models.processor_config import ProcessorConfig, parse_config
from cohere_processor.models.specification import Specification
from cohere_processor.records.exceptions import ReferenceParseError
from cohere_processor.records.models import ProcessedRecord, Record
from cohere_processor.records.reference import ReferenceResolver
from cohere_processor.records.writer import ResponseWriter
from cohere_processor.retry.backoff import Backoff
from cohere_processor.validation.config_rules import validate_config
from cohere_processor.validation.exceptions import ConfigParseError, ConfigValidationError

logger = structlog.get_logger(__name__)

PROCESSOR_NAME = "cohere"

_SIMPLE_HANDLERS: dict[ModelFamily, type[RequestHandler]] = {
    ModelFamily.COMMAND: CommandHandler,
    ModelFamily.RERANK: RerankHandler,
}


class Processor:
    """
    Record processor forwarding payloads to Cohere's Command, Embed and Rerank models.

    The configuration is immutable once configure() succeeds. Batches are
    expected to be processed serially per instance (the embed handler's
    backoff state is not shared safely between concurrent batches).
    """

    def __init__(
        self,
        client: Optional[BaseVendorClient] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Args:
            client: Vendor client to use instead of building a CohereClient
            settings: Process-level settings (default: environment)
        """
        self._client = client
        self._owns_client = client is None
        self._retired_clients: list[BaseVendorClient] = []
        self._settings = settings or default_settings
        self._config: Optional[ProcessorConfig] = None
        self._backoff: Optional[Backoff] = None
        self._writer: Optional[ResponseWriter] = None
        self._handler: Optional[RequestHandler] = None

    @property
    def config(self) -> Optional[ProcessorConfig]:
        """Validated configuration (None before configure())."""
        return self._config

    @property
    def backoff(self) -> Optional[Backoff]:
        """Embed retry backoff built from the configuration (None before configure())."""
        return self._backoff

    def configure(self, raw_config: Mapping[str, Any]) -> None:
        """
        Parse and validate the host configuration and wire the handler.

        Raises:
            ConfigParseError: "failed to parse configuration: ..."
            ConfigValidationError: "error validating configuration: ..."
            ReferenceParseError: "failed parsing response.body ...: ..."
        """
        try:
            config = parse_config(raw_config)
        except ConfigParseError as e:
            raise ConfigParseError(
                f"failed to parse configuration: {e.message}",
                errors=e.details.get("errors"),
            ) from e

        try:
            validate_config(config)
        except ConfigValidationError as e:
            raise ConfigValidationError(
                f"error validating configuration: {e.message}",
                rule_name=e.details.get("rule_name"),
                invalid_value=e.details.get("invalid_value"),
            ) from e

        try:
            resolver = ReferenceResolver(config.response_body)
        except ReferenceParseError as e:
            raise ReferenceParseError(
                f"failed parsing response.body {config.response_body}: {e.message}",
                details=e.details,
            ) from e

        if self._owns_client:
            # A previous client keeps its credentials; retire it until teardown.
            if self._client is not None:
                self._retired_clients.append(self._client)
            self._client = CohereClient(
                api_key=config.api_key.get_secret_value(),
                base_url=self._settings.COHERE_BASE_URL,
                timeout=self._settings.COHERE_TIMEOUT,
                connection_limits=httpx.Limits(
                    max_keepalive_connections=self._settings.COHERE_MAX_KEEPALIVE_CONNECTIONS,
                    max_connections=self._settings.COHERE_MAX_CONNECTIONS,
                ),
            )

        self._config = config
        self._writer = ResponseWriter(resolver)
        self._backoff = Backoff(
            factor=config.backoff_retry_factor,
            min_delay=config.backoff_retry_min,
            max_delay=config.backoff_retry_max,
        )
        self._handler = self._build_handler(config)

        logger.info(
            "Processor configured",
            model=config.model,
            model_version=config.model_version,
            response_body=config.response_body,
            **{"backoffRetry.count": config.backoff_retry_count},
        )

    def specification(self) -> Specification:
        """Static processor metadata, including the parameter schema."""
        return Specification(
            name=PROCESSOR_NAME,
            summary="Conduit processor for Cohere's models.",
            description=(
                "Sends each record's payload to one of Cohere's models (Command, Embed or Rerank) "
                "and stores the response in a configurable field of the record."
            ),
            version=__version__,
            author="cohere-processor contributors",
            parameters=ProcessorConfig.parameters(),
        )

    async def process(
        self,
        records: Sequence[Record],
        cancel: Optional[asyncio.Event] = None,
    ) -> list[ProcessedRecord]:
        """
        Process a batch with the configured model family.

        Returns one result per processed record; the list stops at the first
        ErrorRecord. An unknown model family yields an empty list.

        Raises:
            RuntimeError: If called before configure()
        """
        if self._config is None:
            raise RuntimeError("processor is not configured")

        if self._handler is None:
            logger.info("unknown cohere model", model=self._config.model)
            return []

        return await self._handler.process(records, cancel)

    async def teardown(self) -> None:
        """Release vendor client resources."""
        for client in self._retired_clients:
            await client.close()
        self._retired_clients.clear()
        if self._client is not None:
            await self._client.close()
        logger.debug("Processor torn down")

    def _build_handler(self, config: ProcessorConfig) -> Optional[RequestHandler]:
        family = config.model_family
        if family is None:
            return None
        if family is ModelFamily.EMBED:
            return EmbedHandler(config, self._client, self._writer, self._backoff)
        return _SIMPLE_HANDLERS[family](config, self._client, self._writer)


def new_processor(settings: Optional[Settings] = None) -> Processor:
    """
    Create an unconfigured processor, configuring logging from settings.

    Entry point for hosts loading the plugin.
    """
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT)
    return Processor(settings=settings)
