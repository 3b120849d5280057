"""
Abstract vendor client.

Defines the calls the request handlers need (chat, embed, rerank). The
handlers depend only on this interface, so tests swap in mocks and the Cohere
SDK stays behind a single adapter.
"""

from abc import ABC, abstractmethod

import structlog

from cohere_processor.models.llm_models import (
    ChatRequest,
    ChatResult,
    EmbedRequest,
    EmbedResult,
    RerankRequest,
    RerankResult,
)

logger = structlog.get_logger(__name__)


class BaseVendorClient(ABC):
    """
    Abstract base class for generative-AI vendor clients.

    Responsibilities:
    - Translate internal request models to vendor calls
    - Translate vendor responses to internal result models
    - Classify every failure as a VendorError

    Does NOT handle:
    - Retries (that's the embed handler's job, driven by Backoff)
    - Writing responses into records (that's ResponseWriter's job)
    """

    @abstractmethod
    async def chat(self, request: ChatRequest) -> ChatResult:
        """
        Single-turn chat completion.

        Raises:
            VendorError: Any vendor or transport failure
        """
        pass

    @abstractmethod
    async def embed(self, request: EmbedRequest) -> EmbedResult:
        """
        Embed texts.

        Raises:
            VendorError: Any vendor or transport failure
        """
        pass

    @abstractmethod
    async def rerank(self, request: RerankRequest) -> RerankResult:
        """
        Rerank documents against a query.

        Raises:
            VendorError: Any vendor or transport failure
        """
        pass

    async def close(self) -> None:
        """
        Release connections. Default implementation does nothing.
        """
        logger.debug("Closing vendor client", client_class=self.__class__.__name__)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
