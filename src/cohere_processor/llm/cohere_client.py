"""
Cohere client implementation.

Wraps cohere.AsyncClientV2 over a persistent httpx AsyncClient. Supports:
- Chat (single user message)
- Embed (embeddings by type)
- Rerank
- Classification of every failure into VendorError

The SDK's own retry loop is disabled on every call: retries are decided by
the embed handler's backoff policy only.
"""

import time
from typing import Any, Awaitable, Callable, Optional

import cohere
import httpx
import structlog
from cohere.core.api_error import ApiError

from cohere_processor.llm.base_client import BaseVendorClient
from cohere_processor.llm.exceptions import VendorError, VendorErrorKind, kind_for_status
from cohere_processor.models.llm_models import (
    ChatRequest,
    ChatResult,
    EmbedRequest,
    EmbedResult,
    RerankHit,
    RerankRequest,
    RerankResult,
)
from cohere_processor.monitoring.metrics import vendor_request_latency_seconds

logger = structlog.get_logger(__name__)

_NO_SDK_RETRIES = {"max_retries": 0}
# The SDK drops Ellipsis-valued arguments from the request body.
_OMIT: Any = ...
_BODY_SNIPPET_CHARS = 500


class CohereClient(BaseVendorClient):
    """
    Cohere-specific vendor client.

    API Endpoints (v2):
    - POST /v2/chat
    - POST /v2/embed
    - POST /v2/rerank
    """

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        timeout: float = 60.0,
        connection_limits: Optional[httpx.Limits] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        sdk_client: Optional[cohere.AsyncClientV2] = None,
    ):
        """
        Initialize Cohere client. Opens no connection.

        Args:
            api_key: Cohere API key
            base_url: Endpoint override (None = SDK default)
            timeout: Request timeout in seconds
            connection_limits: httpx connection pool limits (default: 10 max connections)
            http_client: Pre-built httpx client (e.g. with a mock transport)
            sdk_client: Pre-built SDK client; takes precedence over everything above
        """
        self.base_url = base_url
        self.timeout = timeout

        if connection_limits is None:
            connection_limits = httpx.Limits(
                max_keepalive_connections=5,
                max_connections=10,
                keepalive_expiry=30.0,
            )

        if sdk_client is not None:
            self._http: Optional[httpx.AsyncClient] = http_client
            self._client = sdk_client
        else:
            self._http = http_client or httpx.AsyncClient(
                timeout=httpx.Timeout(timeout),
                limits=connection_limits,
            )
            sdk_kwargs: dict[str, Any] = {
                "api_key": api_key,
                "timeout": timeout,
                "httpx_client": self._http,
            }
            if base_url:
                sdk_kwargs["base_url"] = base_url
            self._client = cohere.AsyncClientV2(**sdk_kwargs)

        logger.info(
            "Cohere client initialized",
            base_url=base_url or "default",
            timeout=timeout,
        )

    async def chat(self, request: ChatRequest) -> ChatResult:
        response, latency_ms = await self._request(
            "chat",
            lambda: self._client.chat(
                model=request.model,
                messages=[{"role": "user", "content": request.message}],
                request_options=_NO_SDK_RETRIES,
            ),
        )

        content = getattr(response.message, "content", None) or []
        text = "".join(
            item.text for item in content if getattr(item, "type", None) == "text"
        )
        finish_reason = getattr(response, "finish_reason", None)

        logger.debug(
            "Cohere chat successful",
            model=request.model,
            latency_ms=latency_ms,
            finish_reason=finish_reason,
        )
        return ChatResult(
            text=text,
            finish_reason=str(finish_reason) if finish_reason is not None else None,
            latency_ms=latency_ms,
        )

    async def embed(self, request: EmbedRequest) -> EmbedResult:
        response, latency_ms = await self._request(
            "embed",
            lambda: self._client.embed(
                model=request.model,
                texts=request.texts,
                input_type=request.input_type or _OMIT,
                embedding_types=request.embedding_types,
                truncate=request.truncate,
                request_options=_NO_SDK_RETRIES,
            ),
        )

        embeddings = _embeddings_by_type(response.embeddings)
        logger.debug(
            "Cohere embed successful",
            model=request.model,
            latency_ms=latency_ms,
            embedding_types=sorted(embeddings),
        )
        return EmbedResult(embeddings=embeddings, latency_ms=latency_ms)

    async def rerank(self, request: RerankRequest) -> RerankResult:
        kwargs: dict[str, Any] = {
            "model": request.model,
            "query": request.query,
            "documents": request.documents,
            "request_options": _NO_SDK_RETRIES,
        }
        if request.top_n is not None:
            kwargs["top_n"] = request.top_n

        response, latency_ms = await self._request(
            "rerank", lambda: self._client.rerank(**kwargs)
        )

        hits = [
            RerankHit(index=item.index, relevance_score=item.relevance_score)
            for item in response.results or []
        ]
        logger.debug(
            "Cohere rerank successful",
            model=request.model,
            latency_ms=latency_ms,
            results=len(hits),
        )
        return RerankResult(results=hits, latency_ms=latency_ms)

    async def _request(
        self, endpoint: str, call: Callable[[], Awaitable[Any]]
    ) -> tuple[Any, int]:
        """Run one SDK call; translate failures into VendorError."""
        start_time = time.time()
        try:
            response = await call()
        except ApiError as e:
            raise self._failed(
                endpoint,
                start_time,
                VendorError(
                    f"Cohere {endpoint} request failed",
                    kind=kind_for_status(e.status_code),
                    status_code=e.status_code,
                    details={"endpoint": endpoint, "body": _snippet(e.body)},
                ),
            ) from e
        except httpx.TimeoutException as e:
            raise self._failed(
                endpoint,
                start_time,
                VendorError(
                    f"Cohere {endpoint} request timed out after {self.timeout}s",
                    kind=VendorErrorKind.TIMEOUT,
                    details={"endpoint": endpoint, "timeout": self.timeout},
                ),
            ) from e
        except httpx.TransportError as e:
            raise self._failed(
                endpoint,
                start_time,
                VendorError(
                    f"Cohere {endpoint} network error: {e}",
                    kind=VendorErrorKind.CONNECTION,
                    details={"endpoint": endpoint, "error_type": type(e).__name__},
                ),
            ) from e
        except Exception as e:
            raise self._failed(
                endpoint,
                start_time,
                VendorError(
                    f"Unexpected error calling Cohere {endpoint}: {e}",
                    kind=VendorErrorKind.UNKNOWN,
                    details={"endpoint": endpoint, "error_type": type(e).__name__},
                ),
            ) from e

        latency = time.time() - start_time
        vendor_request_latency_seconds.labels(endpoint=endpoint, success="true").observe(latency)
        return response, int(latency * 1000)

    def _failed(self, endpoint: str, start_time: float, error: VendorError) -> VendorError:
        vendor_request_latency_seconds.labels(endpoint=endpoint, success="false").observe(
            time.time() - start_time
        )
        logger.warning(
            "Cohere request failed",
            endpoint=endpoint,
            error_kind=error.kind.value,
            status_code=error.status_code,
            retryable=error.retryable,
        )
        return error

    async def close(self) -> None:
        """Close the HTTP client connection."""
        if self._http is not None and not self._http.is_closed:
            await self._http.aclose()
            logger.debug("Closed Cohere client connection")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"base_url={self.base_url or 'default'}, "
            f"timeout={self.timeout}s)"
        )


def _embeddings_by_type(embeddings: Any) -> dict[str, list[list[Any]]]:
    """Flatten the SDK's embeddings-by-type object into {"float": [[...]], ...}."""
    if embeddings is None:
        return {}
    if hasattr(embeddings, "model_dump"):
        dumped = embeddings.model_dump(by_alias=True, exclude_none=True)
    else:
        dumped = dict(embeddings)
    # pydantic field float_ is aliased to "float"; tolerate either spelling
    return {
        key.rstrip("_"): value for key, value in dumped.items() if isinstance(value, list)
    }


def _snippet(body: Any) -> str:
    if body is None:
        return ""
    return str(body)[:_BODY_SNIPPET_CHARS]
