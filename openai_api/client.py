"""Async client for the OpenAI HTTP API."""

import time
from collections.abc import Iterable
from typing import Any, TypeVar
from uuid import uuid4

from httpx import AsyncBaseTransport, AsyncClient, HTTPError, Response, Timeout, codes
from pydantic import BaseModel, ValidationError

from .config import DEFAULT_BASE_URL, ClientConfig
from .exceptions import ApiError, TransportError
from .logging import ClientLogger, get_logger, setup_logging
from .models import (
    ChatAnswer,
    Completion,
    ErrorEnvelope,
    ErrorMessage,
    ModelInfo,
    ModelList,
)
from .request_config import (
    ChatConfig,
    ChatConfigBuilder,
    CompletionConfig,
    CompletionConfigBuilder,
    MessageLike,
    _RequestConfig,
    as_chat_config,
    as_completion_config,
)

M = TypeVar("M", bound=BaseModel)


def _status_text(response: Response) -> str:
    """HTTP status as text, e.g. ``"404 Not Found"``."""
    return f"{response.status_code} {response.reason_phrase}".strip()


class Client:
    """Client for the model, completion and chat endpoints.

    The base URL and credentials are fixed at construction, so one client can
    be shared by any number of concurrent tasks. Every operation issues exactly
    one request: there is no retry, backoff or caching.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float | None = None,
        logger: ClientLogger | None = None,
        transport: AsyncBaseTransport | None = None,
    ):
        self._base_url = base_url
        self.client = AsyncClient(
            timeout=Timeout(timeout=timeout),
            headers=self._get_headers(api_key),
            base_url=base_url,
            transport=transport,
        )
        self.logger = logger or get_logger()

    @classmethod
    def from_config(cls, config: ClientConfig) -> "Client":
        """Create a client and set up logging from a ``ClientConfig``."""
        return cls(
            config.api_key,
            base_url=config.base_url,
            timeout=config.timeout,
            logger=setup_logging(config.log_dir, config.log_level),
        )

    @staticmethod
    def _get_headers(api_key: str) -> dict[str, str]:
        """Get HTTP headers sent with every request."""
        return {"Authorization": f"Bearer {api_key}"}

    @property
    def base_url(self) -> str:
        return self._base_url

    def _parse(
        self, response: Response, response_model: type[M], endpoint: str
    ) -> M:
        try:
            return response_model.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise TransportError(
                f"Could not decode {response_model.__name__} from {endpoint}: {e}",
                endpoint,
            ) from e

    async def _request(
        self,
        method: str,
        endpoint: str,
        response_model: type[M],
        payload: dict[str, Any] | None = None,
    ) -> M:
        request_id = str(uuid4())
        self.logger.log_request(request_id, method, endpoint, payload)

        start_time = time.time()
        try:
            if method == "GET":
                response = await self.client.get(endpoint)
            else:
                response = await self.client.post(endpoint, json=payload)
        except HTTPError as e:
            self.logger.log_error(request_id, endpoint, type(e).__name__, str(e))
            raise TransportError(f"{method} {endpoint} failed: {e}", endpoint) from e
        except (TypeError, ValueError) as e:
            # json encoding of the request body, e.g. inf or nan floats
            self.logger.log_error(request_id, endpoint, type(e).__name__, str(e))
            raise TransportError(
                f"Could not encode request body for {endpoint}: {e}", endpoint
            ) from e
        duration = (time.time() - start_time) * 1000

        status = _status_text(response)
        self.logger.log_response(request_id, endpoint, status, duration)

        try:
            if response.status_code == codes.OK:
                return self._parse(response, response_model, endpoint)

            # Any other status is a service error. The envelope's own code is
            # not trusted, the status we observed replaces it.
            envelope = self._parse(response, ErrorEnvelope, endpoint)
        except TransportError as e:
            self.logger.log_error(request_id, endpoint, "TransportError", e.message, status)
            raise

        error = ErrorMessage.from_envelope(envelope, status)
        self.logger.log_error(request_id, endpoint, "ApiError", error.message, status)
        raise ApiError(error)

    async def get(self, endpoint: str, response_model: type[M]) -> M:
        """Send a GET request and parse a 200 response as ``response_model``.

        Raises:
            ApiError: the service answered with any status other than 200
            TransportError: the request failed or a body could not be encoded or decoded
        """
        return await self._request("GET", endpoint, response_model)

    async def post(
        self,
        endpoint: str,
        payload: BaseModel | dict[str, Any],
        response_model: type[M],
    ) -> M:
        """Send ``payload`` as a JSON POST body and parse a 200 response as ``response_model``.

        Raises:
            ApiError: the service answered with any status other than 200
            TransportError: the request failed or a body could not be encoded or decoded
        """
        if isinstance(payload, _RequestConfig):
            body = payload.to_payload()
        elif isinstance(payload, BaseModel):
            body = payload.model_dump(mode="json", exclude_none=True)
        else:
            body = dict(payload)
        return await self._request("POST", endpoint, response_model, body)

    async def models(self) -> list[ModelInfo]:
        """List the models available to this API key."""
        model_list = await self.get("models", ModelList)
        return model_list.data

    async def model(self, model_id: str) -> ModelInfo:
        """Get information about a single model."""
        return await self.get(f"models/{model_id}", ModelInfo)

    async def complete_prompt(
        self, prompt: CompletionConfig | CompletionConfigBuilder | str
    ) -> Completion:
        """Request a completion.

        ``prompt`` may be a bare prompt string, a builder or a finished config.
        """
        config = as_completion_config(prompt)
        return await self.post("completions", config, Completion)

    async def chat(
        self, messages: ChatConfig | ChatConfigBuilder | Iterable[MessageLike]
    ) -> ChatAnswer:
        """Request a chat answer.

        ``messages`` may be a list of ``(role, content)`` pairs or
        ``ChatMessage`` objects (any iterable, including a generator), a
        builder or a finished config.
        """
        config = as_chat_config(messages)
        return await self.post("chat/completions", config, ChatAnswer)

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
