"""Test configuration and fixtures."""

from unittest.mock import AsyncMock, patch

import pytest

from openai_api.client import Client
from openai_api.logging import ClientLogger


@pytest.fixture
def mock_models_response():
    """Mock models list response."""
    return {
        "object": "list",
        "data": [
            {
                "id": "ada",
                "object": "model",
                "owned_by": "openai",
            }
        ],
    }


@pytest.fixture
def mock_error_response():
    """Mock service error envelope."""
    return {
        "error": {
            "code": None,
            "message": "Some kind of error happened",
            "type": "some_error_type",
        }
    }


@pytest.fixture
def mock_completion_response():
    """Mock completion response."""
    return {
        "id": "cmpl-uqkvlQyYK7bGYrRHQ0eXlWi7",
        "object": "text_completion",
        "created": 1589478378,
        "model": "davinci:2020-05-03",
        "choices": [
            {
                "text": " there was a girl who",
                "index": 0,
                "logprobs": None,
                "finish_reason": "length",
            }
        ],
    }


@pytest.fixture
def mock_chat_response():
    """Mock chat completion response."""
    return {
        "id": "chatcmpl-uqkvlQyYK7bGYrRHQ0eXlWi7",
        "object": "chat.completion",
        "created": 1589478378,
        "choices": [
            {
                "index": 0,
                "message": {
                    "role": "assistant",
                    "content": "\n\nHello there, how may I assist you today?",
                },
                "finish_reason": "stop",
            }
        ],
        "usage": {
            "prompt_tokens": 9,
            "completion_tokens": 12,
            "total_tokens": 21,
        },
    }


@pytest.fixture
def mock_httpx_client():
    """Mock httpx.AsyncClient."""
    with patch("openai_api.client.AsyncClient") as mock_client:
        mock_instance = AsyncMock()
        mock_client.return_value = mock_instance
        yield mock_instance


@pytest.fixture
def client_logger():
    """Logger without log files."""
    logger = ClientLogger(log_level="DEBUG")
    yield logger
    logger.close()


@pytest.fixture
def client(mock_httpx_client, client_logger):
    """Client whose HTTP transport is mocked."""
    return Client("bogus", base_url="http://mock.test/", logger=client_logger)
