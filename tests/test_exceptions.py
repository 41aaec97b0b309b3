"""Test exceptions."""

import pytest
from pydantic import ValidationError

from openai_api.exceptions import (
    ApiError,
    ConfigBuildError,
    ConfigurationError,
    OpenAIError,
    TransportError,
)
from openai_api.models import ErrorMessage
from openai_api.request_config import CompletionConfig


def test_openai_error():
    """Test OpenAIError."""
    error = OpenAIError("Test error", "500 Internal Server Error")
    assert str(error) == "Test error"
    assert error.message == "Test error"
    assert error.status_code == "500 Internal Server Error"


def test_openai_error_defaults():
    """Test OpenAIError with defaults."""
    error = OpenAIError("Test error")
    assert error.status_code is None


def test_api_error():
    """Test ApiError renders status and server text."""
    message = ErrorMessage(message="Model not found", status_code="404 Not Found")
    error = ApiError(message)
    assert isinstance(error, OpenAIError)
    assert error.error == message
    assert error.status_code == "404 Not Found"
    assert str(error) == (
        "API returned an Error: err code: 404 Not Found, err msg: Model not found"
    )


def test_transport_error():
    """Test TransportError."""
    error = TransportError("connection refused", "models")
    assert str(error) == "Transport error: connection refused"
    assert error.endpoint == "models"
    assert error.status_code is None


def test_config_build_error():
    """Test ConfigBuildError lists the failing fields."""
    with pytest.raises(ValidationError) as exc_info:
        CompletionConfig(max_tokens=-1)
    error = ConfigBuildError("CompletionConfig", exc_info.value)
    assert error.config_name == "CompletionConfig"
    assert error.errors[0]["loc"] == ("max_tokens",)
    assert str(error).startswith("Could not build CompletionConfig: max_tokens:")


def test_configuration_error():
    """Test ConfigurationError."""
    error = ConfigurationError("Invalid configuration")
    assert str(error) == "Configuration error: Invalid configuration"
    assert error.message == "Configuration error: Invalid configuration"
