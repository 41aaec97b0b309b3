"""Exceptions for the OpenAI API client."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pydantic import ValidationError

    from .models import ErrorMessage


class OpenAIError(Exception):
    """Base exception for all client errors."""
    def __init__(self, message: str, status_code: str | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ApiError(OpenAIError):
    """Raised when the service answers with a non-200 status."""
    def __init__(self, error: "ErrorMessage"):
        self.error = error
        super().__init__(f"API returned an Error: {error}", error.status_code)


class TransportError(OpenAIError):
    """Raised when a request fails below the HTTP layer or a body cannot be encoded or decoded."""
    def __init__(self, message: str, endpoint: str | None = None):
        self.endpoint = endpoint
        super().__init__(f"Transport error: {message}")


class ConfigBuildError(OpenAIError):
    """Raised when a request config builder cannot produce a config."""
    def __init__(self, config_name: str, validation_error: "ValidationError"):
        self.config_name = config_name
        self.errors = validation_error.errors()
        details = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in self.errors
        )
        super().__init__(f"Could not build {config_name}: {details}")


class ConfigurationError(OpenAIError):
    """Raised when there's a configuration error."""
    def __init__(self, message: str):
        super().__init__(f"Configuration error: {message}")
