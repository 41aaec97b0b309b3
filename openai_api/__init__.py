"""OpenAI API client - typed request configs and a uniform error channel."""

from .client import Client
from .config import ClientConfig, load_default_config
from .exceptions import (
    ApiError,
    ConfigBuildError,
    ConfigurationError,
    OpenAIError,
    TransportError,
)
from .models import (
    ChatAnswer,
    ChatChoice,
    ChatMessage,
    ChatRole,
    Choice,
    Completion,
    ErrorMessage,
    LogProbs,
    ModelInfo,
)
from .request_config import (
    ChatConfig,
    ChatConfigBuilder,
    CompletionConfig,
    CompletionConfigBuilder,
)

__version__ = "0.1.0"
__all__ = [
    "Client",
    "ClientConfig",
    "load_default_config",
    "CompletionConfig",
    "CompletionConfigBuilder",
    "ChatConfig",
    "ChatConfigBuilder",
    "ChatRole",
    "ChatMessage",
    "ModelInfo",
    "Completion",
    "Choice",
    "LogProbs",
    "ChatAnswer",
    "ChatChoice",
    "ErrorMessage",
    "OpenAIError",
    "ApiError",
    "TransportError",
    "ConfigBuildError",
    "ConfigurationError",
]
