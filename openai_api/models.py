"""Data models for the OpenAI API client."""

from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class ChatRole(str, Enum):
    """Chat message role enumeration."""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """One turn of a chat conversation."""
    role: ChatRole
    content: str

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"role: {self.role.value}, content: {self.content}"


class Container(BaseModel, Generic[T]):
    """Page container used by list endpoints."""
    object: str = "list"
    data: list[T]


class ModelInfo(BaseModel):
    """Detailed information on a particular model."""
    id: str
    owned_by: str
    object: str

    model_config = ConfigDict(frozen=True)


class ModelList(Container[ModelInfo]):
    """Response from the models endpoint."""


class LogProbs(BaseModel):
    """Log probabilities of the sampled and most likely tokens."""
    tokens: list[str]
    token_logprobs: list[float | None]
    top_logprobs: list[dict[str, float] | None]
    text_offset: list[int]


class Usage(BaseModel):
    """Token usage information."""
    prompt_tokens: int
    completion_tokens: int = 0
    total_tokens: int


class Choice(BaseModel):
    """A choice in the completion response."""
    text: str
    index: int
    logprobs: LogProbs | None = None
    finish_reason: str | None = None

    def __str__(self) -> str:
        return self.text


class Completion(BaseModel):
    """Response from the completions endpoint."""
    id: str
    created: int
    model: str
    choices: list[Choice]
    usage: Usage | None = None

    def __str__(self) -> str:
        return str(self.choices[0])


class ChatChoice(BaseModel):
    """A choice in the chat completion response."""
    message: ChatMessage
    index: int
    finish_reason: str | None = None

    def __str__(self) -> str:
        return str(self.message)


class ChatAnswer(BaseModel):
    """Response from the chat completions endpoint."""
    id: str
    created: int
    choices: list[ChatChoice]
    usage: Usage | None = None

    @property
    def content(self) -> str:
        """Content of the first choice's message."""
        return self.choices[0].message.content

    def __str__(self) -> str:
        return str(self.choices[0])


class ServiceErrorBody(BaseModel):
    """Error details as reported by the service."""
    message: str
    code: str | int | None = None
    type: str | None = None

    model_config = ConfigDict(frozen=True)


class ErrorEnvelope(BaseModel):
    """Wrapper the service puts around error details."""
    error: ServiceErrorBody

    model_config = ConfigDict(frozen=True)


class ErrorMessage(BaseModel):
    """A service error combined with the HTTP status observed by the client.

    ``status_code`` always holds the status seen on the wire, e.g.
    ``"404 Not Found"``. Whatever the service put in its own ``code`` field
    is kept in ``reported_code``.
    """
    message: str
    status_code: str
    reported_code: str | int | None = None
    error_type: str | None = Field(default=None, description="Service error type")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_envelope(cls, envelope: ErrorEnvelope, status_code: str) -> "ErrorMessage":
        """Build the surfaced error from a parsed envelope and the HTTP status."""
        return cls(
            message=envelope.error.message,
            status_code=status_code,
            reported_code=envelope.error.code,
            error_type=envelope.error.type,
        )

    def __str__(self) -> str:
        return f"err code: {self.status_code}, err msg: {self.message}"
