"""Request configurations for the completion and chat endpoints.

Configs are immutable pydantic models. They are produced either directly from
primitive inputs (``CompletionConfig.from_prompt``, ``ChatConfig.from_messages``)
or through a builder whose ``build()`` is the single validation gate:

    config = (
        CompletionConfig.builder()
        .prompt("Once upon a time")
        .max_tokens(5)
        .stop("\\n")
        .build()
    )

Builders are immutable as well. Every setter returns a new builder, so a
partially filled builder can be reused as a template. Container fields of a
built config are tuples and read-only mappings; ``to_payload()`` turns them
back into JSON lists and objects.

Validation is permissive. ``build()`` only checks that values have the right
types: counts must be non-negative integers and floats must be finite, since
JSON has no representation for ``inf`` or ``nan``. Sampling parameters outside
the documented ranges are sent as-is and left for the service to reject.
"""

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Annotated, Any, ClassVar, TypeVar

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    ValidationError,
)

from .exceptions import ConfigBuildError
from .models import ChatMessage, ChatRole

END_OF_TEXT = "<|endoftext|>"
DEFAULT_COMPLETION_MODEL = "text-davinci-003"
DEFAULT_CHAT_MODEL = "gpt-3.5-turbo"

B = TypeVar("B", bound="_ConfigBuilder")

MessageLike = ChatMessage | tuple[ChatRole | str, str] | list[ChatRole | str]

LogitBias = Annotated[
    Mapping[str, float],
    AfterValidator(MappingProxyType),
    PlainSerializer(dict, return_type=dict[str, float]),
]


class _RequestConfig(BaseModel):
    """Fields and serialization shared by all request configs."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON request body. Unset optionals are omitted."""
        return self.model_dump(mode="json", exclude_none=True)


class CompletionConfig(_RequestConfig):
    """Arguments of a completion request."""

    model: str = DEFAULT_COMPLETION_MODEL
    prompt: str = END_OF_TEXT
    max_tokens: int = Field(default=16, ge=0)
    temperature: float = 1.0
    top_p: float = 1.0
    n: int = Field(default=1, ge=0)
    logprobs: int | None = Field(default=None, ge=0)
    echo: bool = False
    stop: tuple[str, ...] | None = None
    presence_penalty: float = 0.0
    frequency_penalty: float = 0.0
    logit_bias: LogitBias = Field(default_factory=dict, validate_default=True)

    @classmethod
    def builder(cls) -> "CompletionConfigBuilder":
        return CompletionConfigBuilder()

    @classmethod
    def from_prompt(cls, prompt: str) -> "CompletionConfig":
        """Config completing ``prompt`` with every other field defaulted."""
        return cls.builder().prompt(prompt).build()

    @classmethod
    def from_builder(cls, builder: "CompletionConfigBuilder") -> "CompletionConfig":
        return builder.build()


class ChatConfig(_RequestConfig):
    """Arguments of a chat completion request."""

    model: str = DEFAULT_CHAT_MODEL
    messages: tuple[ChatMessage, ...] = ()
    max_tokens: int | None = Field(default=None, ge=0)
    temperature: float = 1.0
    top_p: float = 1.0
    n: int = Field(default=1, ge=0)
    stop: tuple[str, ...] | None = None
    presence_penalty: float = 0.0
    frequency_penalty: float = 0.0
    logit_bias: LogitBias = Field(default_factory=dict, validate_default=True)

    @classmethod
    def builder(cls) -> "ChatConfigBuilder":
        return ChatConfigBuilder()

    @classmethod
    def from_messages(cls, messages: Iterable[MessageLike]) -> "ChatConfig":
        """Config for a conversation, in order, with every other field defaulted."""
        return cls.builder().messages(messages).build()

    @classmethod
    def from_builder(cls, builder: "ChatConfigBuilder") -> "ChatConfig":
        return builder.build()


def _is_collection(value: Any) -> bool:
    """True for iterables that hold items, as opposed to text or a single model."""
    return isinstance(value, Iterable) and not isinstance(
        value, (str, bytes, Mapping, BaseModel)
    )


def _coerce_stop(stop: Any) -> Any:
    if isinstance(stop, str):
        return (stop,)
    if _is_collection(stop):
        return tuple(stop)
    return stop


def _coerce_message(message: Any) -> Any:
    """Turn a ``(role, content)`` pair into message fields.

    Anything else is passed through unchanged and checked when the config is built.
    """
    if isinstance(message, (tuple, list)) and len(message) == 2:
        role, content = message
        return {"role": role, "content": content}
    return message


class _ConfigBuilder:
    """Immutable accumulator of config fields.

    Setters only normalize well-formed input. Anything else is stored as given
    and rejected by ``build()``.
    """

    _config_class: ClassVar[type[_RequestConfig]]

    __slots__ = ("_values",)

    def __init__(self, **values: Any):
        self._values = values

    def _set(self: B, field: str, value: Any) -> B:
        return type(self)(**{**self._values, field: value})

    def build(self) -> Any:
        """Validate the collected fields and return the finished config.

        Raises:
            ConfigBuildError: if a field value cannot be converted to its type
        """
        try:
            return self._config_class(**self._values)
        except ValidationError as e:
            raise ConfigBuildError(self._config_class.__name__, e) from e

    def model(self: B, model: Any) -> B:
        return self._set("model", str(model))

    def temperature(self: B, temperature: float) -> B:
        return self._set("temperature", temperature)

    def top_p(self: B, top_p: float) -> B:
        return self._set("top_p", top_p)

    def n(self: B, n: int) -> B:
        return self._set("n", n)

    def max_tokens(self: B, max_tokens: int) -> B:
        return self._set("max_tokens", max_tokens)

    def stop(self: B, stop: str | Iterable[str] | None) -> B:
        """Stop sequences. A single string is treated as a one-element list.

        ``None`` leaves the config without stop sequences.
        """
        return self._set("stop", _coerce_stop(stop))

    def presence_penalty(self: B, presence_penalty: float) -> B:
        return self._set("presence_penalty", presence_penalty)

    def frequency_penalty(self: B, frequency_penalty: float) -> B:
        return self._set("frequency_penalty", frequency_penalty)

    def logit_bias(self: B, logit_bias: Mapping[str, float]) -> B:
        if isinstance(logit_bias, Mapping):
            logit_bias = dict(logit_bias)
        return self._set("logit_bias", logit_bias)

    def __repr__(self) -> str:
        fields = ", ".join(f"{key}={value!r}" for key, value in self._values.items())
        return f"{type(self).__name__}({fields})"


class CompletionConfigBuilder(_ConfigBuilder):
    """Builder for ``CompletionConfig``."""

    _config_class = CompletionConfig

    __slots__ = ()

    def build(self) -> CompletionConfig:
        return super().build()

    def prompt(self, prompt: Any) -> "CompletionConfigBuilder":
        return self._set("prompt", str(prompt))

    def logprobs(self, logprobs: int) -> "CompletionConfigBuilder":
        return self._set("logprobs", logprobs)

    def echo(self, echo: bool) -> "CompletionConfigBuilder":
        return self._set("echo", echo)


class ChatConfigBuilder(_ConfigBuilder):
    """Builder for ``ChatConfig``."""

    _config_class = ChatConfig

    __slots__ = ()

    def build(self) -> ChatConfig:
        return super().build()

    def messages(self, messages: Iterable[MessageLike]) -> "ChatConfigBuilder":
        """Conversation turns, in order: ``ChatMessage`` objects or ``(role, content)`` pairs."""
        if _is_collection(messages):
            messages = tuple(_coerce_message(message) for message in messages)
        return self._set("messages", messages)


def as_completion_config(
    value: CompletionConfig | CompletionConfigBuilder | str,
) -> CompletionConfig:
    """Convert anything accepted by ``Client.complete_prompt`` to a config."""
    if isinstance(value, CompletionConfig):
        return value
    if isinstance(value, CompletionConfigBuilder):
        return value.build()
    if isinstance(value, str):
        return CompletionConfig.from_prompt(value)
    raise TypeError(f"Cannot convert {type(value).__name__} to CompletionConfig")


def as_chat_config(
    value: ChatConfig | ChatConfigBuilder | Iterable[MessageLike],
) -> ChatConfig:
    """Convert anything accepted by ``Client.chat`` to a config.

    Any iterable of messages works, including generators. Strings, mappings
    and single models are rejected.
    """
    if isinstance(value, ChatConfig):
        return value
    if isinstance(value, ChatConfigBuilder):
        return value.build()
    if _is_collection(value):
        return ChatConfig.from_messages(value)
    raise TypeError(f"Cannot convert {type(value).__name__} to ChatConfig")
