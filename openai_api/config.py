"""JSON and environment based configuration for the OpenAI API client."""

import json
import os
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from .exceptions import ConfigurationError

DEFAULT_BASE_URL = "https://api.openai.com/v1/"

DEFAULT_CONFIG_PATHS = [
    "openai_api_config.json",
    "config/openai_api_config.json",
    "~/.openai_api_config.json",
]


class ClientConfig(BaseModel):
    """Settings a client is constructed from."""

    api_key: str = Field(min_length=1)
    base_url: str = DEFAULT_BASE_URL
    timeout: float | None = Field(default=None, gt=0, description="Seconds, None for no timeout")
    log_level: str = "INFO"
    log_dir: str | None = None

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "ClientConfig":
        """Create configuration from dictionary."""
        try:
            return cls.model_validate(config_dict)
        except ValidationError as e:
            fields = ", ".join(
                ".".join(str(part) for part in err["loc"]) for err in e.errors()
            )
            raise ConfigurationError(f"Invalid or missing field(s): {fields}") from e

    @classmethod
    def from_json_file(cls, filepath: str) -> "ClientConfig":
        """Load configuration from JSON file."""
        try:
            with open(filepath) as f:
                config_dict = json.load(f)
        except FileNotFoundError:
            raise ConfigurationError(
                f"Configuration file not found: {filepath}"
            ) from None
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in configuration file: {e}") from e
        return cls.from_dict(config_dict)

    @classmethod
    def from_json_string(cls, json_str: str) -> "ClientConfig":
        """Load configuration from JSON string."""
        try:
            config_dict = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON string: {e}") from e
        return cls.from_dict(config_dict)

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Load configuration from environment variables.

        The API key is read from ``OPENAI_API_KEY`` or, failing that, ``OPENAI_SK``.
        ``OPENAI_BASE_URL`` and ``OPENAI_TIMEOUT`` are optional.
        """
        api_key = os.getenv("OPENAI_API_KEY") or os.getenv("OPENAI_SK")
        if not api_key:
            raise ConfigurationError(
                "No API key found. Set OPENAI_API_KEY or OPENAI_SK."
            )

        config_dict: dict[str, Any] = {"api_key": api_key}
        if base_url := os.getenv("OPENAI_BASE_URL"):
            config_dict["base_url"] = base_url
        if timeout := os.getenv("OPENAI_TIMEOUT"):
            config_dict["timeout"] = timeout
        return cls.from_dict(config_dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.model_dump()

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    def save_to_file(self, filepath: str, indent: int = 2) -> None:
        """Save configuration to JSON file."""
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=indent)

    def masked_api_key(self) -> str:
        """API key with everything but the last four characters hidden."""
        return f"{'*' * 8}{self.api_key[-4:] if len(self.api_key) > 4 else '****'}"


def load_default_config() -> ClientConfig | None:
    """Load configuration from default locations, then from the environment."""
    for path in DEFAULT_CONFIG_PATHS:
        expanded_path = os.path.expanduser(path)
        if os.path.exists(expanded_path):
            try:
                return ClientConfig.from_json_file(expanded_path)
            except ConfigurationError:
                continue

    try:
        return ClientConfig.from_env()
    except ConfigurationError:
        return None


def create_example_config() -> ClientConfig:
    """Create example configuration."""
    return ClientConfig.from_dict(
        {
            "api_key": "sk-your-openai-api-key-here",
            "base_url": DEFAULT_BASE_URL,
            "timeout": 60,
            "log_level": "INFO",
            "log_dir": None,
        }
    )
