"""Logging system for the OpenAI API client."""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any
from uuid import uuid4


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class ClientLogger:
    """Logger for client requests, responses and errors."""

    def __init__(
        self,
        log_dir: str | None = None,
        log_level: str = "INFO",
        console: bool = False,
    ):
        """Initialize the logger.

        Args:
            log_dir: Directory to store JSONL log files, or None for no files
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            console: Print log records to stderr. Library use leaves this off
                and lets the application configure handlers.
        """
        self.log_dir = Path(log_dir) if log_dir else None

        # Generate a unique session ID for this run
        self.session_id = str(uuid4())[:8]

        self.start_time = datetime.now(timezone.utc)
        self.datetime_str = self.start_time.strftime("%Y%m%d_%H%M%S")

        self._setup_logging(log_level, console)

    def _setup_logging(self, log_level: str, console: bool) -> None:
        """Set up logging configuration."""
        self.logger = logging.getLogger("openai_api")
        self.logger.setLevel(getattr(logging, log_level.upper()))
        self.logger.handlers.clear()

        if console:
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(
                logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
            )
            self.logger.addHandler(console_handler)
        else:
            self.logger.addHandler(logging.NullHandler())

        # Structured logs never reach the console
        self.json_logger = logging.getLogger(f"openai_api.json.{self.session_id}")
        self.json_logger.setLevel(logging.DEBUG)
        self.json_logger.handlers.clear()
        self.json_logger.propagate = False

        if self.log_dir is None:
            self.json_logger.addHandler(logging.NullHandler())
            return

        self.log_dir.mkdir(parents=True, exist_ok=True)
        json_formatter = logging.Formatter("%(message)s")

        log_file = self.log_dir / f"client_{self.datetime_str}_{self.session_id}.jsonl"
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(json_formatter)
        self.json_logger.addHandler(file_handler)

        error_file = (
            self.log_dir / f"client_{self.datetime_str}_{self.session_id}_errors.jsonl"
        )
        error_handler = logging.FileHandler(error_file, encoding="utf-8")
        error_handler.setLevel(logging.WARNING)
        error_handler.setFormatter(json_formatter)
        self.json_logger.addHandler(error_handler)

        self.logger.debug(f"Log files: {log_file}, {error_file}")

    def close(self) -> None:
        """Close file handlers of the structured logger."""
        for handler in list(self.json_logger.handlers):
            handler.close()
            self.json_logger.removeHandler(handler)

    def log_request(
        self,
        request_id: str,
        method: str,
        endpoint: str,
        payload: dict[str, Any] | None = None,
    ) -> None:
        """Log an outgoing request."""
        log_entry = {
            "timestamp": _timestamp(),
            "type": "request",
            "session_id": self.session_id,
            "request_id": request_id,
            "method": method,
            "endpoint": endpoint,
            "model": payload.get("model") if payload else None,
            "full_request": payload,
        }
        self.json_logger.debug(json.dumps(log_entry, default=str))

        self.logger.debug(f"Request {request_id[:8]}: {method} {endpoint}")

    def log_response(
        self,
        request_id: str,
        endpoint: str,
        status: str,
        duration_ms: float,
    ) -> None:
        """Log a response received from the service."""
        log_entry = {
            "timestamp": _timestamp(),
            "type": "response",
            "session_id": self.session_id,
            "request_id": request_id,
            "endpoint": endpoint,
            "status": status,
            "duration_ms": duration_ms,
        }
        self.json_logger.debug(json.dumps(log_entry))

        self.logger.debug(
            f"Response {request_id[:8]} from {endpoint}: "
            f"status={status}, duration={duration_ms:.0f}ms"
        )

    def log_error(
        self,
        request_id: str,
        endpoint: str,
        error_type: str,
        error_message: str,
        status_code: str | None = None,
    ) -> None:
        """Log a failed request."""
        log_entry = {
            "timestamp": _timestamp(),
            "type": "error",
            "session_id": self.session_id,
            "request_id": request_id,
            "endpoint": endpoint,
            "error_type": error_type,
            "error_message": error_message,
            "status_code": status_code,
        }
        self.json_logger.error(json.dumps(log_entry))

        error_msg = f"Error {request_id[:8]} from {endpoint}: {error_type}: {error_message}"
        if status_code:
            error_msg += f" (status: {status_code})"

        self.logger.warning(error_msg)


# Global logger instance
_logger: ClientLogger | None = None


def get_logger(
    log_dir: str | None = None,
    log_level: str = "INFO",
    force_new: bool = False,
    console: bool = False,
) -> ClientLogger:
    """Get or create the global logger instance."""
    global _logger

    if _logger is None or force_new:
        if _logger is not None:
            _logger.close()
        _logger = ClientLogger(log_dir, log_level, console)

    return _logger


def setup_logging(
    log_dir: str | None = None,
    log_level: str = "INFO",
    console: bool = True,
) -> ClientLogger:
    """Set up logging for an application and return the logger instance."""
    return get_logger(log_dir, log_level, force_new=True, console=console)
