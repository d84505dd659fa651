"""
Logging Configuration Module

This module provides thread-safe logging configuration for the taxonomy service.
Flask serves requests from several threads, so records are funnelled through
a queue and written by a single listener.
"""

import logging
import logging.handlers
import sys
from queue import Queue
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"

# Raised to WARNING unless debug logging is on
NOISY_LOGGERS = (
    "urllib3",
    "openai",
    "google_genai",
    "google.auth",
    "langchain_core",
    "langchain_google_genai",
    "langchain_openai",
    "langchain_deepseek",
    "langchain_ollama",
    "tenacity",
)

# Network stacks log every request at INFO; muted entirely
MUTED_LOGGERS = ("httpx", "httpcore")


class _MuteHttpFilter(logging.Filter):
    """Drops per-request HTTP chatter regardless of the emitting logger."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        if (record.name or "").startswith(MUTED_LOGGERS):
            return False
        msg = record.getMessage()
        return not msg.startswith(("HTTP Request:", "HTTP Response:"))


class ThreadSafeLoggingConfig:
    """Thread-safe logging configuration with queue-based logging."""

    def __init__(self):
        self._log_listener: Optional[logging.handlers.QueueListener] = None
        self._log_queue: Optional[Queue] = None

    def setup_logging(self, debug: bool = False) -> None:
        """
        Configure queue-based logging and silence chatty libraries.

        Calling this again replaces the previous listener.

        Args:
            debug: Whether to enable debug logging
        """
        self.stop()
        self._log_queue = Queue()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))

        self._log_listener = logging.handlers.QueueListener(
            self._log_queue, console_handler, respect_handler_level=True
        )
        self._log_listener.start()

        queue_handler = logging.handlers.QueueHandler(self._log_queue)
        root_logger = logging.getLogger()
        root_logger.handlers.clear()
        root_logger.addHandler(queue_handler)
        root_logger.setLevel(logging.DEBUG if debug else logging.INFO)

        if not debug:
            queue_handler.addFilter(_MuteHttpFilter())
            self._silence_noisy_libraries()

    def _silence_noisy_libraries(self) -> None:
        """Silence noisy third-party libraries."""
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
        for name in MUTED_LOGGERS:
            logger = logging.getLogger(name)
            logger.setLevel(logging.CRITICAL)
            logger.disabled = True

    def stop(self) -> None:
        """Stop the logging listener and cleanup."""
        if self._log_listener:
            self._log_listener.stop()
            self._log_listener = None
        self._log_queue = None


# Global logging configuration instance
logging_config = ThreadSafeLoggingConfig()


def setup_logging(debug: bool = False) -> None:
    """
    Setup thread-safe logging configuration.

    Args:
        debug: Whether to enable debug logging
    """
    logging_config.setup_logging(debug)


def stop_logging() -> None:
    """Stop the logging listener and cleanup."""
    logging_config.stop()
