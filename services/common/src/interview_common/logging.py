"""Structured JSON logging shared by the proxy and the recorder."""

import logging
import os
import sys

from pythonjsonlogger import jsonlogger

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s %(trace_id)s %(span_id)s"

# routed through the JSON handler instead of their own
ADOPTED_LOGGERS = {
    "uvicorn": None,
    "uvicorn.access": None,
    "uvicorn.error": None,
    "httpx": logging.WARNING,
}

_handler: logging.Handler | None = None


def setup_logging() -> logging.Logger:
    """
    Returns the root logger, installing the JSON stdout handler on first use.

    Records carry timestamp, level, logger name, message and the ddtrace
    ``trace_id``/``span_id``. Uvicorn and httpx loggers share the same
    handler so every line on stdout has one shape. The level is read from
    ``LOG_LEVEL`` (default INFO).

    Returns:
        logging.Logger: The configured root logger instance.
    """
    global _handler

    root_logger = logging.getLogger()
    if _handler is not None:
        return root_logger

    level = os.getenv("LOG_LEVEL", "INFO").upper()
    _handler = logging.StreamHandler(sys.stdout)
    _handler.setFormatter(jsonlogger.JsonFormatter(LOG_FORMAT))

    root_logger.setLevel(level)
    root_logger.handlers = [_handler]

    for logger_name, logger_level in ADOPTED_LOGGERS.items():
        adopted = logging.getLogger(logger_name)
        adopted.setLevel(logger_level or level)
        adopted.handlers = [_handler]
        adopted.propagate = False

    return root_logger
