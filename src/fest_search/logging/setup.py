"""Logging configuration for FEST-SEARCH.

Every log line is tagged with the id of the HTTP request that produced it.
The id is bound per request by the API middleware; code outside a request
logs with ``request_id`` set to ``-``.
"""

import logging
import os
import re
import sys
import uuid
from contextvars import ContextVar, Token
from typing import Optional

from pythonjsonlogger import jsonlogger

SERVICE_NAME = "fest-search"
REQUEST_ID_HEADER = "X-Request-ID"

# Client-supplied ids are echoed into logs and headers, so keep them short and plain
_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestContextFilter(logging.Filter):
    """Filter that adds the bound request_id to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        return True


def is_valid_request_id(value: Optional[str]) -> bool:
    """Check that a client-supplied request id is safe to reuse."""
    return bool(value) and _REQUEST_ID_PATTERN.match(value) is not None


def bind_request_id(candidate: Optional[str] = None) -> tuple[str, Token]:
    """Bind a request id to the current context.

    The candidate (usually the incoming X-Request-ID header) is reused when
    it is valid; otherwise a short random id is generated.

    Returns:
        The bound id and a token for :func:`release_request_id`.
    """
    request_id = candidate if is_valid_request_id(candidate) else uuid.uuid4().hex[:8]
    return request_id, request_id_var.set(request_id)


def release_request_id(token: Token) -> None:
    """Restore the request id that was bound before :func:`bind_request_id`."""
    request_id_var.reset(token)


def build_formatter(json_format: bool) -> logging.Formatter:
    """Create the log formatter.

    JSON output renames ``levelname``/``asctime`` to ``level``/``timestamp``
    and stamps the service name; ``request_id`` and any ``extra`` fields
    are carried through as top-level keys.
    """
    if json_format:
        return jsonlogger.JsonFormatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z",
            rename_fields={"levelname": "level", "asctime": "timestamp"},
            static_fields={"service": SERVICE_NAME},
        )
    return logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def resolve_level(level: Optional[str] = None) -> str:
    """Resolve the log level name, falling back to INFO for unknown names.

    Startup validation in ``fest_search.main`` reports unknown names; here
    they must not stop the service from logging at all.
    """
    if level is None:
        level = os.getenv("FEST_SEARCH_LOG_LEVEL", "INFO")
    level = level.upper()
    if not isinstance(logging.getLevelName(level), int):
        return "INFO"
    return level


def setup_logging(
    level: Optional[str] = None,
    json_format: Optional[bool] = None,
) -> None:
    """Configure application logging on the root logger.

    Args:
        level: Log level name. Defaults to FEST_SEARCH_LOG_LEVEL or INFO.
        json_format: Whether to emit JSON. Defaults to
            FEST_SEARCH_LOG_FORMAT == 'json' (the default).
    """
    level = resolve_level(level)
    if json_format is None:
        json_format = os.getenv("FEST_SEARCH_LOG_FORMAT", "json").lower() == "json"

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.addFilter(RequestContextFilter())
    handler.setFormatter(build_formatter(json_format))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)

    # The middleware already logs every request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the specified name."""
    return logging.getLogger(name)
