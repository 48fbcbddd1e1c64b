"""Logging configuration module for FEST-SEARCH."""

from fest_search.logging.setup import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
