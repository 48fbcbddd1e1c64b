"""Prometheus metrics module for FEST-SEARCH."""

from fest_search.metrics.collectors import (
    ACTIVE_REQUESTS,
    MATCH_DURATION,
    MATCH_EVALUATIONS,
    REQUEST_COUNT,
    REQUEST_LATENCY,
)

__all__ = [
    "REQUEST_LATENCY",
    "REQUEST_COUNT",
    "ACTIVE_REQUESTS",
    "MATCH_EVALUATIONS",
    "MATCH_DURATION",
]
