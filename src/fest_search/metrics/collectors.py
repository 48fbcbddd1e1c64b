"""Prometheus metrics collectors for FEST-SEARCH."""

from prometheus_client import Counter, Gauge, Histogram

# Request metrics
REQUEST_LATENCY = Histogram(
    "fest_search_request_duration_seconds",
    "Request latency in seconds",
    ["method", "endpoint", "status"],
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0],
)

REQUEST_COUNT = Counter(
    "fest_search_requests_total",
    "Total request count",
    ["method", "endpoint", "status"],
)

ACTIVE_REQUESTS = Gauge(
    "fest_search_active_requests",
    "Currently processing requests",
)

# Match metrics
MATCH_EVALUATIONS = Counter(
    "fest_search_match_evaluations_total",
    "Total match evaluations",
    ["result", "strategy"],
)

MATCH_DURATION = Histogram(
    "fest_search_match_duration_seconds",
    "Match evaluation latency",
    buckets=[0.00001, 0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05],
)
