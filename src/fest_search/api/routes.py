"""
FastAPI routes for the FEST-SEARCH service.

Exposes the fuzzy ``matches`` operation over HTTP, plus health and metrics.
"""

import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.exceptions import HTTPException as StarletteHTTPException

from fest_search import __version__
from fest_search.api.middleware import RequestLoggingMiddleware
from fest_search.api.models import (
    HealthResponse,
    MatchRequest,
    MatchResponse,
    TokenMatchInfo,
)
from fest_search.core.fuzzy import FuzzyMatcher, get_fuzzy_matcher
from fest_search.logging.setup import get_logger, setup_logging
from fest_search.metrics.collectors import MATCH_DURATION, MATCH_EVALUATIONS

setup_logging()
logger = get_logger(__name__)


_matcher: Optional[FuzzyMatcher] = None


def get_matcher() -> FuzzyMatcher:
    """Get or create the configured matcher instance."""
    global _matcher
    if _matcher is None:
        _matcher = get_fuzzy_matcher()
        logger.info(
            "Matcher configured",
            extra={
                "event": "matcher_configured",
                "distance_ratio": _matcher.distance_ratio,
                "min_distance": _matcher.min_distance,
            },
        )
    return _matcher


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info("Starting FEST-SEARCH service", extra={"version": __version__})
    yield
    logger.info("Shutting down FEST-SEARCH service")


app = FastAPI(
    title="FEST-SEARCH",
    description="Fuzzy matching for fest organizer, event and registration lists",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return HealthResponse(status="ok", version=__version__)


@app.get("/metrics", tags=["Monitoring"])
async def metrics():
    """Prometheus metrics endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )


@app.post(
    "/api/v1/match",
    response_model=MatchResponse,
    response_model_exclude_none=True,
    tags=["Match"],
)
async def match(
    body: MatchRequest,
    matcher: FuzzyMatcher = Depends(get_matcher),
):
    """Check whether the query fuzzily matches the target.

    Null target or query is treated as empty text; an empty query matches
    everything. Set ``explain`` to see which strategy accepted each token.
    """
    start_time = time.perf_counter()
    result = matcher.explain(body.target, body.query)
    MATCH_DURATION.observe(time.perf_counter() - start_time)

    MATCH_EVALUATIONS.labels(
        result="match" if result.matched else "no_match",
        strategy=result.strategy.value,
    ).inc()

    if not body.explain:
        return MatchResponse(matched=result.matched)

    return MatchResponse(
        matched=result.matched,
        strategy=result.strategy.value,
        tokens=[
            TokenMatchInfo(
                token=tm.token,
                strategy=tm.strategy.value,
                word=tm.word,
                distance=tm.distance,
            )
            for tm in result.tokens
        ],
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions in a uniform error format."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "message": exc.detail,
                "type": "invalid_request_error",
                "code": exc.status_code,
            }
        },
    )
