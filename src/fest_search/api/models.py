"""
Pydantic models for the FEST-SEARCH API.
"""

from typing import Optional

from pydantic import BaseModel, Field


class MatchRequest(BaseModel):
    """Request body for the match endpoint.

    Null target or query is treated as empty text.
    """

    target: Optional[str] = Field(None, description="Text being searched (haystack)")
    query: Optional[str] = Field(None, description="Raw search text (needle)")
    explain: bool = Field(
        default=False,
        description="Include the strategy that accepted each query token",
    )


class TokenMatchInfo(BaseModel):
    """How a single query token was resolved."""

    token: str
    strategy: str
    word: Optional[str] = Field(None, description="Target word for edit-distance matches")
    distance: Optional[int] = Field(None, description="Edit distance to that word")


class MatchResponse(BaseModel):
    """Response body for the match endpoint."""

    matched: bool
    strategy: Optional[str] = Field(None, description="Overall strategy (explain only)")
    tokens: Optional[list[TokenMatchInfo]] = Field(
        None, description="Per-token resolution (explain only)"
    )


class ErrorResponse(BaseModel):
    """Error response body."""

    error: dict = Field(..., description="Error details")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str
