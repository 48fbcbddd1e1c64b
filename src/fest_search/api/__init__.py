"""HTTP API for FEST-SEARCH."""

from fest_search.api.routes import app

__all__ = ["app"]
