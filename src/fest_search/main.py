"""
FEST-SEARCH Server Entry Point

Run with: python -m fest_search.main
Or: uvicorn fest_search.api.routes:app --reload
"""

import os
import sys

import uvicorn
import yaml

from fest_search import __version__
from fest_search.config.matcher_config import load_matcher_config
from fest_search.logging.setup import get_logger, setup_logging

setup_logging()
logger = get_logger(__name__)


def validate_environment() -> list[str]:
    """Validate environment variables at startup.

    Returns:
        List of validation error messages (empty if all valid).
    """
    errors = []

    port_str = os.getenv("FEST_SEARCH_PORT", "8000")
    try:
        port = int(port_str)
        if not (1 <= port <= 65535):
            errors.append(f"FEST_SEARCH_PORT must be between 1 and 65535, got: {port}")
    except ValueError:
        errors.append(f"FEST_SEARCH_PORT must be an integer, got: {port_str}")

    valid_log_levels = {"debug", "info", "warning", "error", "critical"}
    log_level = os.getenv("FEST_SEARCH_LOG_LEVEL", "info").lower()
    if log_level not in valid_log_levels:
        errors.append(f"FEST_SEARCH_LOG_LEVEL must be one of {valid_log_levels}, got: {log_level}")

    # Matcher tolerances (YAML file and env overrides)
    try:
        load_matcher_config()
    except FileNotFoundError as e:
        errors.append(str(e))
    except ValueError as e:
        errors.append(f"Matcher configuration error: {e}")
    except yaml.YAMLError as e:
        errors.append(f"Matcher configuration YAML parsing error: {e}")

    return errors


def main():
    """Run the FEST-SEARCH server."""
    validation_errors = validate_environment()
    if validation_errors:
        for error in validation_errors:
            logger.error(error, extra={"event": "config_error"})
        print("\nConfiguration errors detected:", file=sys.stderr)
        for error in validation_errors:
            print(f"  - {error}", file=sys.stderr)
        print("\nPlease fix the above errors and restart.", file=sys.stderr)
        sys.exit(1)

    host = os.getenv("FEST_SEARCH_HOST", "0.0.0.0")
    port = int(os.getenv("FEST_SEARCH_PORT", "8000"))
    reload = os.getenv("FEST_SEARCH_RELOAD", "false").lower() == "true"
    log_level = os.getenv("FEST_SEARCH_LOG_LEVEL", "info").lower()

    logger.info(
        "Starting FEST-SEARCH server",
        extra={
            "event": "server_starting",
            "host": host,
            "port": port,
            "version": __version__,
        },
    )

    uvicorn.run(
        "fest_search.api.routes:app",
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
    )


if __name__ == "__main__":
    main()
