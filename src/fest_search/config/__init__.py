"""Configuration module for FEST-SEARCH."""

from fest_search.config.matcher_config import (
    MatcherConfig,
    load_matcher_config,
    load_matcher_config_from_yaml,
)

__all__ = [
    "MatcherConfig",
    "load_matcher_config",
    "load_matcher_config_from_yaml",
]
