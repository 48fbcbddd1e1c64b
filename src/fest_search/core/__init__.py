"""Core matching and filtering modules."""

from fest_search.core.filtering import filter_records, get_field, record_matches
from fest_search.core.fuzzy import (
    FuzzyMatch,
    FuzzyMatcher,
    MatchStrategy,
    TokenMatch,
    explain,
    get_fuzzy_matcher,
    levenshtein,
    matches,
)

__all__ = [
    "FuzzyMatch",
    "FuzzyMatcher",
    "MatchStrategy",
    "TokenMatch",
    "explain",
    "get_fuzzy_matcher",
    "levenshtein",
    "matches",
    # Filtering
    "filter_records",
    "get_field",
    "record_matches",
]
