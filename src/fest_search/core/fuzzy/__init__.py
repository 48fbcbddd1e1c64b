"""
Fuzzy matching module

Layered substring / subsequence / edit-distance matching for list filters.
"""

from fest_search.core.fuzzy.matcher import (
    DISTANCE_RATIO,
    MIN_DISTANCE,
    FuzzyMatch,
    FuzzyMatcher,
    MatchStrategy,
    TokenMatch,
    explain,
    get_fuzzy_matcher,
    is_subsequence,
    levenshtein,
    matches,
    normalize,
)

__all__ = [
    "DISTANCE_RATIO",
    "MIN_DISTANCE",
    "FuzzyMatch",
    "FuzzyMatcher",
    "MatchStrategy",
    "TokenMatch",
    "explain",
    "get_fuzzy_matcher",
    "is_subsequence",
    "levenshtein",
    "matches",
    "normalize",
]
