"""
FEST-SEARCH: fuzzy list filtering for college-fest management

Decides whether a search query fuzzily matches a piece of text, and filters
organizer, event and registration records by it.
"""

__version__ = "1.0.0"

from fest_search.core.filtering import filter_records
from fest_search.core.fuzzy import FuzzyMatcher, explain, levenshtein, matches

__all__ = [
    "FuzzyMatcher",
    "explain",
    "filter_records",
    "levenshtein",
    "matches",
]
