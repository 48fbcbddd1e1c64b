"""
Fuzzy matcher

Decides whether a search query "fuzzily matches" a piece of text, as an admin
types into a list filter. Each query token is tried against progressively
looser strategies:

- Substring: the whole query, then the token, appears verbatim in the target
- Subsequence: the token's characters appear in order in the target
- Edit distance: some word of the target is within a few typos of the token

All tokens must match (AND semantics); evaluation stops at the first failure.
"""

import math
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

# Roughly one tolerated edit per three characters of the shorter string
DISTANCE_RATIO = 0.34
# Short tokens still tolerate a single typo
MIN_DISTANCE = 1

_TOKEN_SPLIT = re.compile(r"\s+")
_WORD_SPLIT = re.compile(r"[^a-z0-9]+")


class MatchStrategy(str, Enum):
    """Strategy that accepted a query or token"""
    EMPTY_QUERY = "empty_query"         # empty query matches everything
    SUBSTRING = "substring"             # whole query is a substring
    TOKEN_SUBSTRING = "token_substring" # token is a substring
    SUBSEQUENCE = "subsequence"         # token characters in order
    EDIT_DISTANCE = "edit_distance"     # a target word within threshold
    NONE = "none"                       # no strategy matched


@dataclass
class TokenMatch:
    """How a single query token was resolved"""
    token: str
    strategy: MatchStrategy
    word: Optional[str] = None       # target word, for EDIT_DISTANCE only
    distance: Optional[int] = None   # edit distance to that word

    @property
    def matched(self) -> bool:
        return self.strategy != MatchStrategy.NONE


@dataclass
class FuzzyMatch:
    """Result of explaining a match decision"""
    matched: bool
    strategy: MatchStrategy
    tokens: list[TokenMatch] = field(default_factory=list)


def normalize(text: Any) -> str:
    """Lower-case and trim text, treating None as empty."""
    if text is None:
        return ""
    return str(text).lower().strip()


def levenshtein(a: str, b: str) -> int:
    """Levenshtein distance between two strings.

    Unit cost for insertion, deletion and substitution, computed with two
    rolling rows of length ``len(b) + 1``.

    Examples:
        >>> levenshtein("kitten", "sitting")
        3
        >>> levenshtein("", "abc")
        3
    """
    m, n = len(a), len(b)
    if m == 0:
        return n
    if n == 0:
        return m

    previous = list(range(n + 1))
    current = [0] * (n + 1)
    for i in range(m):
        current[0] = i + 1
        for j in range(n):
            cost = 0 if a[i] == b[j] else 1
            current[j + 1] = min(
                current[j] + 1,       # insertion
                previous[j + 1] + 1,  # deletion
                previous[j] + cost,   # substitution
            )
        previous, current = current, previous

    return previous[n]


def is_subsequence(token: str, target: str) -> bool:
    """Check that all characters of token appear in order inside target."""
    if not token:
        return True
    i = 0
    for char in target:
        if char == token[i]:
            i += 1
            if i == len(token):
                return True
    return False


def split_tokens(query: str) -> list[str]:
    """Split a normalized query into whitespace-delimited tokens."""
    return [t for t in _TOKEN_SPLIT.split(query) if t]


def split_words(target: str) -> list[str]:
    """Split a normalized target into alphanumeric words."""
    return [w for w in _WORD_SPLIT.split(target) if w]


class FuzzyMatcher:
    """Layered fuzzy matcher

    Instances are immutable and hold no per-call state, so a single matcher
    can be shared freely across threads.
    """

    def __init__(
        self,
        distance_ratio: float = DISTANCE_RATIO,
        min_distance: int = MIN_DISTANCE,
    ):
        """Initialize the matcher.

        Args:
            distance_ratio: Edits tolerated per character of the shorter of
                token and word.
            min_distance: Minimum number of edits always tolerated.

        Raises:
            ValueError: If either tolerance is negative, or min_distance is
                not an integer.
        """
        if distance_ratio < 0:
            raise ValueError(f"distance_ratio must be >= 0, got {distance_ratio}")
        if isinstance(min_distance, bool) or not isinstance(min_distance, int):
            raise ValueError(
                f"min_distance must be an integer, got {type(min_distance).__name__}"
            )
        if min_distance < 0:
            raise ValueError(f"min_distance must be >= 0, got {min_distance}")
        self._distance_ratio = float(distance_ratio)
        self._min_distance = min_distance

    @classmethod
    def from_config(cls, config) -> "FuzzyMatcher":
        """Build a matcher from a MatcherConfig."""
        return cls(
            distance_ratio=config.distance_ratio,
            min_distance=config.min_distance,
        )

    @property
    def distance_ratio(self) -> float:
        return self._distance_ratio

    @property
    def min_distance(self) -> int:
        return self._min_distance

    def distance_threshold(self, token_len: int, word_len: int) -> int:
        """Maximum edit distance accepted between a token and a word."""
        proportional = math.floor(min(token_len, word_len) * self._distance_ratio)
        return max(self._min_distance, proportional)

    def matches(self, target: Any, query: Any) -> bool:
        """Check whether query fuzzily matches target.

        Never raises: None and other non-text inputs degrade to text.
        """
        q = normalize(query)
        t = normalize(target)
        if not q:
            return True
        if not t:
            return False
        if q in t:
            return True

        words: Optional[list[str]] = None
        for token in split_tokens(q):
            if token in t or is_subsequence(token, t):
                continue
            # Words are only needed once a token reaches the edit-distance tier
            if words is None:
                words = split_words(t)
            if self._closest_word(token, words) is None:
                return False

        return True

    def explain(self, target: Any, query: Any) -> FuzzyMatch:
        """Explain which strategy accepted (or rejected) each query token.

        Evaluates exactly like :meth:`matches`, including stopping at the
        first failing token, so ``explain(t, q).matched == matches(t, q)``.
        """
        q = normalize(query)
        t = normalize(target)
        if not q:
            return FuzzyMatch(matched=True, strategy=MatchStrategy.EMPTY_QUERY)
        if not t:
            return FuzzyMatch(matched=False, strategy=MatchStrategy.NONE)
        if q in t:
            return FuzzyMatch(matched=True, strategy=MatchStrategy.SUBSTRING)

        words: Optional[list[str]] = None
        tokens: list[TokenMatch] = []
        for token in split_tokens(q):
            if token in t:
                tokens.append(TokenMatch(token, MatchStrategy.TOKEN_SUBSTRING))
                continue
            if is_subsequence(token, t):
                tokens.append(TokenMatch(token, MatchStrategy.SUBSEQUENCE))
                continue
            if words is None:
                words = split_words(t)
            closest = self._closest_word(token, words)
            if closest is None:
                tokens.append(TokenMatch(token, MatchStrategy.NONE))
                return FuzzyMatch(
                    matched=False, strategy=MatchStrategy.NONE, tokens=tokens
                )
            word, distance = closest
            tokens.append(TokenMatch(
                token, MatchStrategy.EDIT_DISTANCE, word=word, distance=distance
            ))

        # Weakest strategy used by any token describes the overall match
        strategy = max(
            (tm.strategy for tm in tokens),
            key=_STRATEGY_ORDER.index,
        )
        return FuzzyMatch(matched=True, strategy=strategy, tokens=tokens)

    def _closest_word(
        self, token: str, words: list[str]
    ) -> Optional[tuple[str, int]]:
        """Return the first word within the distance threshold of token."""
        for word in words:
            threshold = self.distance_threshold(len(token), len(word))
            # Lengths alone already exceed the threshold
            if abs(len(token) - len(word)) > threshold:
                continue
            distance = levenshtein(token, word)
            if distance <= threshold:
                return word, distance
        return None

    def __repr__(self) -> str:
        return (
            f"FuzzyMatcher(distance_ratio={self._distance_ratio}, "
            f"min_distance={self._min_distance})"
        )


_STRATEGY_ORDER = [
    MatchStrategy.TOKEN_SUBSTRING,
    MatchStrategy.SUBSEQUENCE,
    MatchStrategy.EDIT_DISTANCE,
]

_default_matcher = FuzzyMatcher()


def matches(target: Any, query: Any) -> bool:
    """Check whether query fuzzily matches target using default tolerances."""
    return _default_matcher.matches(target, query)


def explain(target: Any, query: Any) -> FuzzyMatch:
    """Explain a match decision using default tolerances."""
    return _default_matcher.explain(target, query)


def get_fuzzy_matcher() -> FuzzyMatcher:
    """Get a matcher built from the loaded configuration."""
    from fest_search.config.matcher_config import load_matcher_config

    return FuzzyMatcher.from_config(load_matcher_config())
