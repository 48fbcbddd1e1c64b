"""Record filtering on top of the fuzzy matcher.

List views (organizers, events, registrations, password requests) keep a
record when *any* of its searchable fields matches the query. Field lookup
lives here so the matcher itself only ever sees text.
"""

from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Optional, TypeVar

from fest_search.core.fuzzy.matcher import FuzzyMatcher, normalize
from fest_search.logging.setup import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

_default_matcher = FuzzyMatcher()


def get_field(record: Any, path: str) -> str:
    """Resolve a dotted field path on a record.

    Each path segment is looked up as a mapping key first, then as an
    attribute. Missing segments and None values resolve to an empty string.

    Examples:
        >>> get_field({"organizer": {"organizerName": "Robotics Club"}}, "organizer.organizerName")
        'Robotics Club'
        >>> get_field({"organizer": None}, "organizer.organizerName")
        ''
    """
    value = record
    for part in path.split("."):
        if value is None:
            return ""
        if isinstance(value, Mapping):
            value = value.get(part)
        else:
            value = getattr(value, part, None)

    if value is None:
        return ""
    return str(value)


def _check_fields(fields: Sequence[str]) -> None:
    # A bare string would be read as one-character field paths
    if isinstance(fields, str):
        raise ValueError(f"fields must be a sequence of field paths, got string {fields!r}")
    if not fields:
        raise ValueError("At least one field is required")


def record_matches(
    record: Any,
    query: Optional[str],
    fields: Sequence[str],
    matcher: Optional[FuzzyMatcher] = None,
) -> bool:
    """Check whether any of the record's fields matches the query."""
    _check_fields(fields)
    matcher = matcher or _default_matcher
    return any(matcher.matches(get_field(record, f), query) for f in fields)


def filter_records(
    records: Iterable[T],
    query: Optional[str],
    fields: Sequence[str],
    matcher: Optional[FuzzyMatcher] = None,
) -> list[T]:
    """Filter records down to those matching the query.

    Args:
        records: Records to filter (mappings or objects).
        query: Raw search text; empty or None keeps every record.
        fields: Dotted field paths to match against, e.g.
            ``["organizerName", "email", "category"]``.
        matcher: Matcher to use; defaults to the standard tolerances.

    Returns:
        A new list with matching records, in input order.

    Raises:
        ValueError: If no fields are given, or fields is a bare string.
    """
    _check_fields(fields)

    records = list(records)
    if not normalize(query):
        return records

    matcher = matcher or _default_matcher
    result = [r for r in records if record_matches(r, query, fields, matcher)]

    logger.debug(
        "Filtered records",
        extra={
            "event": "records_filtered",
            "fields": list(fields),
            "total": len(records),
            "matched": len(result),
        },
    )
    return result
