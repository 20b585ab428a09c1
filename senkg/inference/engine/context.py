"""
Context pattern matching for rule buckets.

Patterns are mime-like ``type/subtype`` strings where ``*`` stands for any
part, and ``*/*`` for anything at all.
"""
from typing import Optional

MATCH_ANY = "*/*"
WILDCARD = "*"


def _part_matches(left: str, right: str) -> bool:
    return left == right or left == WILDCARD or right == WILDCARD


def matches_context(rule_context: str, query_filter: Optional[str] = None) -> bool:
    """Return True if a rule context is selected by the query filter.

    Args:
        rule_context: pattern the context was declared with, e.g. "text/book"
        query_filter: filter passed to infer, e.g. "text/*"; None selects everything

    Returns:
        Whether the rules of the context apply to this query
    """
    if query_filter is None:
        return True
    if rule_context == MATCH_ANY or query_filter == MATCH_ANY:
        return True

    rule_parts = rule_context.split("/")
    query_parts = query_filter.split("/")
    if len(rule_parts) != 2 or len(query_parts) != 2:
        # Not a type/subtype pair; only a bare wildcard or an exact match applies
        return _part_matches(rule_context, query_filter)

    return _part_matches(rule_parts[0], query_parts[0]) and _part_matches(rule_parts[1], query_parts[1])
