# =============================================================================
# core/analysis.py  -  Client-side reductions over Graph API responses
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns a decoded response into the small answer an agent actually wants:
#     - a count (comments, likes, shares)
#     - the comments that look negative
#     - who comments the most
#
#   Everything here is pure: no I/O, no Graph client.  The manager fetches,
#   these functions reduce.  That keeps them trivially testable with plain
#   dicts.
# =============================================================================

from collections import Counter
from typing import Any, Iterable, Optional

from core.models import Collection, CommenterCount

# Lower-case substrings; a comment matches if its message contains any one.
NEGATIVE_KEYWORDS: tuple[str, ...] = (
    "bad",
    "terrible",
    "awful",
    "hate",
    "dislike",
    "problem",
    "issue",
    "broken",
    "worst",
    "disappointed",
    "useless",
    "scam",
    "refund",
)


def count_items(payload: Any) -> int:
    """Number of entries in the ``data`` list of a collection response."""
    return len(Collection.from_response(payload).data)


def summary_total_count(payload: Any, edge: str) -> int:
    """Read ``{edge: {summary: {total_count: N}}}``, 0 when absent."""
    if not isinstance(payload, dict):
        return 0
    container = payload.get(edge)
    summary = container.get("summary") if isinstance(container, dict) else None
    total = summary.get("total_count") if isinstance(summary, dict) else None
    return total if isinstance(total, int) else 0


def edge_count(payload: Any, edge: str) -> int:
    """Read ``{edge: {count: N}}``, 0 when absent (e.g. a post never shared)."""
    if not isinstance(payload, dict):
        return 0
    container = payload.get(edge)
    count = container.get("count") if isinstance(container, dict) else None
    return count if isinstance(count, int) else 0


def is_negative(message: Optional[str], keywords: Iterable[str] = NEGATIVE_KEYWORDS) -> bool:
    if not message:
        return False
    text = message.lower()
    return any(keyword in text for keyword in keywords)


def filter_negative_comments(
    comments: Iterable[dict[str, Any]],
    keywords: Iterable[str] = NEGATIVE_KEYWORDS,
) -> list[dict[str, Any]]:
    """Keep comments whose message contains a negative keyword.

    Matching is a case-insensitive substring test, so "Problems" matches
    "problem".  Comments without a message are dropped.  Order is preserved.

    Args:
        comments: Comment dicts as returned by the Graph API.
        keywords: Lower-case keywords.  Defaults to NEGATIVE_KEYWORDS.

    Returns:
        The matching comment dicts, unchanged.
    """
    keywords = tuple(keywords)
    return [comment for comment in comments if is_negative(comment.get("message"), keywords)]


def top_commenters(
    comments: Iterable[dict[str, Any]],
    top: Optional[int] = None,
) -> list[CommenterCount]:
    """Rank commenters by how many comments they left.

    Comments without ``from.id`` are ignored.  Ties keep the order in which
    each user was first seen: Counter preserves insertion order and sorted()
    is stable, including with reverse=True.

    Args:
        comments: Comment dicts as returned by the Graph API.
        top: Keep only the first N rows.  None keeps everyone.
    """
    tally: Counter[str] = Counter()
    for comment in comments:
        author = comment.get("from")
        user_id = author.get("id") if isinstance(author, dict) else None
        if user_id:
            tally[user_id] += 1

    ranked = sorted(tally.items(), key=lambda item: item[1], reverse=True)
    if top is not None:
        ranked = ranked[:top]
    return [CommenterCount(user_id=user_id, count=count) for user_id, count in ranked]
