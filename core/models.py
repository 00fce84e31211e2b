# =============================================================================
# core/models.py  -  Data Models (the shapes that cross the Graph API)
# =============================================================================
#
# Every value here is transient: built for one tool call, then discarded.
# The Graph API answers with plain JSON, and the manager hands that JSON back
# untouched.  These dataclasses exist for the few places where we need to
# read INTO a response (pagination, comment reductions) or build a request
# that has real structure (batch sub-operations).
# =============================================================================

import json
from dataclasses import asdict, dataclass, field
from typing import Any, Optional
from urllib.parse import urlencode


# -----------------------------------------------------------------------------
# Paging / Collection  -  cursor-paginated list responses
# -----------------------------------------------------------------------------
# Graph list endpoints answer with:
#   {"data": [...], "paging": {"cursors": {"before": "..", "after": ".."},
#                              "next": "https://..."}}
# No "after" cursor means there is no further page.
# -----------------------------------------------------------------------------
@dataclass
class Paging:
    """Cursor pair of a collection page."""

    before: Optional[str] = None
    after: Optional[str] = None

    @classmethod
    def from_response(cls, paging: Any) -> Optional["Paging"]:
        if not isinstance(paging, dict):
            return None
        cursors = paging.get("cursors") or {}
        return cls(before=cursors.get("before"), after=cursors.get("after"))


@dataclass
class Collection:
    """One page of a Graph API collection (posts, comments)."""

    data: list[dict[str, Any]] = field(default_factory=list)
    paging: Optional[Paging] = None

    @classmethod
    def from_response(cls, payload: Any) -> "Collection":
        if not isinstance(payload, dict):
            return cls()
        data = payload.get("data")
        return cls(
            data=[item for item in data if isinstance(item, dict)] if isinstance(data, list) else [],
            paging=Paging.from_response(payload.get("paging")),
        )

    @property
    def next_cursor(self) -> Optional[str]:
        """The ``after`` cursor, or None on the last page."""
        return self.paging.after if self.paging else None

    @property
    def has_next_page(self) -> bool:
        return self.next_cursor is not None


# -----------------------------------------------------------------------------
# BatchOperation  -  one sub-request of a batch call
# -----------------------------------------------------------------------------
# The batch endpoint takes a JSON array where each entry's body is a
# URL-encoded form string, not a nested object.  encode() produces exactly
# that; unset optional keys are left out of the entry.
# -----------------------------------------------------------------------------
@dataclass
class BatchOperation:
    """A single Graph API call packaged inside a batch request."""

    method: str                                    # GET | POST | DELETE | PATCH
    relative_url: str                              # e.g. "me/feed?limit=5"
    body: Optional[dict[str, str]] = None          # flattened to key=value&...
    name: Optional[str] = None                     # referenced by dependent calls
    omit_response_on_success: Optional[bool] = None

    def encode(self) -> dict[str, Any]:
        entry: dict[str, Any] = {
            "method": self.method,
            "relative_url": self.relative_url,
        }
        if self.body:
            entry["body"] = urlencode(self.body)
        if self.name is not None:
            entry["name"] = self.name
        if self.omit_response_on_success is not None:
            entry["omit_response_on_success"] = self.omit_response_on_success
        return entry


def encode_batch(operations: list[BatchOperation]) -> str:
    """Serialize operations into the ``batch`` form parameter, order kept."""
    return json.dumps([operation.encode() for operation in operations], separators=(",", ":"))


# -----------------------------------------------------------------------------
# CommenterCount  -  one row of the top-commenters ranking
# -----------------------------------------------------------------------------
@dataclass
class CommenterCount:
    """How many comments one user left on a post."""

    user_id: str
    count: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
