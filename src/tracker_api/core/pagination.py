from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

TOTAL_HEADER = "X-Tracker-Pagination-Total"
LIMIT_HEADER = "X-Tracker-Pagination-Limit"
OFFSET_HEADER = "X-Tracker-Pagination-Offset"
RETURNED_HEADER = "X-Tracker-Pagination-Returned"


def _header_int(headers: Mapping[str, str], name: str) -> int:
    raw = headers.get(name)
    if raw is None:
        return 0
    try:
        return int(str(raw).strip())
    except ValueError:
        return 0


@dataclass(frozen=True)
class Pagination:
    """
    Result-set position reported by the service in response headers.
    Returned next to the decoded payload, never embedded in it.
    """

    total: int = 0
    limit: int = 0
    offset: int = 0
    returned: int = 0

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "Pagination":
        return cls(
            total=_header_int(headers, TOTAL_HEADER),
            limit=_header_int(headers, LIMIT_HEADER),
            offset=_header_int(headers, OFFSET_HEADER),
            returned=_header_int(headers, RETURNED_HEADER),
        )

    @property
    def has_next(self) -> bool:
        return self.offset + self.returned < self.total

    @property
    def has_previous(self) -> bool:
        return self.offset > 0

    @property
    def next_offset(self) -> Optional[int]:
        return self.offset + self.returned if self.has_next else None

    @property
    def previous_offset(self) -> Optional[int]:
        if not self.has_previous:
            return None
        return max(0, self.offset - self.limit) if self.limit else 0


__all__ = [
    "Pagination",
    "TOTAL_HEADER",
    "LIMIT_HEADER",
    "OFFSET_HEADER",
    "RETURNED_HEADER",
]
