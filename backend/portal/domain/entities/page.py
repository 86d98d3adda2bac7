"""Paged read result shared by scan and query."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Page:
    """One page of records plus an opaque continuation cursor.

    ``cursor`` is None once the table (or key range) is exhausted.
    """

    items: list[dict[str, Any]] = field(default_factory=list)
    cursor: str | None = None
    scanned_count: int = 0

    @property
    def count(self) -> int:
        return len(self.items)

    @property
    def has_more(self) -> bool:
        return self.cursor is not None
