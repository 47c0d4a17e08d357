"""
Shared model helpers: joined-row splitting and pagination pages.
"""

from dataclasses import dataclass, field
from typing import Any, Generic, List, Optional, TypeVar

T = TypeVar("T")


def as_str(value: Any) -> Optional[str]:
    """Normalise identifiers; asyncpg returns UUID objects."""
    if value is None:
        return None
    return str(value)


def embedded(row: dict, prefix: str) -> Optional[dict]:
    """
    Pull the columns of a joined relation out of a row.

    Joined columns are selected as "<prefix>__<column>". Returns None when
    the relation was not joined or the join found no row.
    """
    marker = f"{prefix}__"
    data = {
        key[len(marker):]: value
        for key, value in row.items()
        if key.startswith(marker)
    }
    if not data or data.get("id") is None:
        return None
    return data


@dataclass
class Page(Generic[T]):
    """
    One page of a list query.

    has_more is True when the page came back full. It does not check that
    another row actually exists, so a final page that is exactly full
    still reports has_more.
    """

    items: List[T] = field(default_factory=list)
    page: int = 1
    limit: int = 10

    @property
    def has_more(self) -> bool:
        return len(self.items) == self.limit

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def pagination(self) -> dict:
        """Pagination block for API responses."""
        return {
            "page": self.page,
            "limit": self.limit,
            "hasMore": self.has_more,
        }

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)
