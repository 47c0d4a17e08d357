"""
User model for Postr.

Users author posts and comments.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import uuid4

from postr.models.base import as_str
from postr.timestamps import to_datetime, to_iso, utcnow


@dataclass
class User:
    """
    A user.

    Attributes:
        id: Unique identifier (UUID)
        name: Display name
        avatar_url: Optional avatar image URL
        created_at: When the user was created
    """

    name: str
    id: str = field(default_factory=lambda: str(uuid4()))
    avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        if self.created_at is None:
            self.created_at = utcnow()

    def summary(self) -> dict:
        """Compact form embedded in posts and comments."""
        return {
            "id": self.id,
            "name": self.name,
            "avatarUrl": self.avatar_url,
        }

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "avatarUrl": self.avatar_url,
            "createdAt": to_iso(self.created_at) if self.created_at else None,
        }

    @classmethod
    def from_row(cls, row: dict) -> "User":
        """Create User from a database row."""
        created_at = row.get("created_at")
        return cls(
            id=as_str(row.get("id")),
            name=row.get("name", ""),
            avatar_url=row.get("avatar_url"),
            created_at=to_datetime(created_at) if created_at is not None else None,
        )
