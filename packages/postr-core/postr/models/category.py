"""
Category model for Postr.
"""

from dataclasses import dataclass, field
from uuid import uuid4

from postr.models.base import as_str


@dataclass
class Category:
    """
    A post category.

    Attributes:
        id: Unique identifier (UUID)
        name: Display name
        slug: URL-safe unique key (lowercase letters, digits, hyphens)
    """

    name: str
    slug: str
    id: str = field(default_factory=lambda: str(uuid4()))

    def summary(self) -> dict:
        return self.to_dict()

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
        }

    @classmethod
    def from_row(cls, row: dict) -> "Category":
        """Create Category from a database row."""
        return cls(
            id=as_str(row.get("id")),
            name=row.get("name", ""),
            slug=row.get("slug", ""),
        )
