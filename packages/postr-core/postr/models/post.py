"""
Post model for Postr.

Posts belong to an author and a category and collect comments. Related
rows may be embedded when the query joined them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, List, Optional
from uuid import uuid4

from postr.models.base import as_str, embedded
from postr.models.category import Category
from postr.models.user import User
from postr.timestamps import to_datetime, to_iso, utcnow

if TYPE_CHECKING:
    from postr.models.comment import Comment


@dataclass
class Post:
    """
    A blog post.

    Attributes:
        id: Unique identifier (UUID)
        title: Post title
        content: Post body
        published: Whether the post is visible to readers
        author_id: Author (User) id
        category_id: Category id
        created_at: When the post was created
        author: Embedded author, when loaded
        category: Embedded category, when loaded
        comments: Embedded comments, when loaded (None means not loaded)
    """

    title: str
    content: str
    author_id: str
    category_id: str
    id: str = field(default_factory=lambda: str(uuid4()))
    published: bool = False
    created_at: Optional[datetime] = None
    author: Optional[User] = None
    category: Optional[Category] = None
    comments: Optional[List["Comment"]] = None

    def __post_init__(self):
        if self.created_at is None:
            self.created_at = utcnow()

    def summary(self) -> dict:
        """Compact form embedded in comments."""
        return {"id": self.id, "title": self.title}

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        result = {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "published": self.published,
            "authorId": self.author_id,
            "categoryId": self.category_id,
            "createdAt": to_iso(self.created_at) if self.created_at else None,
        }
        if self.author is not None:
            result["author"] = self.author.summary()
        if self.category is not None:
            result["category"] = self.category.summary()
        if self.comments is not None:
            result["comments"] = [c.to_dict() for c in self.comments]
        return result

    @classmethod
    def from_row(cls, row: dict) -> "Post":
        """
        Create Post from a database row.

        Columns prefixed "author__" or "category__" become embedded objects.
        """
        created_at = row.get("created_at")
        author = embedded(row, "author")
        category = embedded(row, "category")

        return cls(
            id=as_str(row.get("id")),
            title=row.get("title", ""),
            content=row.get("content", ""),
            published=bool(row.get("published", False)),
            author_id=as_str(row.get("author_id")),
            category_id=as_str(row.get("category_id")),
            created_at=to_datetime(created_at) if created_at is not None else None,
            author=User.from_row(author) if author else None,
            category=Category.from_row(category) if category else None,
        )
