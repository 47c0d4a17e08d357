"""
Comment model for Postr.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import uuid4

from postr.models.base import as_str, embedded
from postr.models.post import Post
from postr.models.user import User
from postr.timestamps import to_datetime, to_iso, utcnow


@dataclass
class Comment:
    """
    A comment on a post.

    Attributes:
        id: Unique identifier (UUID)
        content: Comment text
        post_id: Post being commented on
        author_id: Commenting user
        created_at: When the comment was created
        author: Embedded author, when loaded
        post: Embedded post, when loaded
    """

    content: str
    post_id: str
    author_id: str
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: Optional[datetime] = None
    author: Optional[User] = None
    post: Optional[Post] = None

    def __post_init__(self):
        if self.created_at is None:
            self.created_at = utcnow()

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        result = {
            "id": self.id,
            "content": self.content,
            "postId": self.post_id,
            "authorId": self.author_id,
            "createdAt": to_iso(self.created_at) if self.created_at else None,
        }
        if self.author is not None:
            result["author"] = self.author.summary()
        if self.post is not None:
            result["post"] = self.post.summary()
        return result

    @classmethod
    def from_row(cls, row: dict) -> "Comment":
        """Create Comment from a database row, embedding joined author/post."""
        created_at = row.get("created_at")
        author = embedded(row, "author")
        post = embedded(row, "post")

        return cls(
            id=as_str(row.get("id")),
            content=row.get("content", ""),
            post_id=as_str(row.get("post_id")),
            author_id=as_str(row.get("author_id")),
            created_at=to_datetime(created_at) if created_at is not None else None,
            author=User.from_row(author) if author else None,
            post=Post.from_row(post) if post else None,
        )
