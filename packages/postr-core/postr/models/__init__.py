"""
Core data models for Postr.
"""

from postr.models.base import Page
from postr.models.category import Category
from postr.models.comment import Comment
from postr.models.post import Post
from postr.models.user import User

__all__ = [
    "User",
    "Category",
    "Post",
    "Comment",
    "Page",
]
