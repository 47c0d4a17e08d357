"""
Business logic services for Postr.
"""

from postr.services.base import UNSET
from postr.services.categories import CategoryService
from postr.services.comments import CommentService
from postr.services.posts import PostService
from postr.services.users import UserService

__all__ = [
    "UserService",
    "CategoryService",
    "PostService",
    "CommentService",
    "UNSET",
]
