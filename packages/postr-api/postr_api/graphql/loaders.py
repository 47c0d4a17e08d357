"""
Per-request DataLoaders.

Field resolvers ask a loader for one key at a time; the loader collects
every key requested in the same tick and answers them with a single
query. A fresh set is built for every request so nothing is cached
between requests.
"""

from collections import defaultdict
from typing import Callable, Dict, Iterable, List, Optional, TypeVar

from strawberry.dataloader import DataLoader

from postr.db import DatabaseAdapter
from postr.models import Category, Comment, Post, User
from postr.services import CategoryService, CommentService, PostService, UserService

T = TypeVar("T")


def _by_id(items: Iterable[T], keys: List[str]) -> List[Optional[T]]:
    found = {item.id: item for item in items}
    return [found.get(key) for key in keys]


def _grouped(items: Iterable[T], keys: List[str], key_fn: Callable[[T], str]) -> List[List[T]]:
    groups: Dict[str, List[T]] = defaultdict(list)
    for item in items:
        groups[key_fn(item)].append(item)
    return [groups.get(key, []) for key in keys]


class Loaders:
    """The loaders available to resolvers through info.context.loaders."""

    def __init__(self, adapter: DatabaseAdapter):
        self.users = UserService(adapter)
        self.categories = CategoryService(adapter)
        self.posts = PostService(adapter)
        self.comments = CommentService(adapter)

        self.user = DataLoader(load_fn=self._load_users)
        self.category = DataLoader(load_fn=self._load_categories)
        self.post = DataLoader(load_fn=self._load_posts)
        self.posts_by_author = DataLoader(load_fn=self._load_posts_by_author)
        self.posts_by_category = DataLoader(load_fn=self._load_posts_by_category)
        self.comments_by_post = DataLoader(load_fn=self._load_comments_by_post)
        self.comments_by_author = DataLoader(load_fn=self._load_comments_by_author)

    async def _load_users(self, keys: List[str]) -> List[Optional[User]]:
        return _by_id(await self.users.get_many(keys), keys)

    async def _load_categories(self, keys: List[str]) -> List[Optional[Category]]:
        return _by_id(await self.categories.get_many(keys), keys)

    async def _load_posts(self, keys: List[str]) -> List[Optional[Post]]:
        return _by_id(await self.posts.get_many(keys), keys)

    async def _load_posts_by_author(self, keys: List[str]) -> List[List[Post]]:
        posts = await self.posts.list_for_authors(keys)
        return _grouped(posts, keys, lambda post: post.author_id)

    async def _load_posts_by_category(self, keys: List[str]) -> List[List[Post]]:
        posts = await self.posts.list_for_categories(keys)
        return _grouped(posts, keys, lambda post: post.category_id)

    async def _load_comments_by_post(self, keys: List[str]) -> List[List[Comment]]:
        comments = await self.comments.list_for_posts(keys)
        return _grouped(comments, keys, lambda comment: comment.post_id)

    async def _load_comments_by_author(self, keys: List[str]) -> List[List[Comment]]:
        comments = await self.comments.list_for_authors(keys)
        return _grouped(comments, keys, lambda comment: comment.author_id)
