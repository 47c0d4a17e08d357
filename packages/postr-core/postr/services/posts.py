"""
Post Service for Postr.

Post reads join the author and category in the same query so callers
never fetch relations row by row.
"""

import builtins
import logging

from postr.models.base import Page
from postr.models.post import Post
from postr.services.base import BaseService
from postr.services.comments import CommentService

logger = logging.getLogger(__name__)

# Post columns plus the joined author and category, prefixed for Post.from_row()
POST_SELECT = """
    SELECT
        p.id, p.title, p.content, p.published, p.author_id, p.category_id, p.created_at,
        u.id AS author__id, u.name AS author__name,
        u.avatar_url AS author__avatar_url, u.created_at AS author__created_at,
        c.id AS category__id, c.name AS category__name, c.slug AS category__slug
    FROM posts p
    JOIN users u ON u.id = p.author_id
    JOIN categories c ON c.id = p.category_id
"""


class PostService(BaseService):
    """
    Service for managing posts.

    Author and category must exist; the foreign keys reject anything else.
    """

    table = "posts"

    async def create(
        self,
        title: str,
        content: str,
        author_id: str,
        category_id: str,
        published: bool = False,
    ) -> Post:
        """
        Create a new post.

        Args:
            title: Post title
            content: Post body
            author_id: Existing user id
            category_id: Existing category id
            published: Publish immediately

        Returns:
            Created Post object
        """
        post = Post(
            title=title,
            content=content,
            author_id=author_id,
            category_id=category_id,
            published=published,
        )

        await self.adapter.execute(
            """
            INSERT INTO posts (id, title, content, published, author_id, category_id, created_at)
            VALUES ($1, $2, $3, $4, $5, $6, $7)
            """,
            post.id, post.title, post.content, post.published,
            post.author_id, post.category_id,
            self.adapter.encode_timestamp(post.created_at),
        )

        logger.info(f"Created post: {post.id} - {post.title}")
        return post

    async def get(self, post_id: str, with_relations: bool = False) -> Post | None:
        """
        Get a post by ID.

        Args:
            post_id: Post ID
            with_relations: Also load the comments (with their authors)

        Returns:
            Post with author and category embedded, or None
        """
        row = await self.adapter.fetchrow(f"{POST_SELECT} WHERE p.id = $1", post_id)
        if not row:
            return None

        post = Post.from_row(row)
        if with_relations:
            post.comments = await CommentService(self.adapter).list_for_post(post_id)
        return post

    async def get_many(self, post_ids: builtins.list[str]) -> builtins.list[Post]:
        """Get several posts (author and category embedded) in one query."""
        if not post_ids:
            return []
        clause, params = self._in(post_ids)
        rows = await self.adapter.fetch(f"{POST_SELECT} WHERE p.id IN {clause}", *params)
        return [Post.from_row(row) for row in rows]

    async def list(
        self,
        page: int = 1,
        limit: int = 10,
        published: bool | None = None,
        author_id: str | None = None,
        category_id: str | None = None,
        category_slug: str | None = None,
    ) -> Page[Post]:
        """
        List posts, newest first, with optional filters.

        Args:
            page: 1-based page number
            limit: Page size
            published: Filter by published flag
            author_id: Filter by author
            category_id: Filter by category
            category_slug: Filter by category slug

        Returns:
            Page of Post objects with author and category embedded
        """
        conditions = []
        params = []

        if published is not None:
            params.append(published)
            conditions.append(f"p.published = ${len(params)}")

        if author_id:
            params.append(author_id)
            conditions.append(f"p.author_id = ${len(params)}")

        if category_id:
            params.append(category_id)
            conditions.append(f"p.category_id = ${len(params)}")

        if category_slug:
            params.append(category_slug)
            conditions.append(f"c.slug = ${len(params)}")

        where = f"WHERE {' AND '.join(conditions)}" if conditions else ""

        result: Page[Post] = Page(page=page, limit=limit)
        params.extend([limit, result.offset])
        rows = await self.adapter.fetch(
            f"""
            {POST_SELECT}
            {where}
            ORDER BY p.created_at DESC, p.id DESC
            LIMIT ${len(params) - 1} OFFSET ${len(params)}
            """,
            *params,
        )
        result.items = [Post.from_row(row) for row in rows]
        return result

    async def list_by_category(
        self,
        category_id: str,
        page: int = 1,
        limit: int = 10,
    ) -> Page[Post]:
        """Posts in one category, newest first."""
        return await self.list(page=page, limit=limit, category_id=category_id)

    async def list_for_authors(self, author_ids: builtins.list[str]) -> builtins.list[Post]:
        """All posts by any of the given users, newest first."""
        if not author_ids:
            return []
        clause, params = self._in(author_ids)
        rows = await self.adapter.fetch(
            f"""
            {POST_SELECT}
            WHERE p.author_id IN {clause}
            ORDER BY p.created_at DESC, p.id DESC
            """,
            *params,
        )
        return [Post.from_row(row) for row in rows]

    async def list_for_categories(self, category_ids: builtins.list[str]) -> builtins.list[Post]:
        """All posts in any of the given categories, newest first."""
        if not category_ids:
            return []
        clause, params = self._in(category_ids)
        rows = await self.adapter.fetch(
            f"""
            {POST_SELECT}
            WHERE p.category_id IN {clause}
            ORDER BY p.created_at DESC, p.id DESC
            """,
            *params,
        )
        return [Post.from_row(row) for row in rows]

    async def update(
        self,
        post_id: str,
        title: str | None = None,
        content: str | None = None,
        published: bool | None = None,
        category_id: str | None = None,
    ) -> Post | None:
        """
        Update a post; fields left as None are untouched.

        The author of a post cannot be changed.

        Returns:
            Updated Post or None if not found
        """
        changes = {}
        if title is not None:
            changes["title"] = title
        if content is not None:
            changes["content"] = content
        if published is not None:
            changes["published"] = published
        if category_id is not None:
            changes["category_id"] = category_id

        if not changes:
            return await self.get(post_id)

        if not await self._update_columns(post_id, changes):
            return None

        logger.info(f"Updated post {post_id}: {', '.join(changes)}")
        return await self.get(post_id)

    async def delete(self, post_id: str) -> bool:
        """Delete a post and, by cascade, its comments."""
        return await self._delete_row(post_id)
