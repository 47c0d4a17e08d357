"""
Comment Service for Postr.
"""

import builtins
import logging

from postr.models.base import Page
from postr.models.comment import Comment
from postr.services.base import BaseService

logger = logging.getLogger(__name__)

# Comment columns plus the joined author
COMMENT_SELECT = """
    SELECT
        cm.id, cm.content, cm.post_id, cm.author_id, cm.created_at,
        u.id AS author__id, u.name AS author__name,
        u.avatar_url AS author__avatar_url, u.created_at AS author__created_at
    FROM comments cm
    JOIN users u ON u.id = cm.author_id
"""

# Comment columns plus the joined post, for "comments by user" views
COMMENT_WITH_POST_SELECT = """
    SELECT
        cm.id, cm.content, cm.post_id, cm.author_id, cm.created_at,
        p.id AS post__id, p.title AS post__title, p.content AS post__content,
        p.published AS post__published, p.author_id AS post__author_id,
        p.category_id AS post__category_id, p.created_at AS post__created_at
    FROM comments cm
    JOIN posts p ON p.id = cm.post_id
"""


class CommentService(BaseService):
    """Service for managing comments on posts."""

    table = "comments"

    async def create(self, content: str, post_id: str, author_id: str) -> Comment:
        """
        Create a new comment.

        Args:
            content: Comment text
            post_id: Existing post id
            author_id: Existing user id

        Returns:
            Created Comment object
        """
        comment = Comment(content=content, post_id=post_id, author_id=author_id)

        await self.adapter.execute(
            """
            INSERT INTO comments (id, content, post_id, author_id, created_at)
            VALUES ($1, $2, $3, $4, $5)
            """,
            comment.id, comment.content, comment.post_id, comment.author_id,
            self.adapter.encode_timestamp(comment.created_at),
        )

        logger.info(f"Created comment: {comment.id} on post {comment.post_id}")
        return comment

    async def get(self, comment_id: str) -> Comment | None:
        """Get a comment (author embedded) by ID."""
        row = await self.adapter.fetchrow(f"{COMMENT_SELECT} WHERE cm.id = $1", comment_id)
        return Comment.from_row(row) if row else None

    async def get_many(self, comment_ids: builtins.list[str]) -> builtins.list[Comment]:
        """Get several comments in one query."""
        if not comment_ids:
            return []
        clause, params = self._in(comment_ids)
        rows = await self.adapter.fetch(f"{COMMENT_SELECT} WHERE cm.id IN {clause}", *params)
        return [Comment.from_row(row) for row in rows]

    async def list(self, page: int = 1, limit: int = 10) -> Page[Comment]:
        """List comments, newest first, with authors embedded."""
        result: Page[Comment] = Page(page=page, limit=limit)
        rows = await self.adapter.fetch(
            f"""
            {COMMENT_SELECT}
            ORDER BY cm.created_at DESC, cm.id DESC
            LIMIT $1 OFFSET $2
            """,
            limit, result.offset,
        )
        result.items = [Comment.from_row(row) for row in rows]
        return result

    async def list_for_post(self, post_id: str) -> builtins.list[Comment]:
        """Comments on a post in conversation order (oldest first)."""
        return await self.list_for_posts([post_id])

    async def list_for_posts(self, post_ids: builtins.list[str]) -> builtins.list[Comment]:
        """Comments on any of the given posts, oldest first, authors embedded."""
        if not post_ids:
            return []
        clause, params = self._in(post_ids)
        rows = await self.adapter.fetch(
            f"""
            {COMMENT_SELECT}
            WHERE cm.post_id IN {clause}
            ORDER BY cm.created_at, cm.id
            """,
            *params,
        )
        return [Comment.from_row(row) for row in rows]

    async def list_for_authors(self, author_ids: builtins.list[str]) -> builtins.list[Comment]:
        """Comments written by any of the given users, newest first, posts embedded."""
        if not author_ids:
            return []
        clause, params = self._in(author_ids)
        rows = await self.adapter.fetch(
            f"""
            {COMMENT_WITH_POST_SELECT}
            WHERE cm.author_id IN {clause}
            ORDER BY cm.created_at DESC, cm.id DESC
            """,
            *params,
        )
        return [Comment.from_row(row) for row in rows]

    async def update(self, comment_id: str, content: str | None = None) -> Comment | None:
        """
        Update a comment's content.

        Returns:
            Updated Comment or None if not found
        """
        if content is None:
            return await self.get(comment_id)

        if not await self._update_columns(comment_id, {"content": content}):
            return None

        logger.info(f"Updated comment {comment_id}")
        return await self.get(comment_id)

    async def delete(self, comment_id: str) -> bool:
        """Delete a comment."""
        return await self._delete_row(comment_id)
