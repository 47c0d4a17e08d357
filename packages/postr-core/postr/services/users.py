"""
User Service for Postr.

CRUD operations for users with support for both PostgreSQL and SQLite.
"""

import builtins
import logging

from postr.models.base import Page
from postr.models.user import User
from postr.services.base import UNSET, BaseService

logger = logging.getLogger(__name__)

USER_COLUMNS = "id, name, avatar_url, created_at"


class UserService(BaseService):
    """
    Service for managing users.

    Deleting a user cascades to their posts and comments.
    """

    table = "users"

    async def create(self, name: str, avatar_url: str | None = None) -> User:
        """
        Create a new user.

        Args:
            name: Display name
            avatar_url: Optional avatar URL

        Returns:
            Created User object
        """
        user = User(name=name, avatar_url=avatar_url)

        await self.adapter.execute(
            """
            INSERT INTO users (id, name, avatar_url, created_at)
            VALUES ($1, $2, $3, $4)
            """,
            user.id, user.name, user.avatar_url,
            self.adapter.encode_timestamp(user.created_at),
        )

        logger.info(f"Created user: {user.id} - {user.name}")
        return user

    async def get(self, user_id: str) -> User | None:
        """Get a user by ID."""
        row = await self.adapter.fetchrow(
            f"SELECT {USER_COLUMNS} FROM users WHERE id = $1",
            user_id,
        )
        if row:
            return User.from_row(row)
        return None

    async def get_many(self, user_ids: builtins.list[str]) -> builtins.list[User]:
        """Get several users in one query (order not guaranteed)."""
        if not user_ids:
            return []
        clause, params = self._in(user_ids)
        rows = await self.adapter.fetch(
            f"SELECT {USER_COLUMNS} FROM users WHERE id IN {clause}",
            *params,
        )
        return [User.from_row(row) for row in rows]

    async def list(self, page: int = 1, limit: int = 10) -> Page[User]:
        """
        List users, oldest first.

        Args:
            page: 1-based page number
            limit: Page size

        Returns:
            Page of User objects
        """
        result: Page[User] = Page(page=page, limit=limit)
        rows = await self.adapter.fetch(
            f"""
            SELECT {USER_COLUMNS} FROM users
            ORDER BY created_at, id
            LIMIT $1 OFFSET $2
            """,
            limit, result.offset,
        )
        result.items = [User.from_row(row) for row in rows]
        return result

    async def update(
        self,
        user_id: str,
        name: str | None = None,
        avatar_url: str | None = UNSET,
    ) -> User | None:
        """
        Update a user.

        Only supplied fields change. Passing avatar_url=None clears the avatar.

        Returns:
            Updated User or None if not found
        """
        changes = {}
        if name is not None:
            changes["name"] = name
        if avatar_url is not UNSET:
            changes["avatar_url"] = avatar_url

        if not changes:
            return await self.get(user_id)

        if not await self._update_columns(user_id, changes):
            return None

        logger.info(f"Updated user {user_id}: {', '.join(changes)}")
        return await self.get(user_id)

    async def delete(self, user_id: str) -> bool:
        """Delete a user and, by cascade, their posts and comments."""
        return await self._delete_row(user_id)
