"""
Category Service for Postr.
"""

import builtins
import logging

from postr.models.base import Page
from postr.models.category import Category
from postr.services.base import BaseService

logger = logging.getLogger(__name__)


class CategoryService(BaseService):
    """
    Service for managing categories.

    Slugs are unique; inserting or renaming to a taken slug raises the
    backend's integrity error.
    """

    table = "categories"

    async def create(self, name: str, slug: str) -> Category:
        """Create a new category."""
        category = Category(name=name, slug=slug)

        await self.adapter.execute(
            "INSERT INTO categories (id, name, slug) VALUES ($1, $2, $3)",
            category.id, category.name, category.slug,
        )

        logger.info(f"Created category: {category.id} - {category.slug}")
        return category

    async def get(self, category_id: str) -> Category | None:
        """Get a category by ID."""
        row = await self.adapter.fetchrow(
            "SELECT id, name, slug FROM categories WHERE id = $1",
            category_id,
        )
        return Category.from_row(row) if row else None

    async def get_by_slug(self, slug: str) -> Category | None:
        """Get a category by its slug."""
        row = await self.adapter.fetchrow(
            "SELECT id, name, slug FROM categories WHERE slug = $1",
            slug,
        )
        return Category.from_row(row) if row else None

    async def get_many(self, category_ids: builtins.list[str]) -> builtins.list[Category]:
        """Get several categories in one query."""
        if not category_ids:
            return []
        clause, params = self._in(category_ids)
        rows = await self.adapter.fetch(
            f"SELECT id, name, slug FROM categories WHERE id IN {clause}",
            *params,
        )
        return [Category.from_row(row) for row in rows]

    async def list(self, page: int = 1, limit: int = 10) -> Page[Category]:
        """List categories ordered by name."""
        result: Page[Category] = Page(page=page, limit=limit)
        rows = await self.adapter.fetch(
            """
            SELECT id, name, slug FROM categories
            ORDER BY name, id
            LIMIT $1 OFFSET $2
            """,
            limit, result.offset,
        )
        result.items = [Category.from_row(row) for row in rows]
        return result

    async def update(
        self,
        category_id: str,
        name: str | None = None,
        slug: str | None = None,
    ) -> Category | None:
        """
        Update a category; fields left as None are untouched.

        Returns:
            Updated Category or None if not found
        """
        changes = {}
        if name is not None:
            changes["name"] = name
        if slug is not None:
            changes["slug"] = slug

        if not changes:
            return await self.get(category_id)

        if not await self._update_columns(category_id, changes):
            return None

        logger.info(f"Updated category {category_id}: {', '.join(changes)}")
        return await self.get(category_id)

    async def delete(self, category_id: str) -> bool:
        """Delete a category and, by cascade, its posts."""
        return await self._delete_row(category_id)
