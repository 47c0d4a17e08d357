"""
Sample data for local development.

Clears every table and inserts a small set of users, categories, posts
and comments through the services.
"""

import logging

from postr.db.interface import DatabaseAdapter
from postr.services import CategoryService, CommentService, PostService, UserService

logger = logging.getLogger(__name__)

SEED_USERS = [
    {"name": "Alice Johnson", "avatar_url": "https://api.dicebear.com/7.x/avataaars/svg?seed=alice"},
    {"name": "Bob Smith", "avatar_url": "https://api.dicebear.com/7.x/avataaars/svg?seed=bob"},
    {"name": "Charlie Davis", "avatar_url": None},
]

SEED_CATEGORIES = [
    {"name": "Development", "slug": "dev"},
    {"name": "Design", "slug": "design"},
    {"name": "Life", "slug": "life"},
]

# (title, content, published, author index, category index)
SEED_POSTS = [
    (
        "Getting started with async Python",
        "A walk through asyncio, event loops and why awaiting I/O keeps servers responsive.",
        True, 0, 0,
    ),
    (
        "Designing calm interfaces",
        "Whitespace, hierarchy and restraint: notes from a year of redesigns.",
        True, 1, 1,
    ),
    (
        "Working from a cabin",
        "What a month of remote work in the mountains taught me about focus.",
        False, 2, 2,
    ),
    (
        "SQLite in production?",
        "When a single-file database is the right call, and when it is not.",
        True, 0, 0,
    ),
]

# (content, post index, author index)
SEED_COMMENTS = [
    ("Great introduction, the event loop diagram helped a lot.", 0, 1),
    ("Would love a follow-up on task groups.", 0, 2),
    ("Less really is more.", 1, 0),
    ("We run SQLite for our internal tools and it has been flawless.", 3, 1),
]


async def clear(adapter: DatabaseAdapter) -> None:
    """Delete all rows, children first."""
    for table in reversed(adapter.schema.table_names):
        await adapter.execute(f"DELETE FROM {table}")
    logger.info("Cleared existing data")


async def seed(adapter: DatabaseAdapter) -> dict:
    """
    Replace the database contents with sample data.

    Args:
        adapter: Initialized adapter with the schema in place

    Returns:
        Number of rows inserted per table
    """
    logger.info(f"Seeding {adapter.backend_type.value} database ({adapter.dialect})")
    await clear(adapter)

    user_service = UserService(adapter)
    category_service = CategoryService(adapter)
    post_service = PostService(adapter)
    comment_service = CommentService(adapter)

    users = [await user_service.create(**data) for data in SEED_USERS]
    categories = [await category_service.create(**data) for data in SEED_CATEGORIES]

    posts = []
    for title, content, published, author_idx, category_idx in SEED_POSTS:
        posts.append(
            await post_service.create(
                title=title,
                content=content,
                published=published,
                author_id=users[author_idx].id,
                category_id=categories[category_idx].id,
            )
        )

    comments = []
    for content, post_idx, author_idx in SEED_COMMENTS:
        comments.append(
            await comment_service.create(
                content=content,
                post_id=posts[post_idx].id,
                author_id=users[author_idx].id,
            )
        )

    counts = {
        "users": len(users),
        "categories": len(categories),
        "posts": len(posts),
        "comments": len(comments),
    }
    logger.info(f"Seed complete: {counts}")
    return counts
