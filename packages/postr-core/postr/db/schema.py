"""
Table definitions for each supported SQL dialect.

Both dialects declare the same four tables with the same column names;
only the column types differ.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List


@dataclass(frozen=True)
class Schema:
    """
    DDL for one dialect.

    Attributes:
        dialect: "sqlite" or "postgresql"
        tables: Table name -> CREATE TABLE statement, in dependency order
        indexes: CREATE INDEX statements run after the tables
    """

    dialect: str
    tables: Dict[str, str]
    indexes: List[str] = field(default_factory=list)

    @property
    def table_names(self) -> List[str]:
        return list(self.tables)

    def statements(self) -> Iterator[str]:
        """Yield every DDL statement needed to create the schema."""
        yield from self.tables.values()
        yield from self.indexes


_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_posts_author_id ON posts (author_id)",
    "CREATE INDEX IF NOT EXISTS idx_posts_category_id ON posts (category_id)",
    "CREATE INDEX IF NOT EXISTS idx_comments_post_id ON comments (post_id)",
    "CREATE INDEX IF NOT EXISTS idx_comments_author_id ON comments (author_id)",
]


SQLITE_SCHEMA = Schema(
    dialect="sqlite",
    tables={
        "users": """
            CREATE TABLE IF NOT EXISTS users (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                avatar_url TEXT,
                created_at INTEGER NOT NULL
            )
        """,
        "categories": """
            CREATE TABLE IF NOT EXISTS categories (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                slug TEXT NOT NULL UNIQUE
            )
        """,
        "posts": """
            CREATE TABLE IF NOT EXISTS posts (
                id TEXT PRIMARY KEY,
                title TEXT NOT NULL,
                content TEXT NOT NULL,
                published INTEGER NOT NULL DEFAULT 0,
                author_id TEXT NOT NULL REFERENCES users (id) ON DELETE CASCADE,
                category_id TEXT NOT NULL REFERENCES categories (id) ON DELETE CASCADE,
                created_at INTEGER NOT NULL
            )
        """,
        "comments": """
            CREATE TABLE IF NOT EXISTS comments (
                id TEXT PRIMARY KEY,
                content TEXT NOT NULL,
                post_id TEXT NOT NULL REFERENCES posts (id) ON DELETE CASCADE,
                author_id TEXT NOT NULL REFERENCES users (id) ON DELETE CASCADE,
                created_at INTEGER NOT NULL
            )
        """,
    },
    indexes=_INDEXES,
)


POSTGRES_SCHEMA = Schema(
    dialect="postgresql",
    tables={
        "users": """
            CREATE TABLE IF NOT EXISTS users (
                id UUID PRIMARY KEY,
                name TEXT NOT NULL,
                avatar_url TEXT,
                created_at TIMESTAMPTZ NOT NULL DEFAULT now()
            )
        """,
        "categories": """
            CREATE TABLE IF NOT EXISTS categories (
                id UUID PRIMARY KEY,
                name TEXT NOT NULL,
                slug TEXT NOT NULL UNIQUE
            )
        """,
        "posts": """
            CREATE TABLE IF NOT EXISTS posts (
                id UUID PRIMARY KEY,
                title TEXT NOT NULL,
                content TEXT NOT NULL,
                published BOOLEAN NOT NULL DEFAULT false,
                author_id UUID NOT NULL REFERENCES users (id) ON DELETE CASCADE,
                category_id UUID NOT NULL REFERENCES categories (id) ON DELETE CASCADE,
                created_at TIMESTAMPTZ NOT NULL DEFAULT now()
            )
        """,
        "comments": """
            CREATE TABLE IF NOT EXISTS comments (
                id UUID PRIMARY KEY,
                content TEXT NOT NULL,
                post_id UUID NOT NULL REFERENCES posts (id) ON DELETE CASCADE,
                author_id UUID NOT NULL REFERENCES users (id) ON DELETE CASCADE,
                created_at TIMESTAMPTZ NOT NULL DEFAULT now()
            )
        """,
    },
    indexes=_INDEXES,
)


def get_schema(dialect: str) -> Schema:
    """Return the schema for a dialect name."""
    if dialect == "sqlite":
        return SQLITE_SCHEMA
    if dialect == "postgresql":
        return POSTGRES_SCHEMA
    raise ValueError(f"Unknown dialect: {dialect}. Use 'sqlite' or 'postgresql'.")
