"""
Postr Core Library

Content backend (users, categories, posts, comments) with support for
PostgreSQL and SQLite.
"""

__version__ = "0.1.0"

from postr.config import PostrConfig, load_config
from postr.db import DatabaseAdapter, create_adapter

__all__ = [
    "load_config",
    "PostrConfig",
    "create_adapter",
    "DatabaseAdapter",
]
