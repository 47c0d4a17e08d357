"""
Database adapter factory.

Creates the appropriate adapter based on configuration. The factory keeps
no global instance: callers construct one adapter at startup and pass it
to whatever needs it.
"""

import logging
import os
from typing import Mapping, Optional

from postr.config import DEFAULT_SQLITE_PATH, DatabaseConfig
from postr.db.interface import BackendType, DatabaseAdapter
from postr.errors import ConfigError

logger = logging.getLogger(__name__)

CLOUD_URL_PREFIXES = ("postgresql://", "postgres://")
LOCAL_URL_PREFIXES = ("file:", "sqlite:")


def get_supported_backend_types() -> list[BackendType]:
    """Get available backend types."""
    return [BackendType.LOCAL, BackendType.CLOUD]


def infer_backend_type(url: Optional[str]) -> Optional[BackendType]:
    """
    Guess the backend from the shape of a connection string.

    Returns:
        BackendType, or None when the prefix is not recognised
    """
    if not url:
        return None
    if url.startswith(CLOUD_URL_PREFIXES):
        return BackendType.CLOUD
    if url.startswith(LOCAL_URL_PREFIXES):
        return BackendType.LOCAL
    return None


def sqlite_path_from_url(url: str) -> str:
    """
    Extract a file path from a local database URL.

    "file:./dev.db" -> "./dev.db", "sqlite:///data/app.db" -> "data/app.db"
    """
    if url.startswith("sqlite:///"):
        return url[len("sqlite:///"):]
    if url.startswith("sqlite:"):
        return url[len("sqlite:"):]
    if url.startswith("file://"):
        return url[len("file://"):]
    if url.startswith("file:"):
        return url[len("file:"):]
    return url


def resolve_backend_type(db_config: DatabaseConfig) -> BackendType:
    """
    Decide which backend a DatabaseConfig selects.

    An explicit type wins; otherwise the type is inferred from the URL;
    with neither, the local backend is used.
    """
    if db_config.type:
        return BackendType.parse(db_config.type)

    inferred = infer_backend_type(db_config.url)
    if inferred is not None:
        return inferred

    if db_config.url:
        raise ConfigError(
            f"Cannot infer database type from URL '{db_config.url[:20]}...'. "
            "Set POSTR_DATABASE_TYPE to 'local' or 'cloud'."
        )
    return BackendType.LOCAL


def create_adapter(db_config: DatabaseConfig) -> DatabaseAdapter:
    """
    Create a database adapter for the configured backend.

    Args:
        db_config: Database section of the configuration

    Returns:
        DatabaseAdapter instance (PostgresAdapter or SQLiteAdapter), not yet initialized

    Raises:
        ConfigError: If database configuration is invalid
    """
    backend = resolve_backend_type(db_config)

    if backend is BackendType.CLOUD:
        from postr.db.postgres import PostgresAdapter

        url = db_config.url
        if not url:
            raise ConfigError(
                "Connection string is required for the cloud database. "
                "Set database.postgres.url in config or DATABASE_URL env var."
            )

        logger.info("Using PostgreSQL adapter")
        return PostgresAdapter(url)

    if backend is BackendType.LOCAL:
        from postr.db.sqlite import SQLiteAdapter

        path = db_config.sqlite_path or DEFAULT_SQLITE_PATH
        # A file: URL overrides the configured path
        if db_config.url and infer_backend_type(db_config.url) is BackendType.LOCAL:
            path = sqlite_path_from_url(db_config.url)

        logger.info(f"Using SQLite adapter: {path}")
        return SQLiteAdapter(path)

    raise ConfigError(f"Unknown database type: {backend}")


def create_adapter_from_env(environ: Optional[Mapping[str, str]] = None) -> DatabaseAdapter:
    """
    Create an adapter straight from environment variables.

    Reads POSTR_DATABASE_TYPE, DATABASE_URL and POSTR_SQLITE_PATH; the type
    is inferred from DATABASE_URL when not given explicitly.
    """
    env = os.environ if environ is None else environ

    return create_adapter(
        DatabaseConfig(
            type=env.get("POSTR_DATABASE_TYPE") or None,
            sqlite_path=env.get("POSTR_SQLITE_PATH") or DEFAULT_SQLITE_PATH,
            url=env.get("DATABASE_URL") or None,
        )
    )


async def init_adapter(db_config: DatabaseConfig) -> DatabaseAdapter:
    """
    Create, connect and prepare an adapter.

    Convenience function for startup: create_adapter(), initialize(),
    ensure_schema().

    Returns:
        Connected DatabaseAdapter instance
    """
    adapter = create_adapter(db_config)
    await adapter.initialize()
    try:
        await adapter.ensure_schema()
    except Exception:
        await adapter.close()
        raise

    logger.info(
        f"DATABASE: {adapter.backend_type.value.upper()} ({adapter.dialect})"
    )
    return adapter
