"""
SQLite database adapter using aiosqlite.

The local backend: a single database file (default ./dev.db) for
development and testing. Foreign keys are off by default in SQLite and
are switched on for every connection.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, List, Any

import aiosqlite

from postr.db.interface import BackendType, DatabaseAdapter
from postr.db.schema import SQLITE_SCHEMA, Schema
from postr.errors import AdapterNotInitializedError, DatabaseError

logger = logging.getLogger(__name__)

MEMORY_PATH = ":memory:"


class SQLiteAdapter(DatabaseAdapter):
    """
    SQLite adapter for the local backend.

    Uses aiosqlite for async database operations.
    Automatically creates the database file and parent directories.
    """

    dialect = "sqlite"
    backend_type = BackendType.LOCAL

    def __init__(self, db_path: str = "./dev.db"):
        """
        Initialize SQLite adapter.

        Args:
            db_path: Path to SQLite database file, or ":memory:".
                    Supports ~ expansion for home directory.
        """
        super().__init__()
        if db_path == MEMORY_PATH:
            self.db_path = MEMORY_PATH
        else:
            self.db_path = Path(db_path).expanduser()
        self._conn: Optional[aiosqlite.Connection] = None

    @property
    def schema(self) -> Schema:
        return SQLITE_SCHEMA

    @property
    def db(self) -> aiosqlite.Connection:
        if self._conn is None:
            raise AdapterNotInitializedError(self.backend_type.value)
        return self._conn

    async def _connect(self) -> None:
        """Open the database file and create it if needed."""
        try:
            if self.db_path != MEMORY_PATH:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)

            # Connect (creates file if doesn't exist)
            self._conn = await aiosqlite.connect(str(self.db_path))

            # Referential integrity is opt-in per connection in SQLite
            await self._conn.execute("PRAGMA foreign_keys = ON")

            if self.db_path != MEMORY_PATH:
                await self._conn.execute("PRAGMA journal_mode = WAL")

            # Row factory to return dicts
            self._conn.row_factory = aiosqlite.Row

            await self._conn.execute("SELECT 1")
        except Exception as e:
            await self._discard()
            raise DatabaseError(f"Failed to initialize SQLite adapter: {e}") from e

        logger.info(f"SQLite database connected: {self.db_path}")

    async def _discard(self) -> None:
        if self._conn is not None:
            try:
                await self._conn.close()
            except Exception as e:
                logger.warning(f"Failed to close SQLite connection: {e}")
            self._conn = None

    async def health(self) -> bool:
        """Run a trivial query against the open connection."""
        try:
            self.ensure_initialized()
            cursor = await self.db.execute("SELECT 1 AS health")
            await cursor.fetchone()
            return True
        except Exception as e:
            logger.error(f"SQLite health check failed: {e}")
            return False

    async def close(self) -> None:
        """Close database connection."""
        await self._discard()
        if self._initialized:
            self._initialized = False
            logger.info("SQLite connection closed")

    async def _get_conn(self) -> aiosqlite.Connection:
        """Get the open connection."""
        self.ensure_initialized()
        return self.db

    async def execute(self, query: str, *args) -> str:
        """Execute query and return status."""
        conn = await self._get_conn()
        query = self.format_query(query)

        cursor = await conn.execute(query, args)
        await conn.commit()

        # Return a status string similar to PostgreSQL
        verb = query.strip().split(None, 1)[0].upper() if query.strip() else ""
        if verb == "INSERT":
            return f"INSERT 0 {cursor.rowcount}"
        elif verb in ("UPDATE", "DELETE"):
            return f"{verb} {cursor.rowcount}"
        return "OK"

    async def fetch(self, query: str, *args) -> List[dict]:
        """Fetch rows as list of dicts."""
        conn = await self._get_conn()
        query = self.format_query(query)

        cursor = await conn.execute(query, args)
        rows = await cursor.fetchall()

        # Convert Row objects to dicts
        return [dict(row) for row in rows]

    async def fetchrow(self, query: str, *args) -> Optional[dict]:
        """Fetch single row as dict."""
        conn = await self._get_conn()
        query = self.format_query(query)

        cursor = await conn.execute(query, args)
        row = await cursor.fetchone()

        return dict(row) if row else None

    async def fetchval(self, query: str, *args) -> Any:
        """Fetch single value."""
        conn = await self._get_conn()
        query = self.format_query(query)

        cursor = await conn.execute(query, args)
        row = await cursor.fetchone()

        if row:
            # Return first column value
            return row[0]
        return None

    @property
    def placeholder_style(self) -> str:
        """SQLite uses ? style placeholders."""
        return "qmark"

    def encode_timestamp(self, value: datetime) -> int:
        """SQLite stores created_at as integer epoch seconds."""
        return int(value.timestamp())
