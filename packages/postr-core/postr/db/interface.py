"""
Abstract database adapter interface.

One adapter per backend: a local SQLite file or a cloud PostgreSQL database.
Both expose the same lifecycle (initialize/health/close) and query surface.
"""

import asyncio
import logging
import re
from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import Any

from postr.db.schema import Schema
from postr.errors import AdapterNotInitializedError, ConfigError

logger = logging.getLogger(__name__)


class BackendType(str, Enum):
    """Where the database lives."""

    LOCAL = "local"
    CLOUD = "cloud"

    @classmethod
    def parse(cls, value: "str | BackendType") -> "BackendType":
        """
        Parse a backend type, accepting common aliases.

        Raises:
            ConfigError: If the value names no supported backend
        """
        if isinstance(value, BackendType):
            return value

        name = (value or "").strip().lower()
        if name in ("local", "sqlite", "file"):
            return cls.LOCAL
        if name in ("cloud", "postgres", "postgresql", "neon"):
            return cls.CLOUD
        raise ConfigError(f"Unknown database type: {value}. Use 'local' or 'cloud'.")


class DatabaseAdapter(ABC):
    """
    Abstract base class for database adapters.

    Implementations must support:
    - Lifecycle: initialize(), health(), close()
    - Basic query operations (execute, fetch, fetchrow, fetchval)
    - Schema creation for their dialect
    """

    #: "sqlite" or "postgresql"
    dialect: str
    #: BackendType.LOCAL or BackendType.CLOUD
    backend_type: BackendType

    def __init__(self):
        self._initialized = False
        self._init_lock = asyncio.Lock()

    @property
    def is_initialized(self) -> bool:
        """Check if the adapter has been initialized."""
        return self._initialized

    @property
    @abstractmethod
    def schema(self) -> Schema:
        """Table definitions for this adapter's dialect."""
        pass

    @property
    @abstractmethod
    def db(self) -> Any:
        """
        Live query handle (connection or pool).

        Raises:
            AdapterNotInitializedError: If initialize() has not succeeded
        """
        pass

    async def initialize(self) -> None:
        """
        Connect, enable referential integrity and verify liveness.

        Safe to call concurrently; only the first call connects.

        Raises:
            DatabaseError: If the connection cannot be established
        """
        async with self._init_lock:
            if self._initialized:
                return
            await self._connect()
            self._initialized = True
            logger.info(
                f"Database adapter initialized: {self.backend_type.value} ({self.dialect})"
            )

    @abstractmethod
    async def _connect(self) -> None:
        """Open the connection/pool and run one liveness query."""
        pass

    @abstractmethod
    async def health(self) -> bool:
        """
        Check that the connection still answers.

        Never raises; failures are logged and reported as False.
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close connection/pool and reset state."""
        pass

    def ensure_initialized(self) -> None:
        """Fail fast if the adapter is used before initialize()."""
        if not self._initialized:
            raise AdapterNotInitializedError(self.backend_type.value)

    @abstractmethod
    async def execute(self, query: str, *args) -> str:
        """
        Execute a query and return status.

        Args:
            query: SQL query with $1, $2 placeholders
            *args: Query parameters

        Returns:
            Status string (e.g., "INSERT 0 1", "DELETE 1")
        """
        pass

    @abstractmethod
    async def fetch(self, query: str, *args) -> list[dict]:
        """
        Fetch multiple rows as list of dicts.

        Args:
            query: SQL SELECT query
            *args: Query parameters

        Returns:
            List of row dicts
        """
        pass

    @abstractmethod
    async def fetchrow(self, query: str, *args) -> dict | None:
        """
        Fetch single row as dict.

        Returns:
            Row dict or None if no results
        """
        pass

    @abstractmethod
    async def fetchval(self, query: str, *args) -> Any:
        """
        Fetch single value.

        Returns:
            The value or None
        """
        pass

    @property
    @abstractmethod
    def placeholder_style(self) -> str:
        """
        Return the placeholder style for this adapter.

        Returns:
            "dollar" for PostgreSQL ($1, $2, ...)
            "qmark" for SQLite (?, ?, ...)
        """
        pass

    @abstractmethod
    def encode_timestamp(self, value: datetime) -> Any:
        """Convert an aware datetime into the value stored in created_at."""
        pass

    def format_query(self, query: str) -> str:
        """
        Convert query placeholders to the adapter's style.

        Input uses $1, $2 style (PostgreSQL).
        For SQLite, converts to ? style; each placeholder must appear once
        and in numeric order.
        """
        if self.placeholder_style == "dollar":
            return query
        return re.sub(r'\$\d+', '?', query)

    def in_clause(self, start: int, count: int) -> str:
        """
        Build an "IN (...)" placeholder list beginning at $start.

        PostgreSQL and SQLite both accept the expanded form, so batch
        lookups can share one query text across dialects.
        """
        placeholders = ", ".join(f"${i}" for i in range(start, start + count))
        return f"({placeholders})"

    async def ensure_schema(self) -> None:
        """Create tables and indexes that do not exist yet."""
        for statement in self.schema.statements():
            await self.execute(statement)
        logger.info(f"Ensured schema exists: {', '.join(self.schema.table_names)}")

    @staticmethod
    def affected_rows(status: str) -> int:
        """Extract the row count from a status string like "DELETE 1"."""
        try:
            return int(status.split()[-1])
        except (ValueError, IndexError):
            return 0

    def __repr__(self) -> str:
        state = "initialized" if self._initialized else "not initialized"
        return f"<{self.__class__.__name__} {self.backend_type.value}/{self.dialect} {state}>"
