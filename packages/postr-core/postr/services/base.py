"""
Shared plumbing for the entity services.
"""

import logging
from typing import Any, Dict, Iterable, List

from postr.db.interface import DatabaseAdapter

logger = logging.getLogger(__name__)


class _Unset:
    """Marker for "argument not supplied" where None is a valid value."""

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


class BaseService:
    """
    Common CRUD helpers over a single table.

    Queries are written with $1, $2 placeholders and converted by the
    adapter for SQLite.
    """

    table: str = ""

    def __init__(self, adapter: DatabaseAdapter):
        """
        Initialize service.

        Args:
            adapter: An initialized DatabaseAdapter
        """
        self.adapter = adapter

    async def _update_columns(self, row_id: str, changes: Dict[str, Any]) -> bool:
        """
        Update only the given columns of one row.

        Returns:
            True if the row exists
        """
        columns = list(changes)
        params = [changes[col] for col in columns]
        params.append(row_id)

        set_clause = ", ".join(f"{col} = ${i + 1}" for i, col in enumerate(columns))
        status = await self.adapter.execute(
            f"UPDATE {self.table} SET {set_clause} WHERE id = ${len(params)}",
            *params,
        )
        return self.adapter.affected_rows(status) > 0

    async def _delete_row(self, row_id: str) -> bool:
        """Physically delete one row; dependent rows cascade."""
        status = await self.adapter.execute(
            f"DELETE FROM {self.table} WHERE id = $1",
            row_id,
        )
        deleted = self.adapter.affected_rows(status) > 0
        if deleted:
            logger.info(f"Deleted from {self.table}: {row_id}")
        return deleted

    async def _exists(self, row_id: str) -> bool:
        value = await self.adapter.fetchval(
            f"SELECT 1 FROM {self.table} WHERE id = $1",
            row_id,
        )
        return value is not None

    def _in(self, values: Iterable[Any], start: int = 1) -> tuple[str, List[Any]]:
        """Placeholder list and params for an IN (...) clause."""
        params = list(dict.fromkeys(values))
        return self.adapter.in_clause(start, len(params)), params
