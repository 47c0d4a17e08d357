"""
Database abstraction layer supporting PostgreSQL (cloud) and SQLite (local).
"""

from postr.db.factory import (
    create_adapter,
    create_adapter_from_env,
    get_supported_backend_types,
    infer_backend_type,
    init_adapter,
)
from postr.db.interface import BackendType, DatabaseAdapter
from postr.db.schema import Schema, get_schema

__all__ = [
    "BackendType",
    "DatabaseAdapter",
    "Schema",
    "create_adapter",
    "create_adapter_from_env",
    "get_schema",
    "get_supported_backend_types",
    "infer_backend_type",
    "init_adapter",
]
