"""
Tests for adapter selection.
"""

import pytest


class TestBackendType:
    def test_parse_aliases(self):
        from postr.db import BackendType

        assert BackendType.parse("local") is BackendType.LOCAL
        assert BackendType.parse("SQLite") is BackendType.LOCAL
        assert BackendType.parse("cloud") is BackendType.CLOUD
        assert BackendType.parse("postgresql") is BackendType.CLOUD
        assert BackendType.parse(BackendType.CLOUD) is BackendType.CLOUD

    def test_parse_unknown(self):
        from postr.db import BackendType
        from postr.errors import ConfigError

        with pytest.raises(ConfigError):
            BackendType.parse("oracle")

    def test_supported_types(self):
        from postr.db import BackendType, get_supported_backend_types

        assert get_supported_backend_types() == [BackendType.LOCAL, BackendType.CLOUD]


class TestInference:
    @pytest.mark.parametrize("url,expected", [
        ("postgresql://u:p@host/db", "cloud"),
        ("postgres://u:p@host/db", "cloud"),
        ("file:./dev.db", "local"),
        ("sqlite:///data/app.db", "local"),
    ])
    def test_infer_backend_type(self, url, expected):
        from postr.db import infer_backend_type

        assert infer_backend_type(url).value == expected

    def test_infer_unknown(self):
        from postr.db import infer_backend_type

        assert infer_backend_type("mysql://host/db") is None
        assert infer_backend_type(None) is None

    def test_sqlite_path_from_url(self):
        from postr.db.factory import sqlite_path_from_url

        assert sqlite_path_from_url("file:./dev.db") == "./dev.db"
        assert sqlite_path_from_url("sqlite:///data/app.db") == "data/app.db"


class TestCreateAdapter:
    def test_local_default(self):
        from postr.config import DatabaseConfig
        from postr.db import create_adapter
        from postr.db.sqlite import SQLiteAdapter

        adapter = create_adapter(DatabaseConfig())

        assert isinstance(adapter, SQLiteAdapter)
        assert adapter.dialect == "sqlite"
        assert adapter.is_initialized is False

    def test_local_path_from_file_url(self):
        from postr.config import DatabaseConfig
        from postr.db import create_adapter

        adapter = create_adapter(DatabaseConfig(url="file:/tmp/other.db"))

        assert str(adapter.db_path) == "/tmp/other.db"

    def test_cloud_requires_url(self):
        from postr.config import DatabaseConfig
        from postr.db import create_adapter
        from postr.errors import ConfigError

        with pytest.raises(ConfigError):
            create_adapter(DatabaseConfig(type="cloud"))

    def test_unknown_type(self):
        from postr.config import DatabaseConfig
        from postr.db import create_adapter
        from postr.errors import ConfigError

        with pytest.raises(ConfigError):
            create_adapter(DatabaseConfig(type="mongo"))

    def test_uninferable_url(self):
        from postr.config import DatabaseConfig
        from postr.db import create_adapter
        from postr.errors import ConfigError

        with pytest.raises(ConfigError):
            create_adapter(DatabaseConfig(url="mysql://host/db"))

    def test_create_adapter_from_env(self, tmp_path):
        from postr.db import create_adapter_from_env
        from postr.db.sqlite import SQLiteAdapter

        adapter = create_adapter_from_env({"POSTR_SQLITE_PATH": str(tmp_path / "env.db")})

        assert isinstance(adapter, SQLiteAdapter)
        assert adapter.db_path == tmp_path / "env.db"

    async def test_init_adapter(self, tmp_path):
        from postr.config import DatabaseConfig
        from postr.db import init_adapter

        adapter = await init_adapter(DatabaseConfig(sqlite_path=str(tmp_path / "init.db")))
        try:
            assert adapter.is_initialized
            tables = await adapter.fetch(
                "SELECT name FROM sqlite_master WHERE type = 'table' ORDER BY name"
            )
            assert [t["name"] for t in tables] == ["categories", "comments", "posts", "users"]
        finally:
            await adapter.close()

    async def test_init_adapter_closes_when_schema_fails(self, tmp_path, monkeypatch):
        from postr.config import DatabaseConfig
        from postr.db import factory
        from postr.db.sqlite import SQLiteAdapter
        from postr.errors import DatabaseError

        adapter = SQLiteAdapter(str(tmp_path / "broken.db"))

        async def fail():
            raise DatabaseError("schema failed")

        monkeypatch.setattr(adapter, "ensure_schema", fail)
        monkeypatch.setattr(factory, "create_adapter", lambda db_config: adapter)

        with pytest.raises(DatabaseError, match="schema failed"):
            await factory.init_adapter(DatabaseConfig())

        assert not adapter.is_initialized
