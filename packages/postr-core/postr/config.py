"""
Postr Configuration

Loads settings from ~/.postr/config.yaml with environment variable overrides.
Supports both cloud (PostgreSQL) and local (SQLite) database configurations.
"""

from __future__ import annotations
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Optional, List, Mapping
import os
import logging

import yaml

from postr.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".postr"
CONFIG_FILE = CONFIG_DIR / "config.yaml"

DEFAULT_SQLITE_PATH = "./dev.db"
ENVIRONMENTS = ("development", "production", "test")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://localhost:4173",
]


@dataclass
class DatabaseConfig:
    """Database configuration settings."""

    type: Optional[str] = None  # "local" or "cloud"; inferred from url when unset
    sqlite_path: str = DEFAULT_SQLITE_PATH
    url: Optional[str] = None


@dataclass
class ServerConfig:
    """HTTP server settings."""

    host: str = "0.0.0.0"
    port: int = 3001
    log_level: str = "INFO"
    environment: str = "development"
    cors_origins: List[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))


@dataclass
class PostrConfig:
    """
    Complete Postr configuration.

    Loaded from ~/.postr/config.yaml with environment variable overrides.
    """

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    server: ServerConfig = field(default_factory=ServerConfig)

    @property
    def is_development(self) -> bool:
        return self.server.environment == "development"

    @property
    def is_production(self) -> bool:
        return self.server.environment == "production"

    def to_dict(self) -> dict:
        """Convert to dictionary for display (masks secrets)."""
        result = asdict(self)

        url = result["database"].get("url")
        if url and not url.startswith("file:"):
            result["database"]["url"] = url[:30] + "..." if len(url) > 30 else "***"

        return result


def _parse_database_config(data: dict) -> DatabaseConfig:
    """Parse database configuration from YAML data."""
    db_data = data.get("database", {}) or {}

    sqlite_config = db_data.get("sqlite", {}) or {}
    postgres_config = db_data.get("postgres", {}) or {}

    url = postgres_config.get("url")

    # Check for URL from environment variable reference
    url_env = postgres_config.get("url_env")
    if url_env and not url:
        url = os.environ.get(url_env)

    return DatabaseConfig(
        type=db_data.get("type"),
        sqlite_path=sqlite_config.get("path", DEFAULT_SQLITE_PATH),
        url=url,
    )


def _parse_server_config(data: dict) -> ServerConfig:
    """Parse server configuration from YAML data."""
    server_data = data.get("server", {}) or {}
    defaults = ServerConfig()

    return ServerConfig(
        host=server_data.get("host", defaults.host),
        port=server_data.get("port", defaults.port),
        log_level=str(server_data.get("log_level", defaults.log_level)).upper(),
        environment=server_data.get("environment", defaults.environment),
        cors_origins=server_data.get("cors_origins", defaults.cors_origins),
    )


def _apply_env_overrides(config: PostrConfig, environ: Mapping[str, str]) -> None:
    """Apply environment variable overrides in place."""
    if environ.get("POSTR_DATABASE_TYPE"):
        config.database.type = environ["POSTR_DATABASE_TYPE"]

    if environ.get("DATABASE_URL"):
        config.database.url = environ["DATABASE_URL"]

    if environ.get("POSTR_SQLITE_PATH"):
        config.database.sqlite_path = environ["POSTR_SQLITE_PATH"]

    port = environ.get("POSTR_PORT") or environ.get("PORT")
    if port:
        try:
            config.server.port = int(port)
        except ValueError:
            # Left for validate_config() to report
            config.server.port = port  # type: ignore[assignment]

    if environ.get("POSTR_HOST"):
        config.server.host = environ["POSTR_HOST"]

    if environ.get("LOG_LEVEL"):
        config.server.log_level = environ["LOG_LEVEL"].upper()

    if environ.get("POSTR_ENV"):
        config.server.environment = environ["POSTR_ENV"]

    if environ.get("POSTR_CORS_ORIGINS"):
        config.server.cors_origins = [
            origin.strip()
            for origin in environ["POSTR_CORS_ORIGINS"].split(",")
            if origin.strip()
        ]


def load_config(
    config_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> PostrConfig:
    """
    Load configuration from file with environment variable overrides.

    Args:
        config_path: Optional path to config file. Defaults to ~/.postr/config.yaml
        environ: Environment mapping. Defaults to os.environ

    Returns:
        PostrConfig instance (not yet validated)
    """
    config_file = config_path or CONFIG_FILE
    config = PostrConfig()

    # Load from YAML if available
    if config_file.exists():
        try:
            with open(config_file, 'r') as f:
                data = yaml.safe_load(f) or {}

            config.database = _parse_database_config(data)
            config.server = _parse_server_config(data)

        except yaml.YAMLError as e:
            logger.warning(f"Could not parse config file at {config_file}: {e}")

    _apply_env_overrides(config, os.environ if environ is None else environ)

    return config


def validate_config(config: PostrConfig) -> List[str]:
    """
    Check a configuration and report every violated constraint.

    Returns:
        List of human-readable problems; empty when the config is valid
    """
    from postr.db.factory import BackendType, infer_backend_type

    errors: List[str] = []
    db = config.database

    backend = None
    if db.type:
        try:
            backend = BackendType.parse(db.type)
        except ConfigError:
            errors.append(
                f"database.type: unknown database type '{db.type}' "
                "(use 'local' or 'cloud')"
            )
    elif db.url:
        backend = infer_backend_type(db.url)
        if backend is None:
            errors.append(
                "DATABASE_URL: must start with postgresql://, postgres:// or file:"
            )
    else:
        backend = BackendType.LOCAL

    if backend is BackendType.CLOUD:
        if not db.url:
            errors.append("DATABASE_URL: connection string is required for the cloud database")
        elif infer_backend_type(db.url) is not BackendType.CLOUD:
            errors.append("DATABASE_URL: cloud database requires a postgresql:// URL")

    if backend is BackendType.LOCAL and not db.sqlite_path:
        errors.append("database.sqlite.path: must not be empty")

    port = config.server.port
    if not isinstance(port, int) or isinstance(port, bool):
        errors.append(f"PORT: must be an integer, got '{port}'")
    elif not 0 < port < 65536:
        errors.append(f"PORT: must be between 1 and 65535, got {port}")

    if config.server.environment not in ENVIRONMENTS:
        errors.append(
            f"POSTR_ENV: must be one of {', '.join(ENVIRONMENTS)}, "
            f"got '{config.server.environment}'"
        )

    if config.server.log_level not in LOG_LEVELS:
        errors.append(
            f"LOG_LEVEL: must be one of {', '.join(LOG_LEVELS)}, "
            f"got '{config.server.log_level}'"
        )

    return errors


def load_validated_config(
    config_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> PostrConfig:
    """
    Load and validate configuration.

    Raises:
        ConfigError: Listing every violated constraint
    """
    config = load_config(config_path, environ)
    errors = validate_config(config)
    if errors:
        raise ConfigError(errors)
    return config


def save_config(config: PostrConfig, config_path: Optional[Path] = None) -> None:
    """
    Save configuration to file.

    Args:
        config: PostrConfig instance to save
        config_path: Optional path to config file. Defaults to ~/.postr/config.yaml
    """
    config_file = config_path or CONFIG_FILE

    # Ensure config directory exists
    config_file.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "database": {},
        "server": {
            "host": config.server.host,
            "port": config.server.port,
            "log_level": config.server.log_level,
            "environment": config.server.environment,
            "cors_origins": config.server.cors_origins,
        },
    }

    if config.database.type:
        data["database"]["type"] = config.database.type
    data["database"]["sqlite"] = {"path": config.database.sqlite_path}
    if config.database.url:
        data["database"]["postgres"] = {"url": config.database.url}

    with open(config_file, 'w') as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    # Secure permissions (readable only by owner)
    config_file.chmod(0o600)

    logger.info(f"Configuration saved to {config_file}")
