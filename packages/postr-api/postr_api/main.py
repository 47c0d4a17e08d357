"""
Command line entry points: postr-server and postr-seed.
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

from postr.config import PostrConfig, load_validated_config
from postr.db import init_adapter
from postr.db.seed import seed
from postr.errors import ConfigError, DatabaseError
from postr_api.logging_config import configure_logging

logger = logging.getLogger(__name__)


def _load(config_path: Optional[str]) -> PostrConfig:
    """Load and validate config, exiting with every problem listed on failure."""
    try:
        return load_validated_config(Path(config_path) if config_path else None)
    except ConfigError as e:
        print("Invalid configuration:", file=sys.stderr)
        for problem in e.errors:
            print(f"  - {problem}", file=sys.stderr)
        sys.exit(1)


async def _migrate(config: PostrConfig) -> None:
    adapter = await init_adapter(config.database)
    await adapter.close()


async def _seed(config: PostrConfig) -> dict:
    adapter = await init_adapter(config.database)
    try:
        return await seed(adapter)
    finally:
        await adapter.close()


def main():
    """Main entry point for postr-server command."""
    import argparse

    parser = argparse.ArgumentParser(description="Postr API server")
    parser.add_argument("command", nargs="?", default="serve", help="Command to run (serve, migrate)")
    parser.add_argument("--config", help="Path to config.yaml (default ~/.postr/config.yaml)")
    args = parser.parse_args()

    config = _load(args.config)
    configure_logging(config.server.log_level)

    if args.command == "migrate":
        try:
            asyncio.run(_migrate(config))
        except DatabaseError as e:
            logger.error(f"Migration failed: {e}")
            sys.exit(1)
        print("Schema is up to date")
    elif args.command == "serve":
        import uvicorn

        from postr_api.app import create_app

        logger.info(f"Starting Postr API on {config.server.host}:{config.server.port}")
        uvicorn.run(
            create_app(config),
            host=config.server.host,
            port=config.server.port,
            log_level=config.server.log_level.lower(),
        )
    else:
        parser.error(f"Unknown command: {args.command}")


def seed_main():
    """Main entry point for postr-seed command."""
    import argparse

    parser = argparse.ArgumentParser(description="Replace the database contents with sample data")
    parser.add_argument("--config", help="Path to config.yaml (default ~/.postr/config.yaml)")
    args = parser.parse_args()

    config = _load(args.config)
    configure_logging(config.server.log_level)

    try:
        counts = asyncio.run(_seed(config))
    except DatabaseError as e:
        logger.error(f"Seeding failed: {e}")
        sys.exit(1)

    print(", ".join(f"{count} {table}" for table, count in counts.items()))


if __name__ == "__main__":
    main()
