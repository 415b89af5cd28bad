#!/usr/bin/env python3
"""
Seed the DuckDB record store from the remote dataset.

Seeding appends: running it twice stores every record twice.

Usage:
    python scripts/seed_database.py
    python scripts/seed_database.py --db-path /tmp/transactions.duckdb
    python scripts/seed_database.py --url https://example.com/records.json
"""
import asyncio
import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import config
from core.exceptions import OperationFailure
from core.observability import setup_logging, get_logger, correlation_context
from core.seed_client import SeedClient
from core.seed_service import SeedLoader
from core.store import TransactionStore

logger = get_logger(__name__)


async def main(db_path: str, url: str) -> int:
    """Run one seed pass."""
    store = TransactionStore(db_path)
    await store.connect()
    try:
        stats_before = await store.get_stats()
        logger.info(f"Before seeding: {stats_before['transactions']} transactions, "
                    f"date range: {stats_before['date_range']}")

        loader = SeedLoader(store, client_factory=lambda: SeedClient(url=url))
        with correlation_context():
            try:
                count = await loader.initialize_database()
            except OperationFailure as e:
                logger.error(f"Seeding failed: {e}", exc_info=True)
                return 1

        stats_after = await store.get_stats()
        logger.info(f"Inserted {count} records; now {stats_after['transactions']} transactions, "
                    f"{stats_after['categories']} categories")
    finally:
        await store.close()

    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed DuckDB from the remote transactions dataset")
    parser.add_argument(
        "--db-path",
        default=config.store.path,
        help=f"DuckDB file (default: {config.store.path})"
    )
    parser.add_argument(
        "--url",
        default=config.seed.url,
        help="Seed dataset URL"
    )
    args = parser.parse_args()

    setup_logging(level=config.logging.level, json_format=config.logging.json_format)
    sys.exit(asyncio.run(main(args.db_path, args.url)))
