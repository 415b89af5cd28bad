"""
DuckDB record store for product-sale transactions.

Provides persistent storage for SaleRecords seeded from the remote dataset.
Domain-specific query methods live in repository mixins:
- TransactionsMixin: listing, search, monthly aggregates, category counts

The store is created once by the application (see ``web.main``) and handed
to the services that need it; there is no module-level instance.
"""
import asyncio
from concurrent.futures import ThreadPoolExecutor
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import duckdb
import pandas as pd

from core.config import DUCKDB_PATH
from core.exceptions import StoreError
from core.models import RECORD_COLUMNS, SaleRecord
from core.observability import get_logger
from core.repositories import TransactionsMixin

logger = get_logger(__name__)

MEMORY_PATH = ":memory:"


class TransactionStore(TransactionsMixin):
    """
    Async-compatible DuckDB store for sale records.

    Features:
    - Persistent storage (survives restarts), or in-memory for tests
    - Stable insertion order through a surrogate ``row_id``
    - Thread offloading to avoid blocking the asyncio event loop
    """

    def __init__(self, db_path: str = DUCKDB_PATH):
        self.db_path = str(db_path)
        self._connection: Optional[duckdb.DuckDBPyConnection] = None
        self._lock = asyncio.Lock()  # Serializes all database access

        # Thread pool for offloading blocking DB operations
        self._executor: Optional[ThreadPoolExecutor] = None

        # Stats for monitoring
        self._total_queries = 0

    @property
    def in_memory(self) -> bool:
        return self.db_path == MEMORY_PATH

    @property
    def is_connected(self) -> bool:
        return self._connection is not None

    async def connect(self) -> None:
        """Open the database connection, create the schema and thread pool."""
        if not self.in_memory:
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

        async with self._lock:
            if self._connection is None:
                try:
                    self._connection = duckdb.connect(self.db_path)
                    self._init_schema()
                except duckdb.Error as e:
                    self._connection = None
                    raise StoreError("Could not open record store", str(e)) from e

                # Single worker - DuckDB connections need serialized access
                self._executor = ThreadPoolExecutor(
                    max_workers=1,
                    thread_name_prefix="duckdb"
                )

                logger.info(f"DuckDB connected: {self.db_path}")

    async def close(self) -> None:
        """Close database connection and thread pool."""
        async with self._lock:
            # Shutdown thread pool (waits for in-flight queries to finish)
            if self._executor:
                self._executor.shutdown(wait=True)
                self._executor = None

            if self._connection:
                self._connection.close()
                self._connection = None
                logger.info("DuckDB connection closed")

    @asynccontextmanager
    async def connection(self):
        """Get database connection, connecting on first use.

        Acquires the lock so only one statement runs at a time.
        """
        if self._connection is None:
            await self.connect()
        async with self._lock:
            yield self._connection

    def _init_schema(self) -> None:
        """Create database schema if not exists."""
        self._connection.execute("""
            CREATE TABLE IF NOT EXISTS transactions (
                row_id BIGINT PRIMARY KEY,
                id INTEGER NOT NULL,
                title TEXT NOT NULL,
                price DOUBLE NOT NULL,
                description TEXT NOT NULL,
                category TEXT NOT NULL,
                image TEXT NOT NULL,
                sold BOOLEAN NOT NULL,
                date_of_sale TIMESTAMP NOT NULL
            );

            CREATE INDEX IF NOT EXISTS idx_transactions_date_of_sale ON transactions(date_of_sale);
            CREATE INDEX IF NOT EXISTS idx_transactions_category ON transactions(category);
        """)

    # ─── Query Execution ─────────────────────────────────────────────────────

    async def _run(self, func: Callable[[duckdb.DuckDBPyConnection], Any]) -> Any:
        """
        Run ``func(conn)`` on the worker thread while holding the lock.

        Raises:
            StoreError: If DuckDB rejects the statement
        """
        async with self.connection() as conn:
            self._total_queries += 1
            loop = asyncio.get_running_loop()
            try:
                return await loop.run_in_executor(self._executor, func, conn)
            except duckdb.Error as e:
                raise StoreError("Query failed", str(e)) from e

    async def _fetch_one(self, query: str, params: list = None) -> Optional[tuple]:
        """Execute query and fetch one row."""
        return await self._run(lambda conn: conn.execute(query, params or []).fetchone())

    async def _fetch_all(self, query: str, params: list = None) -> List[tuple]:
        """Execute query and fetch all rows."""
        return await self._run(lambda conn: conn.execute(query, params or []).fetchall())

    # ─── Writes ──────────────────────────────────────────────────────────────

    async def insert_transactions(self, records: List[SaleRecord]) -> int:
        """
        Append sale records (not idempotent: duplicates are kept).

        Uses a DataFrame bulk insert inside one transaction, so either every
        record is stored or none is. ``row_id`` continues from the current
        maximum so listing order follows insertion order.

        Returns:
            Number of records inserted
        """
        if not records:
            return 0

        df = pd.DataFrame(
            [
                (r.id, r.title, r.price, r.description, r.category, r.image, r.sold, r.date_of_sale)
                for r in records
            ],
            columns=list(RECORD_COLUMNS),
        )
        df["date_of_sale"] = pd.to_datetime(df["date_of_sale"])
        columns = ", ".join(RECORD_COLUMNS)

        def _insert(conn: duckdb.DuckDBPyConnection) -> int:
            conn.execute("BEGIN TRANSACTION")
            try:
                base = conn.execute("SELECT COALESCE(MAX(row_id), 0) FROM transactions").fetchone()[0]
                staged = df.copy()
                staged.insert(0, "row_id", range(base + 1, base + 1 + len(staged)))

                conn.register("stg_transactions", staged)
                conn.execute(f"""
                    INSERT INTO transactions (row_id, {columns})
                    SELECT row_id, {columns} FROM stg_transactions
                """)
                conn.unregister("stg_transactions")
                conn.execute("COMMIT")
            except Exception:
                conn.execute("ROLLBACK")
                raise
            return len(staged)

        count = await self._run(_insert)
        logger.info(f"Inserted {count} transactions into DuckDB")
        return count

    # ─── Monitoring ──────────────────────────────────────────────────────────

    def get_connection_info(self) -> Dict[str, Any]:
        """Get connection info for monitoring."""
        return {
            "status": "active" if self._connection else "not_initialized",
            "total_queries": self._total_queries,
            "db_path": self.db_path,
        }

    async def get_stats(self) -> Dict[str, Any]:
        """Get database statistics."""
        row = await self._fetch_one("""
            SELECT COUNT(*), COUNT(DISTINCT category), MIN(date_of_sale), MAX(date_of_sale)
            FROM transactions
        """)
        count, categories, min_date, max_date = row

        size_mb = 0
        if not self.in_memory and Path(self.db_path).exists():
            size_mb = round(Path(self.db_path).stat().st_size / 1024 / 1024, 2)

        return {
            "transactions": count,
            "categories": categories,
            "date_range": {
                "min": min_date.isoformat() if min_date else None,
                "max": max_date.isoformat() if max_date else None,
            },
            "db_size_mb": size_mb,
        }
