"""
Combined view: seed step plus every read operation in one payload.

Sub-operations are called in-process. The first failure aborts the whole
response; partial results are never returned.
"""
import asyncio
from typing import Any, Awaitable, Dict, List, Optional

from core.config import config
from core.observability import get_logger
from core.seed_service import SeedLoader
from web.services.transaction_service import TransactionService

logger = get_logger(__name__)

SEED_SUCCESS_MESSAGE = "Database initialized with seed data."
SEED_SKIPPED_MESSAGE = "Database initialization skipped."


async def gather_or_cancel(*coros: Awaitable[Any]) -> List[Any]:
    """
    Run coroutines concurrently and return their results in order.

    When one raises, the others are cancelled and awaited before the
    exception propagates.
    """
    tasks = [asyncio.ensure_future(coro) for coro in coros]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


class CombinedService:
    """
    Merges the seed step and the four read operations.

    Args:
        seed_loader: Loader run before the reads
        transactions: Query service for the reads
        reseed: Whether to run the seed step (defaults to COMBINED_RESEED)
    """

    def __init__(
        self,
        seed_loader: SeedLoader,
        transactions: TransactionService,
        reseed: Optional[bool] = None,
    ):
        self.seed_loader = seed_loader
        self.transactions = transactions
        self.reseed = config.seed.reseed_on_combined if reseed is None else reseed

    async def _initialize(self) -> Dict[str, Any]:
        if not self.reseed:
            return {"success": True, "message": SEED_SKIPPED_MESSAGE}
        await self.seed_loader.initialize_database()
        return {"success": True, "message": SEED_SUCCESS_MESSAGE}

    async def combined_view(self, month: Optional[str]) -> Dict[str, Any]:
        """
        Build ``{initializeDatabase, transactions, statistics, barChart, pieChart}``.

        The seed step runs first so the reads observe the seeded data; the
        reads then run concurrently. The first exception cancels the remaining
        reads and propagates.
        """
        initialize = await self._initialize()

        transactions, statistics, bar_chart, pie_chart = await gather_or_cancel(
            self.transactions.list_transactions(),
            self.transactions.monthly_statistics(month),
            self.transactions.price_histogram(month),
            self.transactions.category_breakdown(month),
        )

        return {
            "initializeDatabase": initialize,
            "transactions": transactions,
            "statistics": statistics,
            "barChart": bar_chart,
            "pieChart": pie_chart,
        }
