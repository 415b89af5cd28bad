"""
Seed loader for populating the record store from the remote dataset.

Every call fetches the full dataset and appends it; there is no idempotency
check, so seeding twice stores every record twice.
"""
from typing import Callable, Optional

from core.models import SaleRecord
from core.observability import Timer, get_logger
from core.seed_client import SeedClient
from core.store import TransactionStore

logger = get_logger(__name__)


class SeedLoader:
    """
    Fetches the seed dataset and bulk-inserts it into the store.

    Args:
        store: Record store to append to
        client_factory: Zero-argument callable returning a SeedClient
            (defaults to SeedClient with configured URL/timeout)
    """

    def __init__(
        self,
        store: TransactionStore,
        client_factory: Optional[Callable[[], SeedClient]] = None,
    ):
        self.store = store
        self.client_factory = client_factory or SeedClient

    async def initialize_database(self) -> int:
        """
        Fetch the dataset and insert every element as a SaleRecord.

        Returns:
            Number of records inserted

        Raises:
            SeedSourceError: Seed source unreachable or returned an error
            SeedDataError: Payload is not an array of valid records
        """
        with Timer("initialize_database", logger):
            async with self.client_factory() as client:
                payload = await client.fetch_records()

            # Validate everything before writing so a bad element stores nothing
            records = [SaleRecord.from_api(item) for item in payload]
            count = await self.store.insert_transactions(records)
            stored = await self.store.count_transactions()

        logger.info(f"Database seeded with {count} records ({stored} stored)")
        return count

