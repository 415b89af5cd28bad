"""
Integration tests for core/seed_service.py.
"""
import logging

import pytest

from core.exceptions import SeedDataError, SeedSourceError
from core.seed_service import SeedLoader


class TestSeedLoader:
    """Tests for SeedLoader.initialize_database."""

    @pytest.mark.asyncio
    async def test_seeds_all_records(self, store, make_loader, january_records):
        loader = make_loader(store, payload=january_records)
        count = await loader.initialize_database()

        assert count == 3
        assert await store.count_transactions() == 3
        assert loader.fake_client.calls == 1

    @pytest.mark.asyncio
    async def test_seeding_twice_doubles(self, store, make_loader, numbered_records):
        """Seeding is not idempotent."""
        loader = make_loader(store, payload=numbered_records)
        await loader.initialize_database()
        await loader.initialize_database()
        assert await store.count_transactions() == 50

    @pytest.mark.asyncio
    async def test_logs_stored_total(self, store, make_loader, january_records, caplog):
        """The completion log reports the batch size and the stored total."""
        loader = make_loader(store, payload=january_records)
        await loader.initialize_database()

        with caplog.at_level(logging.INFO, logger="core.seed_service"):
            await loader.initialize_database()

        assert "Database seeded with 3 records (6 stored)" in caplog.messages

    @pytest.mark.asyncio
    async def test_empty_payload(self, store, make_loader):
        loader = make_loader(store, payload=[])
        assert await loader.initialize_database() == 0
        assert await store.count_transactions() == 0

    @pytest.mark.asyncio
    async def test_invalid_element_stores_nothing(self, store, make_loader, january_records):
        """One bad element rejects the whole batch."""
        payload = january_records + [{"id": 99, "title": "Incomplete"}]
        loader = make_loader(store, payload=payload)

        with pytest.raises(SeedDataError):
            await loader.initialize_database()
        assert await store.count_transactions() == 0

    @pytest.mark.asyncio
    async def test_source_error_propagates(self, store, make_loader):
        loader = make_loader(store, error=SeedSourceError("Seed source returned 502", status_code=502))
        with pytest.raises(SeedSourceError) as exc_info:
            await loader.initialize_database()
        assert exc_info.value.status_code == 502
        assert await store.count_transactions() == 0

    def test_default_client_factory(self, store):
        """Without a factory the real SeedClient is used."""
        from core.seed_client import SeedClient

        loader = SeedLoader(store)
        assert loader.client_factory is SeedClient
