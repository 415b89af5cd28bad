"""
Pytest configuration and shared fixtures.
"""
import pytest
import pytest_asyncio
from typing import Any, Dict, List

from core.seed_service import SeedLoader
from core.store import TransactionStore, MEMORY_PATH


class FakeSeedClient:
    """Stands in for SeedClient: returns a canned payload or raises."""

    def __init__(self, payload: Any = None, error: Exception = None):
        self.payload = payload
        self.error = error
        self.calls = 0

    async def __aenter__(self) -> "FakeSeedClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        pass

    async def fetch_records(self) -> Any:
        self.calls += 1
        if self.error:
            raise self.error
        return self.payload


def make_record(record_id: int, price: float, date_of_sale: str, sold: bool = True,
                category: str = "electronics", title: str = None,
                description: str = None) -> Dict[str, Any]:
    """Build one raw seed record in the remote dataset's shape."""
    return {
        "id": record_id,
        "title": title or f"Product {record_id}",
        "price": price,
        "description": description or f"Description of product {record_id}",
        "category": category,
        "image": f"https://example.com/images/{record_id}.jpg",
        "sold": sold,
        "dateOfSale": date_of_sale,
    }


@pytest.fixture
def sample_record() -> Dict[str, Any]:
    """Sample record exactly as the remote dataset serves it."""
    return {
        "id": 1,
        "title": "Fjallraven  Foldsack No 1 Backpack, Fits 15 Laptops",
        "price": 329.85,
        "description": "Your perfect pack for everyday use and walks in the forest.",
        "category": "men's clothing",
        "image": "https://fakestoreapi.com/img/81fPKd-2AYL._AC_SL1500_.jpg",
        "sold": False,
        "dateOfSale": "2021-11-27T20:29:54+05:30",
    }


@pytest.fixture
def january_records() -> List[Dict[str, Any]]:
    """Three January 2023 sales priced 50, 150 and 999; one unsold."""
    return [
        make_record(1, 50, "2023-01-05T10:00:00Z", sold=True, category="electronics",
                    title="USB Cable", description="Braided charging cable"),
        make_record(2, 150, "2023-01-15T12:30:00Z", sold=True, category="jewelery",
                    title="Silver Ring", description="Sterling silver band"),
        make_record(3, 999, "2023-01-31T23:00:00Z", sold=False, category="electronics",
                    title="4K Monitor", description="27 inch IPS display"),
    ]


@pytest.fixture
def mixed_records(january_records) -> List[Dict[str, Any]]:
    """January records plus sales on the neighbouring month boundaries."""
    return january_records + [
        make_record(4, 75, "2022-12-31T23:59:59Z", category="men's clothing"),
        make_record(5, 420, "2023-02-01T00:00:00Z", category="women's clothing"),
        make_record(6, 640, "2023-02-28T18:00:00Z", sold=False, category="women's clothing"),
    ]


@pytest.fixture
def numbered_records() -> List[Dict[str, Any]]:
    """25 records with ids 1..25, for pagination."""
    return [
        make_record(i, i * 10, f"2023-03-{i:02d}T08:00:00Z")
        for i in range(1, 26)
    ]


@pytest.fixture
def record_factory():
    """The make_record builder, for tests that need custom prices or dates."""
    return make_record


@pytest_asyncio.fixture
async def store():
    """Connected in-memory store, closed after the test."""
    store = TransactionStore(MEMORY_PATH)
    await store.connect()
    yield store
    await store.close()


@pytest.fixture
def make_loader():
    """Build a SeedLoader whose client returns ``payload``."""
    def _make(store: TransactionStore, payload: Any = None, error: Exception = None) -> SeedLoader:
        client = FakeSeedClient(payload=payload, error=error)
        loader = SeedLoader(store, client_factory=lambda: client)
        loader.fake_client = client
        return loader
    return _make
