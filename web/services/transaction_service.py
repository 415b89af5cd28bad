"""
Query service for transaction listing and monthly analytics.

Turns request parameters into store queries and shapes the results into
response payloads. Every method returns the success envelope; failures
propagate as exceptions and are turned into error envelopes by the routes.
"""
import asyncio
from typing import Any, Dict, List, Optional, Tuple

from core.observability import get_logger
from core.store import TransactionStore
from core.validators import (
    coerce_page,
    coerce_per_page,
    coerce_search,
    month_prefix,
    parse_month,
)

logger = get_logger(__name__)

# Histogram buckets as reported to clients: (min, max), max=None is unbounded.
PRICE_RANGES: List[Tuple[int, Optional[int]]] = [
    (0, 100),
    (101, 200),
    (201, 300),
    (301, 400),
    (401, 500),
    (501, 600),
    (601, 700),
    (701, 800),
    (801, 900),
    (901, None),
]


def price_bands() -> List[Tuple[float, Optional[float]]]:
    """
    Half-open counting bands ``[min_i, min_{i+1})`` for PRICE_RANGES.

    Bands are contiguous, so every non-negative price (including fractional
    prices such as 100.5) falls into exactly one bucket.
    """
    lows = [low for low, _ in PRICE_RANGES]
    return [
        (low, lows[i + 1] if i + 1 < len(lows) else None)
        for i, low in enumerate(lows)
    ]


def bucket_index(price: float) -> Optional[int]:
    """Index of the bucket a price is counted in, None for negative prices."""
    for i, (low, high) in enumerate(price_bands()):
        if price >= low and (high is None or price < high):
            return i
    return None


class TransactionService:
    """
    Read operations over the record store.

    Args:
        store: Connected TransactionStore
    """

    def __init__(self, store: TransactionStore):
        self.store = store

    async def list_transactions(
        self,
        page: Any = 1,
        per_page: Any = 10,
        search: Optional[str] = "",
    ) -> Dict[str, Any]:
        """
        Page through records, optionally filtered by a search term.

        Page and page size are coerced (non-numeric → default, clamped to
        positive values); the search matches title, description or price.
        """
        page = coerce_page(page)
        per_page = coerce_per_page(per_page)
        search = coerce_search(search)

        records = await self.store.find_transactions(
            offset=(page - 1) * per_page,
            limit=per_page,
            search=search,
        )
        return {
            "success": True,
            "transactions": [record.to_dict() for record in records],
        }

    async def monthly_statistics(self, month: Optional[str]) -> Dict[str, Any]:
        """Sale total, item count and unsold count for a calendar month."""
        start, end = parse_month(month)
        total_amount, total_items, not_sold_items = await self.store.get_sale_totals(start, end)
        return {
            "success": True,
            "totalSaleAmount": total_amount,
            "totalSoldItems": total_items,
            "totalNotSoldItems": not_sold_items,
        }

    async def price_histogram(self, month: Optional[str]) -> Dict[str, Any]:
        """
        Count the month's records per price bucket.

        The ten bucket queries run concurrently; gather returns results in
        bucket order regardless of completion order.
        """
        start, end = parse_month(month)

        counts = await asyncio.gather(*[
            self.store.count_in_price_band(start, end, low, high)
            for low, high in price_bands()
        ])

        bar_chart_data = [
            {"range": {"min": low, "max": high}, "count": count}
            for (low, high), count in zip(PRICE_RANGES, counts)
        ]
        return {"success": True, "barChartData": bar_chart_data}

    async def category_breakdown(self, month: Optional[str]) -> Dict[str, Any]:
        """Record count per category for a month (text prefix match on the sale date)."""
        prefix = month_prefix(month)
        rows = await self.store.get_category_counts(prefix)
        return {
            "success": True,
            "pieChartData": [
                {"category": category, "count": count}
                for category, count in rows
            ],
        }
