"""TransactionStore listing, search and aggregation methods."""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Tuple

from core.models import RECORD_COLUMNS, SaleRecord

_SELECT_COLUMNS = ", ".join(RECORD_COLUMNS)


class TransactionsMixin:

    async def find_transactions(
        self,
        offset: int = 0,
        limit: int = 10,
        search: str = "",
    ) -> List[SaleRecord]:
        """
        Page through records in insertion order, optionally filtered.

        A non-empty search matches case-insensitively as a substring of the
        title, the description, or the price rendered as text.
        """
        params: list = []
        where_sql = ""
        if search:
            needle = search.lower()
            where_sql = """
                WHERE contains(lower(title), ?)
                   OR contains(lower(description), ?)
                   OR contains(CAST(price AS VARCHAR), ?)
            """
            params.extend([needle, needle, needle])

        # limit/offset are coerced ints, inlined
        rows = await self._fetch_all(f"""
            SELECT {_SELECT_COLUMNS}
            FROM transactions
            {where_sql}
            ORDER BY row_id
            LIMIT {int(limit)} OFFSET {int(offset)}
        """, params)
        return [SaleRecord.from_row(row) for row in rows]

    async def count_transactions(self) -> int:
        """Total number of stored records."""
        row = await self._fetch_one("SELECT COUNT(*) FROM transactions")
        return int(row[0])

    async def get_sale_totals(self, start: datetime, end: datetime) -> Tuple[float, int, int]:
        """
        Aggregate records with ``start <= date_of_sale < end``.

        Returns:
            (sum of price, record count, count with sold = false); the sum is
            0 when nothing matches
        """
        row = await self._fetch_one("""
            SELECT
                COALESCE(SUM(price), 0) AS total_amount,
                COUNT(*) AS total_items,
                COUNT(*) FILTER (WHERE NOT sold) AS not_sold_items
            FROM transactions
            WHERE date_of_sale >= ? AND date_of_sale < ?
        """, [start, end])
        return float(row[0]), int(row[1]), int(row[2])

    async def count_in_price_band(
        self,
        start: datetime,
        end: datetime,
        min_price: float,
        max_price: Optional[float] = None,
    ) -> int:
        """Count records in the date range with ``min_price <= price < max_price``.

        ``max_price=None`` leaves the band open-ended.
        """
        params = [start, end, min_price]
        price_sql = "price >= ?"
        if max_price is not None:
            price_sql += " AND price < ?"
            params.append(max_price)

        row = await self._fetch_one(f"""
            SELECT COUNT(*)
            FROM transactions
            WHERE date_of_sale >= ? AND date_of_sale < ?
              AND {price_sql}
        """, params)
        return int(row[0])

    async def get_category_counts(self, date_prefix: str) -> List[Tuple[str, int]]:
        """
        Count records per category whose sale date, as text, starts with
        ``date_prefix`` (e.g. ``"2023-01-"``).

        Categories come back in the order they were first inserted.
        """
        rows = await self._fetch_all("""
            SELECT category, COUNT(*) AS count
            FROM transactions
            WHERE starts_with(CAST(date_of_sale AS VARCHAR), ?)
            GROUP BY category
            ORDER BY MIN(row_id)
        """, [date_prefix])
        return [(category, int(count)) for category, count in rows]
