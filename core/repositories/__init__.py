"""
Repository mixins for the DuckDB record store.

- TransactionsMixin: listing, search, monthly aggregates, category counts
"""
from core.repositories.transactions import TransactionsMixin

__all__ = [
    "TransactionsMixin",
]
