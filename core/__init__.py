"""
Core library for the product transactions service.

This package contains the logic shared by the web layer and scripts:
- exceptions: Custom exception hierarchy
- validators: Request parameter coercion
- models: SaleRecord domain model
- store: DuckDB record store
- seed_service: Seed loader
- config: Centralized configuration
"""

# Import in dependency order
from core.exceptions import (
    OperationFailure,
    SeedSourceError,
    SeedDataError,
    StoreError,
    ValidationError,
)

from core.validators import (
    coerce_page,
    coerce_per_page,
    coerce_search,
    parse_month,
    month_prefix,
)

from core.config import config

__all__ = [
    # Exceptions
    "OperationFailure",
    "SeedSourceError",
    "SeedDataError",
    "StoreError",
    "ValidationError",
    # Validators
    "coerce_page",
    "coerce_per_page",
    "coerce_search",
    "parse_month",
    "month_prefix",
    # Config
    "config",
]
