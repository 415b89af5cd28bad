"""
Pydantic response models for API endpoints.

Provides type-safe response models with automatic validation and documentation.
Field names follow the camelCase wire format of the seed dataset.
"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


# ═══════════════════════════════════════════════════════════════════════════════
# COMMON MODELS
# ═══════════════════════════════════════════════════════════════════════════════

class ErrorResponse(BaseModel):
    """Uniform failure envelope."""
    success: bool = False
    message: str


class MessageResponse(BaseModel):
    """Success envelope carrying only a message."""
    success: bool = True
    message: str


# ═══════════════════════════════════════════════════════════════════════════════
# TRANSACTIONS
# ═══════════════════════════════════════════════════════════════════════════════

class TransactionItem(BaseModel):
    """One product sale."""
    id: int
    title: str
    price: float
    description: str
    category: str
    image: str
    sold: bool
    dateOfSale: str = Field(description="Sale timestamp (ISO 8601, UTC)")


class TransactionsResponse(BaseModel):
    """Page of transactions."""
    success: bool = True
    transactions: List[TransactionItem]


# ═══════════════════════════════════════════════════════════════════════════════
# MONTHLY ANALYTICS
# ═══════════════════════════════════════════════════════════════════════════════

class StatisticsResponse(BaseModel):
    """Sale statistics for one month."""
    success: bool = True
    totalSaleAmount: float = Field(description="Sum of prices sold in the month")
    totalSoldItems: int = Field(description="Number of records in the month")
    totalNotSoldItems: int = Field(description="Number of records in the month not sold")


class PriceRange(BaseModel):
    """Histogram bucket bounds; max is null for the open-ended bucket."""
    min: int
    max: Optional[int] = None


class BarChartEntry(BaseModel):
    range: PriceRange
    count: int


class BarChartResponse(BaseModel):
    """Price histogram for one month."""
    success: bool = True
    barChartData: List[BarChartEntry]


class PieChartEntry(BaseModel):
    category: str
    count: int


class PieChartResponse(BaseModel):
    """Category breakdown for one month."""
    success: bool = True
    pieChartData: List[PieChartEntry]


# ═══════════════════════════════════════════════════════════════════════════════
# COMBINED VIEW
# ═══════════════════════════════════════════════════════════════════════════════

class CombinedData(BaseModel):
    initializeDatabase: MessageResponse
    transactions: TransactionsResponse
    statistics: StatisticsResponse
    barChart: BarChartResponse
    pieChart: PieChartResponse


class CombinedDataResponse(BaseModel):
    success: bool = True
    combinedData: CombinedData


# ═══════════════════════════════════════════════════════════════════════════════
# HEALTH CHECK
# ═══════════════════════════════════════════════════════════════════════════════

class StoreStats(BaseModel):
    """Record store statistics."""
    status: str
    latency_ms: Optional[float] = None
    total_queries: Optional[int] = None
    transactions: Optional[int] = None
    categories: Optional[int] = None
    date_range: Optional[Dict[str, Any]] = None
    db_size_mb: Optional[float] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = Field(description="Service status: healthy or degraded")
    version: str = Field(description="Application version")
    uptime_seconds: int = Field(description="Uptime in seconds")
    correlation_id: Optional[str] = Field(None, description="Request correlation ID")
    store: StoreStats
