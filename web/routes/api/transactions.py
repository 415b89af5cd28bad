"""Seeding, transaction listing, statistics, bar-chart and pie-chart endpoints."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from core.seed_service import SeedLoader
from web.services.combined_service import SEED_SUCCESS_MESSAGE
from web.services.transaction_service import TransactionService
from web.schemas import (
    MessageResponse,
    TransactionsResponse,
    StatisticsResponse,
    BarChartResponse,
    PieChartResponse,
    ErrorResponse,
)
from ._deps import get_seed_loader, get_transaction_service, failure

router = APIRouter()
logger = logging.getLogger(__name__)

ERROR_RESPONSES = {500: {"model": ErrorResponse}}
MONTH_QUERY = Query(None, description="Month selector (YYYY-MM)")


@router.get("/initialize-database", response_model=MessageResponse, responses=ERROR_RESPONSES)
async def initialize_database(seed_loader: SeedLoader = Depends(get_seed_loader)):
    """Fetch the remote dataset and append it to the store."""
    try:
        await seed_loader.initialize_database()
    except Exception:
        logger.exception("Error initializing database")
        return failure("Error initializing database.")
    return {"success": True, "message": SEED_SUCCESS_MESSAGE}


@router.get("/transactions", response_model=TransactionsResponse, responses=ERROR_RESPONSES)
async def list_transactions(
    page: Optional[str] = Query(None, description="Page number (default 1)"),
    per_page: Optional[str] = Query(None, alias="perPage", description="Page size (default 10, max 100)"),
    search: Optional[str] = Query("", description="Match against title, description or price"),
    service: TransactionService = Depends(get_transaction_service),
):
    """List transactions with pagination and optional search."""
    try:
        return await service.list_transactions(page, per_page, search)
    except Exception:
        logger.exception("Error fetching transactions")
        return failure("Error fetching transactions.")


@router.get("/statistics", response_model=StatisticsResponse, responses=ERROR_RESPONSES)
async def get_statistics(
    month: Optional[str] = MONTH_QUERY,
    service: TransactionService = Depends(get_transaction_service),
):
    """Total sale amount, sold and unsold item counts for a month."""
    try:
        return await service.monthly_statistics(month)
    except Exception:
        logger.exception("Error calculating statistics")
        return failure("Error calculating statistics.")


@router.get("/bar-chart", response_model=BarChartResponse, responses=ERROR_RESPONSES)
async def get_bar_chart(
    month: Optional[str] = MONTH_QUERY,
    service: TransactionService = Depends(get_transaction_service),
):
    """Price histogram for a month."""
    try:
        return await service.price_histogram(month)
    except Exception:
        logger.exception("Error generating bar chart data")
        return failure("Error generating bar chart data.")


@router.get("/pie-chart", response_model=PieChartResponse, responses=ERROR_RESPONSES)
async def get_pie_chart(
    month: Optional[str] = MONTH_QUERY,
    service: TransactionService = Depends(get_transaction_service),
):
    """Category breakdown for a month."""
    try:
        return await service.category_breakdown(month)
    except Exception:
        logger.exception("Error generating pie chart data")
        return failure("Error generating pie chart data.")
