"""Combined data endpoint: seed step plus every chart in one response."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from web.services.combined_service import CombinedService
from web.schemas import CombinedDataResponse, ErrorResponse
from ._deps import get_combined_service, failure

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get(
    "/combined-data",
    response_model=CombinedDataResponse,
    responses={500: {"model": ErrorResponse}},
)
async def get_combined_data(
    month: Optional[str] = Query(None, description="Month selector (YYYY-MM)"),
    service: CombinedService = Depends(get_combined_service),
):
    """
    Seed the store, then return transactions, statistics, bar chart and pie
    chart for the month. One failing part fails the whole response.
    """
    try:
        combined = await service.combined_view(month)
    except Exception:
        logger.exception("Error fetching combined data")
        return failure("Error fetching combined data.")
    return {"success": True, "combinedData": combined}
