"""Health check endpoint with record store stats."""
import time

from fastapi import APIRouter, Depends

from core.observability import get_correlation_id, Timer
from core.store import TransactionStore
from web.config import VERSION
from web.schemas import HealthResponse
from ._deps import get_store, get_logger, START_TIME

router = APIRouter()
logger = get_logger(__name__)


@router.get("/health", response_model=HealthResponse)
async def health_check(store: TransactionStore = Depends(get_store)):
    """Health check endpoint for Docker/load balancer monitoring."""
    uptime_seconds = int(time.time() - START_TIME)

    try:
        with Timer("health_check_db") as timer:
            stats = await store.get_stats()
        store_stats = {
            "status": "connected",
            "latency_ms": round(timer.elapsed_ms, 2),
            "total_queries": store.get_connection_info()["total_queries"],
            **stats,
        }
    except Exception as e:
        logger.warning(f"Health check could not read store: {e}")
        store_stats = {"status": f"error: {e}"}

    return {
        "status": "healthy" if store_stats["status"] == "connected" else "degraded",
        "version": VERSION,
        "uptime_seconds": uptime_seconds,
        "correlation_id": get_correlation_id(),
        "store": store_stats,
    }
