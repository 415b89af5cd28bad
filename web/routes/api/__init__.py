"""
API routes split by domain.

Each sub-module defines its own APIRouter which is composed
into the top-level router exposed by this package.
"""
from fastapi import APIRouter

from .health import router as health_router
from .transactions import router as transactions_router
from .combined import router as combined_router

router = APIRouter(tags=["api"])

router.include_router(health_router)
router.include_router(transactions_router)
router.include_router(combined_router)
