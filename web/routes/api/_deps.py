"""Shared dependencies for API route modules."""
import logging
import time

from fastapi import Request
from fastapi.responses import ORJSONResponse

from core.seed_service import SeedLoader
from core.store import TransactionStore
from web.services.combined_service import CombinedService
from web.services.transaction_service import TransactionService


# Shared logger factory
def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


# Track startup time for uptime calculation
START_TIME = time.time()


def get_store(request: Request) -> TransactionStore:
    """Store handle created by the application lifespan."""
    return request.app.state.store


def get_seed_loader(request: Request) -> SeedLoader:
    return request.app.state.seed_loader


def get_transaction_service(request: Request) -> TransactionService:
    return TransactionService(get_store(request))


def get_combined_service(request: Request) -> CombinedService:
    return CombinedService(
        seed_loader=get_seed_loader(request),
        transactions=get_transaction_service(request),
    )


def failure(message: str) -> ORJSONResponse:
    """Uniform error envelope returned for any failure at the route boundary."""
    return ORJSONResponse(
        status_code=500,
        content={"success": False, "message": message},
    )
