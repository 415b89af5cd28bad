"""
FastAPI web application for the product transactions dashboard API.
"""
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from core.config import config, validate_config, ConfigurationError
from core.observability import setup_logging, get_logger
from core.seed_service import SeedLoader
from core.store import TransactionStore
from web.config import WEB_HOST, WEB_PORT, CORS_ORIGINS, LOG_LEVEL, LOG_JSON, VERSION
from web.middleware import RequestLoggingMiddleware
from web.routes.api import router as api_router

logger = get_logger(__name__)


def create_app(
    store: Optional[TransactionStore] = None,
    seed_loader: Optional[SeedLoader] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        store: Record store to serve (defaults to one at DUCKDB_PATH)
        seed_loader: Seed loader bound to the store (defaults to one using
            the configured seed URL)
    """
    store = store or TransactionStore(config.store.path)
    seed_loader = seed_loader or SeedLoader(store)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Transactions API starting...")
        await store.connect()
        stats = await store.get_stats()
        logger.info(
            f"Store ready: {stats['transactions']} transactions, "
            f"{stats['categories']} categories"
        )
        try:
            yield
        finally:
            await store.close()
            logger.info("Transactions API stopped")

    app = FastAPI(
        title="Product Transactions API",
        description="Seeded product-sale records with monthly analytics",
        version=VERSION,
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )

    app.state.store = store
    app.state.seed_loader = seed_loader

    app.add_middleware(RequestLoggingMiddleware)

    # CORS open to all origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix="/api")

    return app


# Module-level instance so `uvicorn web.main:app` can discover it
app = create_app()


def run() -> None:
    """Validate configuration and serve the app with uvicorn."""
    setup_logging(level=LOG_LEVEL, json_format=LOG_JSON)

    try:
        validate_config()
    except ConfigurationError as e:
        logger.critical(f"Configuration error: {e}")
        raise SystemExit(1)

    logger.info(f"Server is running on http://{WEB_HOST}:{WEB_PORT}")
    uvicorn.run(app, host=WEB_HOST, port=WEB_PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
