"""
FastAPI Main Application

Entry point for running the order lookup API server.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from order_lookup.api import orders
from order_lookup.config import ServiceConfig, load_env_files
from order_lookup.logging_config import setup_logging
from order_lookup.orchestrator import OrderLookupOrchestrator

logger = logging.getLogger(__name__)


def create_app(
    config: Optional[ServiceConfig] = None,
    orchestrator: Optional[OrderLookupOrchestrator] = None,
) -> FastAPI:
    """
    Build the API application.

    The orchestrator (and its cache and worker pool) lives as long as the
    app; it is closed on shutdown.
    """
    config = config or ServiceConfig.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        app.state.orchestrator.close()
        logger.info("Order lookup service stopped")

    app = FastAPI(
        title="Order Lookup API",
        description="Order history lookup by customer email or phone",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.orchestrator = orchestrator or OrderLookupOrchestrator.from_config(config)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[config.CORS_ALLOW_ORIGIN],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept"],
    )

    app.include_router(orders.router, tags=["orders"])

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "ok"}

    return app


def main() -> None:
    import uvicorn

    load_env_files()
    config = ServiceConfig.from_env()
    setup_logging(
        'order_lookup',
        log_level=config.LOG_LEVEL,
        log_format=config.LOG_FORMAT,
        log_file=config.LOG_FILE,
    )
    logger.info("Starting order lookup service", extra={"port": config.API_PORT})
    logger.debug(config.summary())
    uvicorn.run(create_app(config), host=config.API_HOST, port=config.API_PORT)


if __name__ == "__main__":
    main()
