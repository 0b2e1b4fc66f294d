#!/usr/bin/env python3
"""
QuoteMatch API - FastAPI Application

Matching of development companies to quote requests, and the proposal
workflow between them.

Usage:
    python main.py serve

Then open:
    - http://localhost:8080/docs - API Documentation (Swagger UI)
    - http://localhost:8080/redoc - Alternative API Documentation
"""

import logging
from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError

from core.config_loader import AppConfig
from core.exceptions import ServiceException
from core.matching.service import MatchingService
from core.proposals.service import ProposalService
from core.quote_requests.service import RequestService
from database.database import Database
from .exceptions import (
    service_exception_handler,
    http_exception_handler,
    validation_exception_handler,
    general_exception_handler
)
from .routers import (
    matches_router,
    proposals_router,
    requests_router
)

logger = logging.getLogger(__name__)


def create_app(config: AppConfig, database: Database) -> FastAPI:
    """
    Build the FastAPI app around an already constructed Database.

    The caller owns the database and disposes it on shutdown.
    """
    app = FastAPI(
        title="QuoteMatch API",
        description="Company matching and proposal comparison for quote requests",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )

    app.state.config = config
    app.state.database = database
    app.state.matching_service = MatchingService(database, config.matching)
    app.state.proposal_service = ProposalService(
        database,
        matching_config=config.matching,
        isolation_level=config.database.selection_isolation_level
    )
    app.state.request_service = RequestService(database)

    # Register exception handlers
    app.add_exception_handler(ServiceException, service_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # Include routers
    app.include_router(matches_router)
    app.include_router(proposals_router)
    app.include_router(requests_router)

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": "quotematch-api"}

    return app


def run_server(config: AppConfig, database: Database) -> None:
    """Run the web server."""
    import uvicorn

    app = create_app(config, database)

    logger.info(f"Starting QuoteMatch API on {config.web.host}:{config.web.port}")
    logger.info(f"API Docs: http://{config.web.host}:{config.web.port}/docs")

    uvicorn.run(
        app,
        host=config.web.host,
        port=config.web.port,
        log_level=config.logging.level.lower()
    )
