"""
Loan Gateway - Main Application Entry Point

Lending API for borrowers and loans. New loans are handed to the
asynchronous approval queue; when the queue is unavailable the API keeps
serving and routes loans to manual approval.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from loan_gateway import __version__
from loan_gateway.core.config import settings
from loan_gateway.core.logging import setup_logging
from loan_gateway.core.metrics import get_metrics, get_metrics_content_type
from loan_gateway.domain.exceptions import BrokerConnectionError
from loan_gateway.infrastructure.messaging import LoanRequestProducer, RabbitMQChannel
from loan_gateway.infrastructure.repositories import (
    InMemoryBorrowerRepository,
    InMemoryLoanRepository,
)
from loan_gateway.presentation.api import api_router
from loan_gateway.presentation.middleware import (
    LoggingMiddleware,
    RequestContextMiddleware,
    error_handler_middleware,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Handles startup and shutdown events:
    - Set up logging
    - Create the in-memory borrower and loan stores
    - Connect the approval queue producer (degrade if unreachable)
    - Close the producer on shutdown
    """
    setup_logging()
    logger = structlog.get_logger(__name__)

    app.state.borrower_repository = InMemoryBorrowerRepository()
    app.state.loan_repository = InMemoryLoanRepository()

    producer = LoanRequestProducer.from_settings(RabbitMQChannel())
    try:
        await producer.connect()
        app.state.loan_producer = producer
    except BrokerConnectionError as e:
        logger.warning(
            "approval_queue_unavailable",
            error=e.message,
            fallback="manual_approval",
        )
        app.state.loan_producer = None

    logger.info("application_started", version=__version__)

    yield

    if app.state.loan_producer is not None:
        await app.state.loan_producer.close()
    logger.info("application_stopped")


app = FastAPI(
    title="Loan Gateway",
    description="Lending API with asynchronous loan approval",
    version=__version__,
    debug=settings.debug,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(LoggingMiddleware)
app.add_middleware(RequestContextMiddleware)

error_handler_middleware(app)

app.include_router(api_router)


@app.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    """Prometheus metrics endpoint."""
    return Response(
        content=get_metrics(),
        media_type=get_metrics_content_type(),
    )


@app.get("/", include_in_schema=False)
async def root():
    """Redirect to API documentation."""

    return RedirectResponse(url="/docs")
