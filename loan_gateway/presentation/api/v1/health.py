"""Health check endpoint for service monitoring."""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from loan_gateway import __version__
from loan_gateway.core.dependencies import get_approval_publisher
from loan_gateway.domain.interfaces import ApprovalRequestPublisher

health_router = APIRouter()


class HealthResponse(BaseModel):
    status: str = "healthy"
    version: str
    approval_queue: str = "connected"


@health_router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="""
    Returns the health status of the service.

    The service stays healthy without the approval queue; it reports
    "degraded" so operators know new loans go to manual approval.
    """,
)
async def health_check(
    publisher: Annotated[
        Optional[ApprovalRequestPublisher],
        Depends(get_approval_publisher),
    ],
) -> HealthResponse:
    if publisher is not None and publisher.is_connected:
        return HealthResponse(status="healthy", version=__version__)
    return HealthResponse(
        status="degraded",
        version=__version__,
        approval_queue="unavailable",
    )
