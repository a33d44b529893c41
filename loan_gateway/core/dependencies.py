"""Dependency injection for FastAPI."""

from typing import Annotated, Optional

from fastapi import Depends, Request

from loan_gateway.application.services import BorrowerService, LoanService
from loan_gateway.domain.interfaces import (
    ApprovalRequestPublisher,
    BorrowerRepository,
    LoanRepository,
)


# Repository dependencies
# In-memory stores are owned by the application instance (see main.lifespan)
def get_borrower_repository(request: Request) -> BorrowerRepository:
    """Get the application's BorrowerRepository."""
    return request.app.state.borrower_repository


def get_loan_repository(request: Request) -> LoanRepository:
    """Get the application's LoanRepository."""
    return request.app.state.loan_repository


# Messaging dependencies
def get_approval_publisher(request: Request) -> Optional[ApprovalRequestPublisher]:
    """Get the approval queue producer, or None if the broker was unreachable."""
    return getattr(request.app.state, "loan_producer", None)


# Service dependencies
def get_borrower_service(
    borrower_repo: Annotated[BorrowerRepository, Depends(get_borrower_repository)],
) -> BorrowerService:
    """Get a BorrowerService instance."""
    return BorrowerService(borrower_repository=borrower_repo)


def get_loan_service(
    loan_repo: Annotated[LoanRepository, Depends(get_loan_repository)],
    borrower_repo: Annotated[BorrowerRepository, Depends(get_borrower_repository)],
    publisher: Annotated[
        Optional[ApprovalRequestPublisher],
        Depends(get_approval_publisher),
    ],
) -> LoanService:
    """Get a LoanService instance with all dependencies."""
    return LoanService(
        loan_repository=loan_repo,
        borrower_repository=borrower_repo,
        publisher=publisher,
    )
