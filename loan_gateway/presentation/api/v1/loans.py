"""Loan API endpoints."""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path, Query

from loan_gateway.application.dto import (
    CreateLoanRequest,
    LoanResponse,
    UpdateLoanRequest,
)
from loan_gateway.application.services import LoanService
from loan_gateway.core.dependencies import get_loan_service
from loan_gateway.core.metrics import record_loan_created
from loan_gateway.domain.entities import LoanStatus
from loan_gateway.presentation.schemas import (
    ErrorResponseSchema,
    LoanCreateSchema,
    LoanCreatedResponseSchema,
    LoanListResponseSchema,
    LoanSchema,
    LoanUpdateSchema,
)

loan_router = APIRouter(
    prefix="/loans",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        404: {"model": ErrorResponseSchema, "description": "Loan not found"},
    },
)

LoanId = Annotated[int, Path(ge=1, description="Loan ID")]


def _to_schema(response: LoanResponse) -> LoanSchema:
    return LoanSchema(
        id=response.id,
        borrower_id=response.borrower_id,
        amount=float(response.amount),
        term=response.term,
        status=response.status,
        approval_status=response.approval_status,
        interest_rate=float(response.interest_rate),
        created_at=response.created_at,
        updated_at=response.updated_at,
    )


def _to_list_schema(loans: list[LoanResponse]) -> LoanListResponseSchema:
    return LoanListResponseSchema(
        count=len(loans),
        loans=[_to_schema(loan) for loan in loans],
    )


@loan_router.post(
    "",
    response_model=LoanCreatedResponseSchema,
    status_code=201,
    summary="Create Loan",
    description="""
    Create a loan and submit it to the asynchronous approval queue.

    The loan is always created. If the approval queue is unavailable the
    response carries `queued: false` and the loan is flagged for manual
    approval instead of failing the request.
    """,
)
async def create_loan(
    request: LoanCreateSchema,
    loan_service: Annotated[LoanService, Depends(get_loan_service)],
) -> LoanCreatedResponseSchema:
    dto = CreateLoanRequest(
        borrower_id=request.borrower_id,
        amount=request.amount,
        term=request.term,
    )

    result = await loan_service.create_loan(dto)

    # Record business metrics
    record_loan_created(result.queued)

    return LoanCreatedResponseSchema(
        message=result.message,
        queued=result.queued,
        loan=_to_schema(result.loan),
        info=result.info,
        warning=result.warning,
    )


@loan_router.get(
    "",
    response_model=LoanListResponseSchema,
    summary="List Loans",
)
async def list_loans(
    loan_service: Annotated[LoanService, Depends(get_loan_service)],
    status: Annotated[
        Optional[LoanStatus],
        Query(description="Only return loans in this status"),
    ] = None,
    borrower_id: Annotated[
        Optional[int],
        Query(ge=1, description="Only return loans for this borrower"),
    ] = None,
) -> LoanListResponseSchema:
    loans = await loan_service.list_loans(status=status, borrower_id=borrower_id)
    return _to_list_schema(loans)


@loan_router.get(
    "/borrower/{borrower_id}",
    response_model=LoanListResponseSchema,
    summary="List Loans for Borrower",
)
async def list_borrower_loans(
    borrower_id: Annotated[int, Path(ge=1, description="Borrower ID")],
    loan_service: Annotated[LoanService, Depends(get_loan_service)],
) -> LoanListResponseSchema:
    loans = await loan_service.list_loans(borrower_id=borrower_id)
    return _to_list_schema(loans)


@loan_router.get(
    "/{loan_id}",
    response_model=LoanSchema,
    summary="Get Loan",
)
async def get_loan(
    loan_id: LoanId,
    loan_service: Annotated[LoanService, Depends(get_loan_service)],
) -> LoanSchema:
    return _to_schema(await loan_service.get_loan(loan_id))


@loan_router.put(
    "/{loan_id}",
    response_model=LoanSchema,
    summary="Update Loan",
    description="Update a loan, e.g. to record the outcome of a manual approval.",
)
async def update_loan(
    loan_id: LoanId,
    request: LoanUpdateSchema,
    loan_service: Annotated[LoanService, Depends(get_loan_service)],
) -> LoanSchema:
    dto = UpdateLoanRequest(
        status=request.status,
        approval_status=request.approval_status,
        amount=request.amount,
        term=request.term,
    )
    return _to_schema(await loan_service.update_loan(loan_id, dto))


@loan_router.delete(
    "/{loan_id}",
    response_model=LoanSchema,
    summary="Delete Loan",
)
async def delete_loan(
    loan_id: LoanId,
    loan_service: Annotated[LoanService, Depends(get_loan_service)],
) -> LoanSchema:
    return _to_schema(await loan_service.delete_loan(loan_id))
