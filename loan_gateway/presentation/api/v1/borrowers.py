"""Borrower API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from loan_gateway.application.dto import (
    BorrowerResponse,
    CreateBorrowerRequest,
    UpdateBorrowerRequest,
)
from loan_gateway.application.services import BorrowerService
from loan_gateway.core.dependencies import get_borrower_service
from loan_gateway.presentation.schemas import (
    BorrowerCreateSchema,
    BorrowerListResponseSchema,
    BorrowerSchema,
    BorrowerUpdateSchema,
    ErrorResponseSchema,
)

borrower_router = APIRouter(
    prefix="/borrowers",
    responses={
        404: {"model": ErrorResponseSchema, "description": "Borrower not found"},
    },
)

BorrowerId = Annotated[int, Path(ge=1, description="Borrower ID")]


def _to_schema(response: BorrowerResponse) -> BorrowerSchema:
    return BorrowerSchema(
        id=response.id,
        name=response.name,
        email=response.email,
        phone=response.phone,
        address=response.address,
        created_at=response.created_at,
        updated_at=response.updated_at,
    )


@borrower_router.get(
    "",
    response_model=BorrowerListResponseSchema,
    summary="List Borrowers",
)
async def list_borrowers(
    borrower_service: Annotated[BorrowerService, Depends(get_borrower_service)],
) -> BorrowerListResponseSchema:
    borrowers = await borrower_service.list_borrowers()
    return BorrowerListResponseSchema(
        count=len(borrowers),
        borrowers=[_to_schema(b) for b in borrowers],
    )


@borrower_router.get(
    "/{borrower_id}",
    response_model=BorrowerSchema,
    summary="Get Borrower",
)
async def get_borrower(
    borrower_id: BorrowerId,
    borrower_service: Annotated[BorrowerService, Depends(get_borrower_service)],
) -> BorrowerSchema:
    return _to_schema(await borrower_service.get_borrower(borrower_id))


@borrower_router.post(
    "",
    response_model=BorrowerSchema,
    status_code=201,
    summary="Create Borrower",
    responses={
        409: {"model": ErrorResponseSchema, "description": "Email already registered"},
    },
)
async def create_borrower(
    request: BorrowerCreateSchema,
    borrower_service: Annotated[BorrowerService, Depends(get_borrower_service)],
) -> BorrowerSchema:
    dto = CreateBorrowerRequest(
        name=request.name,
        email=request.email,
        phone=request.phone,
        address=request.address,
    )
    return _to_schema(await borrower_service.create_borrower(dto))


@borrower_router.put(
    "/{borrower_id}",
    response_model=BorrowerSchema,
    summary="Update Borrower",
    responses={
        409: {"model": ErrorResponseSchema, "description": "Email already registered"},
    },
)
async def update_borrower(
    borrower_id: BorrowerId,
    request: BorrowerUpdateSchema,
    borrower_service: Annotated[BorrowerService, Depends(get_borrower_service)],
) -> BorrowerSchema:
    dto = UpdateBorrowerRequest(
        name=request.name,
        email=request.email,
        phone=request.phone,
        address=request.address,
    )
    return _to_schema(await borrower_service.update_borrower(borrower_id, dto))


@borrower_router.delete(
    "/{borrower_id}",
    response_model=BorrowerSchema,
    summary="Delete Borrower",
)
async def delete_borrower(
    borrower_id: BorrowerId,
    borrower_service: Annotated[BorrowerService, Depends(get_borrower_service)],
) -> BorrowerSchema:
    return _to_schema(await borrower_service.delete_borrower(borrower_id))
