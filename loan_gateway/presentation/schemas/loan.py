"""Loan-related Pydantic schemas."""

from decimal import Decimal
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from loan_gateway.domain.entities import ApprovalStatus, LoanStatus


class LoanCreateSchema(BaseModel):
    """Schema for POST /v1/loans request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "borrower_id": 1,
                    "amount": 30000,
                    "term": 12,
                }
            ]
        }
    )
    borrower_id: int = Field(
        ...,
        gt=0,
        validation_alias=AliasChoices("borrower_id", "borrowerId"),
        description="ID of the borrower applying",
        examples=[1],
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        description="Requested principal",
        examples=[30000],
    )
    term: int = Field(
        ...,
        ge=1,
        le=60,
        description="Loan term in months",
        examples=[12],
    )


class LoanUpdateSchema(BaseModel):
    """Schema for PUT /v1/loans/{id}; omitted fields are unchanged."""

    status: Optional[LoanStatus] = None
    approval_status: Optional[ApprovalStatus] = None
    amount: Optional[Decimal] = Field(None, gt=0)
    term: Optional[int] = Field(None, ge=1, le=60)


class LoanSchema(BaseModel):
    """Schema for a loan in responses."""

    id: int = Field(..., description="Loan ID")
    borrower_id: int
    amount: float = Field(..., gt=0, examples=[30000.0])
    term: int = Field(..., ge=1, le=60)
    status: str = Field(..., examples=["pending"])
    approval_status: str = Field(..., examples=["pending_approval"])
    interest_rate: float = Field(..., examples=[5.5])
    created_at: str = Field(..., description="ISO 8601 creation timestamp")
    updated_at: Optional[str] = None


class LoanCreatedResponseSchema(BaseModel):
    """Schema for POST /v1/loans response."""

    message: str = Field(..., examples=["Loan created and submitted for approval"])
    queued: bool = Field(
        ...,
        description="Whether the loan reached the asynchronous approval queue",
    )
    loan: LoanSchema
    info: Optional[str] = None
    warning: Optional[str] = Field(
        None,
        description="Set when the loan was routed to manual approval",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "message": "Loan created (approval queue unavailable)",
                    "queued": False,
                    "loan": {
                        "id": 2,
                        "borrower_id": 1,
                        "amount": 30000.0,
                        "term": 12,
                        "status": "pending",
                        "approval_status": "manual_approval_required",
                        "interest_rate": 5.5,
                        "created_at": "2026-01-05T10:00:00.000Z",
                        "updated_at": None,
                    },
                    "info": None,
                    "warning": "Loan will require manual approval",
                }
            ]
        }
    )


class LoanListResponseSchema(BaseModel):
    """Schema for loan listings."""

    count: int = Field(..., ge=0)
    loans: list[LoanSchema]
