"""Pydantic schemas for API request/response validation."""

from .borrower import (
    BorrowerCreateSchema,
    BorrowerListResponseSchema,
    BorrowerSchema,
    BorrowerUpdateSchema,
)
from .loan import (
    LoanCreateSchema,
    LoanCreatedResponseSchema,
    LoanListResponseSchema,
    LoanSchema,
    LoanUpdateSchema,
)
from .error import ErrorResponseSchema

__all__ = [
    "BorrowerCreateSchema",
    "BorrowerUpdateSchema",
    "BorrowerSchema",
    "BorrowerListResponseSchema",
    "LoanCreateSchema",
    "LoanUpdateSchema",
    "LoanSchema",
    "LoanCreatedResponseSchema",
    "LoanListResponseSchema",
    "ErrorResponseSchema",
]
