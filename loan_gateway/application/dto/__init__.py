"""Data Transfer Objects for application layer."""

from .borrower import BorrowerResponse, CreateBorrowerRequest, UpdateBorrowerRequest
from .loan import (
    CreateLoanRequest,
    LoanResponse,
    LoanSubmissionResult,
    UpdateLoanRequest,
)

__all__ = [
    "CreateBorrowerRequest",
    "UpdateBorrowerRequest",
    "BorrowerResponse",
    "CreateLoanRequest",
    "UpdateLoanRequest",
    "LoanResponse",
    "LoanSubmissionResult",
]
