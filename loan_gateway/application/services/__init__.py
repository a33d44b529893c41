"""Application services (use cases)."""

from .borrower_service import BorrowerService
from .loan_service import LoanService

__all__ = [
    "BorrowerService",
    "LoanService",
]
