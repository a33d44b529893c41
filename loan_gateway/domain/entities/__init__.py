"""Domain Entities - Core business objects."""

from .borrower import Borrower
from .decision import DecisionOutcome, LoanDecision
from .loan import ApprovalStatus, Loan, LoanStatus
from .loan_request import LoanApprovalRequest

__all__ = [
    "Borrower",
    "Loan",
    "LoanStatus",
    "ApprovalStatus",
    "LoanApprovalRequest",
    "LoanDecision",
    "DecisionOutcome",
]
