"""Loan-related domain exceptions."""

from .base import DomainException


class LoanNotFoundException(DomainException):
    """Raised when a loan cannot be found."""

    def __init__(self, loan_id: int):
        super().__init__(
            message=f"Loan with ID {loan_id} not found",
            code="LOAN_NOT_FOUND",
        )
        self.loan_id = loan_id


class InvalidLoanRequestException(DomainException):
    """Raised when a loan request is invalid."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_LOAN_REQUEST",
        )
