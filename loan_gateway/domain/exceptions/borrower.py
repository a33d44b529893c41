"""Borrower-related domain exceptions."""

from .base import DomainException


class BorrowerNotFoundException(DomainException):
    """Raised when a borrower cannot be found."""

    def __init__(self, borrower_id: int):
        super().__init__(
            message=f"Borrower with ID {borrower_id} not found",
            code="BORROWER_NOT_FOUND",
        )
        self.borrower_id = borrower_id


class DuplicateBorrowerException(DomainException):
    """Raised when a borrower with the same email already exists."""

    def __init__(self, email: str):
        super().__init__(
            message="Borrower with this email already exists",
            code="DUPLICATE_BORROWER",
        )
        self.email = email


class InvalidBorrowerRequestException(DomainException):
    """Raised when a borrower request is invalid."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_BORROWER_REQUEST",
        )
