"""Data transfer objects for loan operations."""

from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional

from loan_gateway.domain.entities import ApprovalStatus, LoanStatus
from loan_gateway.utils.date_utils import to_iso8601

MIN_TERM_MONTHS = 1
MAX_TERM_MONTHS = 60


@dataclass(frozen=True)
class CreateLoanRequest:
    """Input data for creating a loan and requesting its approval."""
    borrower_id: int
    amount: Decimal
    term: int

    def validate(self) -> List[str]:
        errors = []

        if self.borrower_id <= 0:
            errors.append("borrower_id must be positive")

        if self.amount <= 0:
            errors.append("Loan amount must be greater than 0")

        if not MIN_TERM_MONTHS <= self.term <= MAX_TERM_MONTHS:
            errors.append(
                f"Loan term must be between {MIN_TERM_MONTHS} and {MAX_TERM_MONTHS} months"
            )

        return errors


@dataclass(frozen=True)
class UpdateLoanRequest:
    """Partial update; None leaves a field unchanged."""
    status: Optional[LoanStatus] = None
    approval_status: Optional[ApprovalStatus] = None
    amount: Optional[Decimal] = None
    term: Optional[int] = None

    def validate(self) -> List[str]:
        errors = []

        if self.amount is not None and self.amount <= 0:
            errors.append("Loan amount must be greater than 0")

        if self.term is not None and not MIN_TERM_MONTHS <= self.term <= MAX_TERM_MONTHS:
            errors.append(
                f"Loan term must be between {MIN_TERM_MONTHS} and {MAX_TERM_MONTHS} months"
            )

        return errors


@dataclass(frozen=True)
class LoanResponse:
    """Response data for a loan."""

    id: int
    borrower_id: int
    amount: Decimal
    term: int
    status: str
    approval_status: str
    interest_rate: Decimal
    created_at: str
    updated_at: Optional[str]

    @classmethod
    def from_entity(cls, loan) -> "LoanResponse":
        return cls(
            id=loan.id,
            borrower_id=loan.borrower_id,
            amount=loan.amount,
            term=loan.term,
            status=loan.status.value,
            approval_status=loan.approval_status.value,
            interest_rate=loan.interest_rate,
            created_at=to_iso8601(loan.created_at),
            updated_at=to_iso8601(loan.updated_at) if loan.updated_at else None,
        )


@dataclass(frozen=True)
class LoanSubmissionResult:
    """Outcome of creating a loan and handing it to the approval queue."""

    loan: LoanResponse
    queued: bool
    message: str
    info: Optional[str] = None
    warning: Optional[str] = None
