"""Loan decision entity produced by the approval consumer."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from loan_gateway.utils.date_utils import to_iso8601, utcnow

from .loan_request import LoanApprovalRequest


class DecisionOutcome(str, Enum):
    """Terminal outcome of an approval decision."""

    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


@dataclass(frozen=True)
class LoanDecision:
    """
    Result of evaluating a LoanApprovalRequest.

    Computed transiently per message and never persisted by the
    approval pipeline itself.
    """

    request: LoanApprovalRequest
    outcome: DecisionOutcome
    reason: str
    processed_at: datetime = field(default_factory=utcnow)

    @property
    def approved(self) -> bool:
        return self.outcome is DecisionOutcome.APPROVED

    def to_dict(self) -> dict:
        """Convert to the wire message shape augmented with the decision."""
        amount = self.request.amount
        return {
            "id": self.request.id,
            "borrowerId": self.request.borrower_id,
            "borrower": self.request.borrower_label,
            "amount": int(amount) if amount == amount.to_integral_value() else float(amount),
            "term": self.request.term,
            "timestamp": to_iso8601(self.request.submitted_at),
            "decision": self.outcome.value,
            "reason": self.reason,
            "processedAt": to_iso8601(self.processed_at),
        }
