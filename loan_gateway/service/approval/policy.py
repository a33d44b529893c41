"""
Approval Policy for the asynchronous loan approval pipeline.

The policy is a pure function of the request: it has no access to the
transport and no hidden state, so identical input always yields an
identical outcome and reason.

Rule:
    amount <= threshold  -> APPROVED, "Amount within approval limit"
    amount >  threshold  -> REJECTED, "Amount exceeds approval threshold (50,000)"
"""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import NamedTuple, Optional

from loan_gateway.domain.entities import (
    DecisionOutcome,
    LoanApprovalRequest,
    LoanDecision,
)
from loan_gateway.utils.date_utils import utcnow

APPROVAL_THRESHOLD = Decimal("50000")

WITHIN_LIMIT_REASON = "Amount within approval limit"


class PolicyResult(NamedTuple):
    """Outcome and human-readable reason produced by a policy."""

    outcome: DecisionOutcome
    reason: str


def _exceeds_reason(threshold: Decimal) -> str:
    return f"Amount exceeds approval threshold ({threshold:,})"


def decide(
    request: LoanApprovalRequest,
    threshold: Decimal = APPROVAL_THRESHOLD,
) -> PolicyResult:
    """
    Decide a loan approval request against a single amount threshold.

    Args:
        request: The request to evaluate
        threshold: Largest amount approved (inclusive)

    Returns:
        PolicyResult with the outcome and the reason for it
    """
    if request.amount <= threshold:
        return PolicyResult(DecisionOutcome.APPROVED, WITHIN_LIMIT_REASON)
    return PolicyResult(DecisionOutcome.REJECTED, _exceeds_reason(threshold))


class ApprovalPolicy(ABC):
    """Pluggable approval policy used by the decision consumer."""

    @abstractmethod
    def decide(self, request: LoanApprovalRequest) -> PolicyResult:
        """Map a request to an outcome and reason without side effects."""
        ...


class ThresholdApprovalPolicy(ApprovalPolicy):
    """Approves every request whose amount does not exceed the threshold."""

    def __init__(self, threshold: Decimal = APPROVAL_THRESHOLD):
        self.threshold = Decimal(threshold)

    def decide(self, request: LoanApprovalRequest) -> PolicyResult:
        return decide(request, self.threshold)


def evaluate(
    request: LoanApprovalRequest,
    policy: ApprovalPolicy,
    processed_at: Optional[datetime] = None,
) -> LoanDecision:
    """Run a policy and build the resulting LoanDecision."""
    outcome, reason = policy.decide(request)
    return LoanDecision(
        request=request,
        outcome=outcome,
        reason=reason,
        processed_at=processed_at or utcnow(),
    )
