"""Approval request publisher interface."""

from abc import ABC, abstractmethod

from loan_gateway.domain.entities import LoanApprovalRequest


class ApprovalRequestPublisher(ABC):
    """
    Hands loan approval requests off to the asynchronous approval pipeline.

    Fire-and-forget: a successful submit only means the request was
    enqueued, not that it was decided.
    """

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        ...

    @abstractmethod
    async def submit(self, request: LoanApprovalRequest) -> bool:
        """
        Enqueue a loan approval request.

        Args:
            request: The request to enqueue

        Returns:
            True if the request was enqueued. Implementations return False
            instead of raising on serialization or publish failure.
        """
        ...
