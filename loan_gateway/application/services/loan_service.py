"""Loan service - orchestrates loan creation and the hand-off to approval."""

from typing import Optional

import structlog

from loan_gateway.application.dto import (
    CreateLoanRequest,
    LoanResponse,
    LoanSubmissionResult,
    UpdateLoanRequest,
)
from loan_gateway.domain.entities import (
    ApprovalStatus,
    Loan,
    LoanApprovalRequest,
    LoanStatus,
)
from loan_gateway.domain.exceptions import (
    InvalidLoanRequestException,
    LoanNotFoundException,
)
from loan_gateway.domain.interfaces import (
    ApprovalRequestPublisher,
    BorrowerRepository,
    LoanRepository,
)
from loan_gateway.utils.date_utils import utcnow

logger = structlog.get_logger(__name__)


class LoanService:
    """
    Application service for loan use cases.

    The approval publisher is optional: when it is absent or a submission
    fails, the loan is still created and flagged for manual approval.
    """

    def __init__(
        self,
        loan_repository: LoanRepository,
        borrower_repository: BorrowerRepository,
        publisher: Optional[ApprovalRequestPublisher] = None,
    ):
        self._loan_repo = loan_repository
        self._borrower_repo = borrower_repository
        self._publisher = publisher

    async def create_loan(self, request: CreateLoanRequest) -> LoanSubmissionResult:
        """
        Create a pending loan and submit it for asynchronous approval.

        Args:
            request: The loan request with borrower_id, amount and term

        Returns:
            LoanSubmissionResult telling whether the approval queue took it

        Raises:
            InvalidLoanRequestException: If request validation fails
        """
        errors = request.validate()
        if errors:
            raise InvalidLoanRequestException("; ".join(errors))

        loan = Loan(
            id=await self._loan_repo.next_id(),
            borrower_id=request.borrower_id,
            amount=request.amount,
            term=request.term,
        )
        await self._loan_repo.save(loan)

        log = logger.bind(
            loan_id=loan.id,
            borrower_id=loan.borrower_id,
            amount=str(loan.amount),
            term=loan.term,
        )
        log.info("loan_created")

        queued = await self._submit_for_approval(loan)

        if queued:
            return LoanSubmissionResult(
                loan=LoanResponse.from_entity(loan),
                queued=True,
                message="Loan created and submitted for approval",
                info="Loan approval is being processed asynchronously",
            )

        loan.approval_status = ApprovalStatus.MANUAL_APPROVAL_REQUIRED
        await self._loan_repo.save(loan)
        log.warning("loan_requires_manual_approval")

        return LoanSubmissionResult(
            loan=LoanResponse.from_entity(loan),
            queued=False,
            message="Loan created (approval queue unavailable)",
            warning="Loan will require manual approval",
        )

    async def list_loans(
        self,
        status: Optional[LoanStatus] = None,
        borrower_id: Optional[int] = None,
    ) -> list[LoanResponse]:
        loans = await self._loan_repo.list(status=status, borrower_id=borrower_id)
        return [LoanResponse.from_entity(loan) for loan in loans]

    async def get_loan(self, loan_id: int) -> LoanResponse:
        """
        Retrieve a loan by ID.

        Raises:
            LoanNotFoundException: If the loan does not exist
        """
        loan = await self._get_or_raise(loan_id)
        return LoanResponse.from_entity(loan)

    async def update_loan(self, loan_id: int, request: UpdateLoanRequest) -> LoanResponse:
        """
        Apply a partial update, e.g. recording a manual approval.

        Raises:
            InvalidLoanRequestException: If request validation fails
            LoanNotFoundException: If the loan does not exist
        """
        errors = request.validate()
        if errors:
            raise InvalidLoanRequestException("; ".join(errors))

        loan = await self._get_or_raise(loan_id)

        loan.status = request.status or loan.status
        loan.approval_status = request.approval_status or loan.approval_status
        loan.amount = request.amount or loan.amount
        loan.term = request.term or loan.term
        loan.updated_at = utcnow()

        await self._loan_repo.save(loan)

        logger.info(
            "loan_updated",
            loan_id=loan_id,
            status=loan.status.value,
            approval_status=loan.approval_status.value,
        )
        return LoanResponse.from_entity(loan)

    async def delete_loan(self, loan_id: int) -> LoanResponse:
        """
        Delete a loan.

        Raises:
            LoanNotFoundException: If the loan does not exist
        """
        loan = await self._loan_repo.delete(loan_id)
        if loan is None:
            raise LoanNotFoundException(loan_id)

        logger.info("loan_deleted", loan_id=loan_id)
        return LoanResponse.from_entity(loan)

    async def _submit_for_approval(self, loan: Loan) -> bool:
        """Hand the loan to the approval pipeline; never raises."""
        if self._publisher is None or not self._publisher.is_connected:
            logger.warning(
                "approval_queue_unavailable",
                loan_id=loan.id,
            )
            return False

        borrower = await self._borrower_repo.get_by_id(loan.borrower_id)
        label = borrower.name if borrower else f"Borrower {loan.borrower_id}"

        approval_request = LoanApprovalRequest(
            id=loan.id,
            borrower_id=loan.borrower_id,
            borrower_label=label,
            amount=loan.amount,
            term=loan.term,
            submitted_at=loan.created_at,
        )

        try:
            return await self._publisher.submit(approval_request)
        except Exception as e:
            logger.error(
                "approval_submit_failed",
                loan_id=loan.id,
                error=str(e),
                error_type=type(e).__name__,
            )
            return False

    async def _get_or_raise(self, loan_id: int) -> Loan:
        loan = await self._loan_repo.get_by_id(loan_id)
        if loan is None:
            logger.warning("loan_not_found", loan_id=loan_id)
            raise LoanNotFoundException(loan_id)
        return loan
