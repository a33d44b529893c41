"""Borrower service - handles borrower registry use cases."""

import structlog

from loan_gateway.application.dto import (
    BorrowerResponse,
    CreateBorrowerRequest,
    UpdateBorrowerRequest,
)
from loan_gateway.domain.entities import Borrower
from loan_gateway.domain.exceptions import (
    BorrowerNotFoundException,
    DuplicateBorrowerException,
    InvalidBorrowerRequestException,
)
from loan_gateway.domain.interfaces import BorrowerRepository
from loan_gateway.utils.date_utils import utcnow

logger = structlog.get_logger(__name__)


class BorrowerService:
    """
    Application service for borrower use cases.
    """

    def __init__(self, borrower_repository: BorrowerRepository):
        self._borrower_repo = borrower_repository

    async def list_borrowers(self) -> list[BorrowerResponse]:
        borrowers = await self._borrower_repo.list()
        return [BorrowerResponse.from_entity(b) for b in borrowers]

    async def get_borrower(self, borrower_id: int) -> BorrowerResponse:
        """
        Retrieve a borrower by ID.

        Raises:
            BorrowerNotFoundException: If the borrower does not exist
        """
        borrower = await self._get_or_raise(borrower_id)
        return BorrowerResponse.from_entity(borrower)

    async def create_borrower(self, request: CreateBorrowerRequest) -> BorrowerResponse:
        """
        Register a new borrower.

        Raises:
            InvalidBorrowerRequestException: If request validation fails
            DuplicateBorrowerException: If the email is already registered
        """
        errors = request.validate()
        if errors:
            raise InvalidBorrowerRequestException("; ".join(errors))

        if await self._borrower_repo.get_by_email(request.email) is not None:
            raise DuplicateBorrowerException(request.email)

        borrower = Borrower(
            id=await self._borrower_repo.next_id(),
            name=request.name.strip(),
            email=request.email.strip(),
            phone=request.phone,
            address=request.address,
        )
        await self._borrower_repo.save(borrower)

        logger.info("borrower_created", borrower_id=borrower.id)
        return BorrowerResponse.from_entity(borrower)

    async def update_borrower(
        self,
        borrower_id: int,
        request: UpdateBorrowerRequest,
    ) -> BorrowerResponse:
        """
        Apply a partial update to a borrower.

        Raises:
            BorrowerNotFoundException: If the borrower does not exist
            DuplicateBorrowerException: If the new email belongs to someone else
        """
        borrower = await self._get_or_raise(borrower_id)

        if request.email and request.email.lower() != borrower.email.lower():
            existing = await self._borrower_repo.get_by_email(request.email)
            if existing is not None and existing.id != borrower_id:
                raise DuplicateBorrowerException(request.email)

        borrower.name = request.name or borrower.name
        borrower.email = request.email or borrower.email
        if request.phone is not None:
            borrower.phone = request.phone
        if request.address is not None:
            borrower.address = request.address
        borrower.updated_at = utcnow()

        await self._borrower_repo.save(borrower)

        logger.info("borrower_updated", borrower_id=borrower_id)
        return BorrowerResponse.from_entity(borrower)

    async def delete_borrower(self, borrower_id: int) -> BorrowerResponse:
        """
        Delete a borrower.

        Raises:
            BorrowerNotFoundException: If the borrower does not exist
        """
        borrower = await self._borrower_repo.delete(borrower_id)
        if borrower is None:
            raise BorrowerNotFoundException(borrower_id)

        logger.info("borrower_deleted", borrower_id=borrower_id)
        return BorrowerResponse.from_entity(borrower)

    async def _get_or_raise(self, borrower_id: int) -> Borrower:
        borrower = await self._borrower_repo.get_by_id(borrower_id)
        if borrower is None:
            logger.warning("borrower_not_found", borrower_id=borrower_id)
            raise BorrowerNotFoundException(borrower_id)
        return borrower
