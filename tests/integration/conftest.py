"""
Fixtures for integration tests.

Provides:
- Test client for FastAPI app with fresh in-memory stores
- A connected loan request producer on the in-memory broker
- A client whose approval queue is unavailable
- A client whose publisher raises on submit
"""

from typing import AsyncGenerator, Optional

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from loan_gateway.main import app
from loan_gateway.core.dependencies import (
    get_approval_publisher,
    get_borrower_repository,
    get_loan_repository,
)
from loan_gateway.domain.entities import LoanApprovalRequest
from loan_gateway.domain.interfaces import ApprovalRequestPublisher
from loan_gateway.infrastructure.messaging import LoanRequestProducer
from loan_gateway.infrastructure.repositories import (
    InMemoryBorrowerRepository,
    InMemoryLoanRepository,
)


# =============================================================================
# Repository Fixtures
# =============================================================================

@pytest.fixture
def borrower_repository() -> InMemoryBorrowerRepository:
    return InMemoryBorrowerRepository()


@pytest.fixture
def loan_repository() -> InMemoryLoanRepository:
    return InMemoryLoanRepository()


# =============================================================================
# Producer Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def producer(broker, test_settings) -> AsyncGenerator[LoanRequestProducer, None]:
    """A producer connected to the in-memory broker."""
    producer = LoanRequestProducer.from_settings(broker.channel(), test_settings)
    await producer.connect()
    yield producer
    await producer.close()


# =============================================================================
# Test Client Fixtures
# =============================================================================

async def _client_with(
    borrower_repository: InMemoryBorrowerRepository,
    loan_repository: InMemoryLoanRepository,
    publisher: Optional[ApprovalRequestPublisher],
) -> AsyncGenerator[AsyncClient, None]:
    # ASGITransport does not run the lifespan, so app.state is never populated
    app.dependency_overrides[get_borrower_repository] = lambda: borrower_repository
    app.dependency_overrides[get_loan_repository] = lambda: loan_repository
    app.dependency_overrides[get_approval_publisher] = lambda: publisher

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    # Clear overrides
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(
    borrower_repository,
    loan_repository,
    producer,
) -> AsyncGenerator[AsyncClient, None]:
    """Test client whose loans are queued on the in-memory broker."""
    async for ac in _client_with(borrower_repository, loan_repository, producer):
        yield ac


@pytest_asyncio.fixture
async def client_queue_unavailable(
    borrower_repository,
    loan_repository,
) -> AsyncGenerator[AsyncClient, None]:
    """Test client running without an approval queue."""
    async for ac in _client_with(borrower_repository, loan_repository, None):
        yield ac


class RaisingPublisher(ApprovalRequestPublisher):
    """A connected publisher whose transport fails mid-submit."""

    @property
    def is_connected(self) -> bool:
        return True

    async def submit(self, request: LoanApprovalRequest) -> bool:
        raise RuntimeError("No active transport in channel")


@pytest_asyncio.fixture
async def client_publisher_raising(
    borrower_repository,
    loan_repository,
) -> AsyncGenerator[AsyncClient, None]:
    """Test client whose publisher raises instead of returning False."""
    async for ac in _client_with(borrower_repository, loan_repository, RaisingPublisher()):
        yield ac


# =============================================================================
# Request Body Fixtures
# =============================================================================

@pytest.fixture
def borrower_payload() -> dict:
    return {
        "name": "Juan Dela Cruz",
        "email": "juan@email.com",
        "phone": "09171234567",
        "address": "Manila, Philippines",
    }


@pytest_asyncio.fixture
async def registered_borrower(client, borrower_payload) -> dict:
    """A borrower created through the API."""
    response = await client.post("/v1/borrowers", json=borrower_payload)
    assert response.status_code == 201
    return response.json()
