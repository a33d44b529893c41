from fastapi import APIRouter

from .borrowers import borrower_router
from .loans import loan_router
from .health import health_router

router = APIRouter()

router.include_router(health_router, tags=["Health"])
router.include_router(borrower_router, tags=["Borrowers"])
router.include_router(loan_router, tags=["Loans"])
