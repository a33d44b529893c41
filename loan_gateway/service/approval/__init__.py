"""
Loan Approval Policy Module
"""

from .policy import (
    APPROVAL_THRESHOLD,
    ApprovalPolicy,
    PolicyResult,
    ThresholdApprovalPolicy,
    decide,
    evaluate,
)
from .settings import ApprovalSettings, approval_settings

__all__ = [
    # Settings
    "ApprovalSettings",
    "approval_settings",
    # Policy
    "APPROVAL_THRESHOLD",
    "ApprovalPolicy",
    "PolicyResult",
    "ThresholdApprovalPolicy",
    "decide",
    "evaluate",
]
