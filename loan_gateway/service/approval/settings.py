"""
Approval Settings for the loan approval policy.

Environment variables use the APPROVAL_ prefix:
    APPROVAL_THRESHOLD=50000

Usage:
    from loan_gateway.service.approval.settings import approval_settings

    policy = ThresholdApprovalPolicy(approval_settings.threshold)
"""

from decimal import Decimal
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ApprovalSettings(BaseSettings):
    """
    Configurable parameters for the approval policy.

    All monetary values are in whole currency units.
    """

    model_config = SettingsConfigDict(
        env_prefix="APPROVAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    threshold: Decimal = Field(
        default=Decimal("50000"),
        gt=0,
        description="Largest amount approved automatically (inclusive)",
    )


@lru_cache
def get_approval_settings() -> ApprovalSettings:
    """Get cached approval settings instance."""
    return ApprovalSettings()


approval_settings = get_approval_settings()
