"""Borrower-related Pydantic schemas."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BorrowerCreateSchema(BaseModel):
    """Schema for POST /v1/borrowers request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "name": "Juan Dela Cruz",
                    "email": "juan@email.com",
                    "phone": "09171234567",
                    "address": "Manila, Philippines",
                }
            ]
        }
    )
    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Borrower's full name",
    )
    email: str = Field(
        ...,
        min_length=3,
        max_length=255,
        description="Contact email, unique across borrowers",
    )
    phone: Optional[str] = Field(None, max_length=64)
    address: Optional[str] = Field(None, max_length=500)

    @field_validator("name", "email")
    @classmethod
    def not_blank(cls, v: str) -> str:
        """Reject whitespace-only values."""
        if not v.strip():
            raise ValueError("must not be empty or whitespace")
        return v.strip()


class BorrowerUpdateSchema(BaseModel):
    """Schema for PUT /v1/borrowers/{id}; omitted fields are unchanged."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[str] = Field(None, min_length=3, max_length=255)
    phone: Optional[str] = Field(None, max_length=64)
    address: Optional[str] = Field(None, max_length=500)


class BorrowerSchema(BaseModel):
    """Schema for a borrower in responses."""

    id: int = Field(..., description="Borrower ID")
    name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    created_at: str = Field(..., description="ISO 8601 creation timestamp")
    updated_at: Optional[str] = Field(None, description="ISO 8601 last update timestamp")


class BorrowerListResponseSchema(BaseModel):
    """Schema for GET /v1/borrowers response."""

    count: int = Field(..., ge=0)
    borrowers: list[BorrowerSchema]
