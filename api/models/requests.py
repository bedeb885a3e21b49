"""
Module 05 - API Request Models

Pydantic models for API request validation.

Recipient records are accepted as raw mappings so that record errors
surface with the INVALID_RECORD code and row number instead of a
generic 422.
"""

from typing import Any

from pydantic import BaseModel, Field


class DistributionRequest(BaseModel):
    """Request body for POST /distributions endpoint."""

    recipients: list[dict[str, Any]] = Field(
        ...,
        description="Eligibility records: [{address, amount}] in commitment order",
    )
    skip_invalid: bool | None = Field(
        default=None,
        description="Drop invalid records instead of rejecting the request (default: server config)",
    )


class VerifyRequest(BaseModel):
    """Request body for POST /verify endpoint."""

    root: str = Field(..., description="Published root (0x + 64 hex)")
    address: str = Field(..., description="Claimant address")
    # Left untyped: validate_amount owns the int/decimal-string rule
    amount: Any = Field(..., description="Claimed amount (decimal string or integer)")
    proof: list[str] = Field(default_factory=list, description="Sibling hashes, leaf level first")
