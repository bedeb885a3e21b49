"""
Module 05 - API Response Models

Pydantic models for API response serialization.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from core.schemas.distribution import RecipientEntry


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "merkledrop-api"
    version: str = "v1"


class DistributionResponse(BaseModel):
    """Response for POST /distributions endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    root: str = Field(..., description="Merkle root to publish")
    recipients: list[RecipientEntry] = Field(default_factory=list)
    proofs: dict[str, list[str]] = Field(default_factory=dict)
    leaf_lookup: dict[str, str] = Field(default_factory=dict, alias="leafLookup")
    recipient_count: int = Field(..., description="Number of distinct addresses")
    token_total: str = Field(..., description="Tokens needed to fund every claim (decimal)")


class VerifyResponse(BaseModel):
    """Response for POST /verify endpoint."""

    ok: bool = Field(..., description="Whether the claim verifies against the root")
    leaf: str = Field(..., description="Leaf hash rebuilt from (address, amount)")


class ErrorDetail(BaseModel):
    """Detailed error information."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail = Field(..., description="Error details")
