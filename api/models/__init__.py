"""API request and response models."""

from api.models.requests import DistributionRequest, VerifyRequest
from api.models.responses import (
    DistributionResponse,
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
    VerifyResponse,
)

__all__ = [
    "DistributionRequest",
    "VerifyRequest",
    "DistributionResponse",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    "VerifyResponse",
]
