"""
Module 01 - Schemas
File: errors.py

Purpose: Standard error taxonomy for commitment building and proof handling.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.

Verification failures are NOT errors: verify functions return False.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Record & Schema Errors
    INVALID_RECORD = "INVALID_RECORD"
    SCHEMA_VALIDATION_ERROR = "SCHEMA_VALIDATION_ERROR"

    # Tree Construction Errors
    EMPTY_LEAF_SET = "EMPTY_LEAF_SET"
    INDEX_OUT_OF_RANGE = "INDEX_OUT_OF_RANGE"

    # Merkle & Commitment Check Failures (reported, never raised by verify)
    PROOF_INVALID = "PROOF_INVALID"
    ROOT_MISMATCH = "ROOT_MISMATCH"
    LEAF_HASH_MISMATCH = "LEAF_HASH_MISMATCH"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class MerkleDropError(BaseModel):
    """
    Base error model for structured error communication.

    Used to pass errors across the API boundary and inside verification
    results without raising.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.INVALID_RECORD],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class MerkleDropException(Exception):
    """
    Base exception for all commitment errors.

    Carries structured error information and can be converted
    a MerkleDropError model with to_error_model().
    """

    def __init__(
        self,
        message: str,
        code: str = "MERKLEDROP_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> MerkleDropError:
        """Convert this exception to a MerkleDropError model."""
        return MerkleDropError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class InvalidRecordException(MerkleDropException):
    """
    Raised when an (address, amount) record cannot be encoded.

    Fatal to that record. Inside a batch build it aborts the whole
    batch, since a commitment is published atomically or not at all.
    """

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        row: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_path:
            full_details["field_path"] = field_path
        if row is not None:
            full_details["row"] = row
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_RECORD,
            details=full_details,
            retryable=False,
        )


class EmptyLeafSetException(MerkleDropException):
    """Raised when a commitment is requested over zero leaves."""

    def __init__(
        self,
        message: str = "Cannot build a commitment from an empty leaf set",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_LEAF_SET,
            details=details,
            retryable=False,
        )


class IndexOutOfRangeException(MerkleDropException):
    """Raised when a proof is requested for a leaf index that does not exist."""

    def __init__(
        self,
        index: int,
        leaf_count: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["index"] = index
        full_details["leaf_count"] = leaf_count
        super().__init__(
            message=f"Leaf index {index} out of range for {leaf_count} leaves",
            code=ErrorCodes.INDEX_OUT_OF_RANGE,
            details=full_details,
            retryable=False,
        )


class SchemaValidationException(MerkleDropException):
    """Raised when a serialized document does not match its schema."""

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_path:
            full_details["field_path"] = field_path
        super().__init__(
            message=message,
            code=ErrorCodes.SCHEMA_VALIDATION_ERROR,
            details=full_details,
            retryable=False,
        )


__all__ = [
    "ErrorCodes",
    "MerkleDropError",
    "MerkleDropException",
    "InvalidRecordException",
    "EmptyLeafSetException",
    "IndexOutOfRangeException",
    "SchemaValidationException",
]
