"""
Module 01 - Schemas
File: __init__.py

Purpose: Export the public API for the schemas module.
This is the main entry point for other modules to import schema definitions.
"""

# Error models and exceptions
from .errors import (
    EmptyLeafSetException,
    ErrorCodes,
    IndexOutOfRangeException,
    InvalidRecordException,
    MerkleDropError,
    MerkleDropException,
    SchemaValidationException,
)

# Eligibility records
from .records import (
    ADDRESS_SIZE,
    MAX_UINT256,
    EligibilityRecord,
    normalize_address,
    parse_record,
    validate_amount,
)

# Published distribution document
from .distribution import (
    DistributionDocument,
    RecipientEntry,
)

# Verification results
from .verification import (
    CheckResult,
    CheckSeverity,
    VerificationResult,
)

__all__ = [
    # Errors
    "ErrorCodes",
    "MerkleDropError",
    "MerkleDropException",
    "InvalidRecordException",
    "EmptyLeafSetException",
    "IndexOutOfRangeException",
    "SchemaValidationException",
    # Records
    "ADDRESS_SIZE",
    "MAX_UINT256",
    "EligibilityRecord",
    "normalize_address",
    "validate_amount",
    "parse_record",
    # Distribution
    "DistributionDocument",
    "RecipientEntry",
    # Verification
    "CheckSeverity",
    "CheckResult",
    "VerificationResult",
]
