"""
Module 01 - Schemas
File: records.py

Purpose: Eligibility record schema and boundary validation.

An eligibility record is one (address, amount) pair produced by an
external eligibility engine. Amounts are arbitrary-precision integers
bounded by the on-chain uint256 width. Loosely-typed input (decimal
strings vs numbers) is parsed here once, and anything that does not
parse cleanly is rejected with InvalidRecordException.
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import InvalidRecordException


ADDRESS_SIZE = 20
MAX_UINT256 = 2**256 - 1

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")
_DECIMAL_RE = re.compile(r"^[0-9]+$")


def normalize_address(value: Any) -> str:
    """
    Normalize an account address to lowercase 0x-prefixed hex.

    Accepts a 0x-prefixed 40-character hex string in any case, or the raw
    20 address bytes. Checksum casing is not enforced; it is discarded.

    Raises:
        InvalidRecordException: If the value is not a 20-byte address
    """
    if isinstance(value, (bytes, bytearray)):
        if len(value) != ADDRESS_SIZE:
            raise InvalidRecordException(
                f"Address must be {ADDRESS_SIZE} bytes, got {len(value)}",
                field_path="address",
            )
        return "0x" + bytes(value).hex()

    if not isinstance(value, str):
        raise InvalidRecordException(
            f"Address must be a hex string, got {type(value).__name__}",
            field_path="address",
        )

    candidate = value.strip()
    if not _ADDRESS_RE.match(candidate):
        raise InvalidRecordException(
            f"Invalid address: {value!r}",
            field_path="address",
        )
    return candidate.lower()


def validate_amount(value: Any) -> int:
    """
    Parse a token amount into a uint256-bounded integer.

    Accepts an int (bool excluded) or a string of decimal digits.
    Floats, signs, hex and exponent notation are rejected rather than
    coerced.

    Raises:
        InvalidRecordException: If the value is not a valid uint256
    """
    if isinstance(value, bool):
        raise InvalidRecordException(
            "Amount must be an integer, got bool",
            field_path="amount",
        )

    if isinstance(value, int):
        amount = value
    elif isinstance(value, str):
        candidate = value.strip()
        if not _DECIMAL_RE.match(candidate):
            raise InvalidRecordException(
                f"Amount must be a non-negative decimal integer string, got {value!r}",
                field_path="amount",
            )
        amount = int(candidate)
    else:
        raise InvalidRecordException(
            f"Amount must be an integer or decimal string, got {type(value).__name__}",
            field_path="amount",
        )

    if amount < 0:
        raise InvalidRecordException(
            f"Amount must be non-negative, got {amount}",
            field_path="amount",
        )
    if amount > MAX_UINT256:
        raise InvalidRecordException(
            "Amount exceeds uint256 range",
            field_path="amount",
            details={"amount": str(amount)},
        )
    return amount


class EligibilityRecord(BaseModel):
    """
    One recipient of an airdrop.

    Immutable. The address is stored normalized (lowercase 0x hex) so
    that two spellings of the same account compare and encode equal.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    address: str = Field(..., description="Recipient account, lowercase 0x hex")
    amount: int = Field(..., description="Token quantity in base units (uint256)")

    @field_validator("address", mode="before")
    @classmethod
    def _normalize_address(cls, v: Any) -> str:
        return normalize_address(v)

    @field_validator("amount", mode="before")
    @classmethod
    def _validate_amount(cls, v: Any) -> int:
        return validate_amount(v)

    def to_json_dict(self) -> dict[str, str]:
        """Serialize with the amount as a decimal string."""
        return {"address": self.address, "amount": str(self.amount)}


def parse_record(data: Any, row: int | None = None) -> EligibilityRecord:
    """
    Build an EligibilityRecord from a JSON-like mapping.

    Args:
        data: Mapping with "address" and "amount" keys
        row: Optional position of the record in its source, for error details

    Raises:
        InvalidRecordException: For any malformed record
    """
    if isinstance(data, EligibilityRecord):
        return data
    if not isinstance(data, dict):
        raise InvalidRecordException(
            f"Record must be an object, got {type(data).__name__}",
            row=row,
        )

    try:
        return EligibilityRecord.model_validate(data)
    except InvalidRecordException as e:
        if row is not None:
            e.details["row"] = row
        raise
    except ValidationError as e:
        first = e.errors()[0]
        field_path = ".".join(str(p) for p in first.get("loc", ()))
        raise InvalidRecordException(
            f"Invalid record: {first.get('msg', 'validation failed')}",
            field_path=field_path or None,
            row=row,
        ) from e


__all__ = [
    "ADDRESS_SIZE",
    "MAX_UINT256",
    "EligibilityRecord",
    "normalize_address",
    "validate_amount",
    "parse_record",
]
