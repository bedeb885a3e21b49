"""
Module 01 - Schemas
File: distribution.py

Purpose: Published distribution document.

Wire format:
    {
      "root": "0x<64 hex>",
      "recipients": [{"address": "0x..", "amount": "<decimal>"}],
      "proofs": {"0x<address>": ["0x<64 hex>", ...]},
      "leafLookup": {"0x<address>": "0x<64 hex>"}
    }

All hashes are lowercase 0x hex of exactly 32 bytes. Amounts are decimal
strings so that values above 2**53 survive JavaScript consumers.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import InvalidRecordException
from .records import normalize_address, validate_amount


_HASH32_RE = re.compile(r"^0x[0-9a-f]{64}$")


def _check_hash_hex(value: str) -> str:
    if not isinstance(value, str) or not _HASH32_RE.match(value):
        raise ValueError(f"Expected lowercase 0x-prefixed 32-byte hex, got {value!r}")
    return value


def _check_address_hex(value: str) -> str:
    try:
        normalized = normalize_address(value)
    except InvalidRecordException as e:
        raise ValueError(e.message) from e
    # Published documents must already be normalized
    if normalized != value:
        raise ValueError(f"Address must be lowercase: {value!r}")
    return value


class RecipientEntry(BaseModel):
    """A recipient as published, with the amount as a decimal string."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    address: str
    amount: str

    @field_validator("address")
    @classmethod
    def _address(cls, v: str) -> str:
        return _check_address_hex(v)

    @field_validator("amount")
    @classmethod
    def _amount(cls, v: str) -> str:
        try:
            return str(validate_amount(v))
        except InvalidRecordException as e:
            raise ValueError(e.message) from e


class DistributionDocument(BaseModel):
    """Root, recipients and per-address proofs handed to claimers."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    root: str = Field(..., description="Merkle root published on-chain")
    recipients: list[RecipientEntry] = Field(default_factory=list)
    proofs: dict[str, list[str]] = Field(default_factory=dict)
    leaf_lookup: dict[str, str] = Field(default_factory=dict, alias="leafLookup")

    @field_validator("root")
    @classmethod
    def _root(cls, v: str) -> str:
        return _check_hash_hex(v)

    @field_validator("proofs")
    @classmethod
    def _proofs(cls, v: dict[str, list[str]]) -> dict[str, list[str]]:
        for address, proof in v.items():
            _check_address_hex(address)
            for element in proof:
                _check_hash_hex(element)
        return v

    @field_validator("leaf_lookup")
    @classmethod
    def _leaf_lookup(cls, v: dict[str, str]) -> dict[str, str]:
        for address, leaf in v.items():
            _check_address_hex(address)
            _check_hash_hex(leaf)
        return v

    def to_json_dict(self) -> dict:
        """Serialize using the published key names."""
        return self.model_dump(mode="json", by_alias=True)


__all__ = [
    "RecipientEntry",
    "DistributionDocument",
]
