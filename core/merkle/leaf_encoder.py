"""
Module 02 - Leaf Encoder
Deterministic (address, amount) -> leaf hash.

Owner: Protocol/Crypto Engineer
Module ID: M02

Leaf rule (must match the claim contract bit-for-bit):
    leaf = keccak256(abi.encodePacked(address account, uint256 amount))

The packed encoding is fixed width: 20 address bytes followed by the
32-byte big-endian amount, 52 bytes in total. A delimited or decimal
string concatenation is ambiguous ("..1" + "23" == "..12" + "3") and is
never used.
"""
from __future__ import annotations

from typing import Any

from eth_abi.packed import encode_packed
from eth_utils import to_canonical_address

from core.crypto.hashing import keccak256
from core.schemas.records import EligibilityRecord, normalize_address, validate_amount


# abi.encodePacked(address, uint256)
LEAF_ABI_TYPES: tuple[str, str] = ("address", "uint256")
ENCODED_RECORD_SIZE: int = 52


def encode_record(address: Any, amount: Any) -> bytes:
    """
    Serialize one record to its 52-byte packed form.

    Args:
        address: 0x hex string (any case) or 20 raw bytes
        amount: int or decimal string within uint256 range

    Returns:
        address (20 bytes) || amount (32 bytes, big-endian)

    Raises:
        InvalidRecordException: If address length or amount range is invalid
    """
    account = to_canonical_address(normalize_address(address))
    value = validate_amount(amount)
    return encode_packed(list(LEAF_ABI_TYPES), [account, value])


def leaf_hash(address: Any, amount: Any) -> bytes:
    """
    Compute the 32-byte leaf for an (address, amount) pair.

    Raises:
        InvalidRecordException: If address length or amount range is invalid
    """
    return keccak256(encode_record(address, amount))


def leaf_for_record(record: EligibilityRecord) -> bytes:
    """Compute the leaf for an already-validated EligibilityRecord."""
    return leaf_hash(record.address, record.amount)


class LeafEncoder:
    """
    Stateless encoder kept as a class for callers that want to inject a
    leaf rule.

    Example:
        >>> encoder = LeafEncoder()
        >>> leaf = encoder.encode(record)
        >>> len(leaf)
        32
    """

    abi_types: tuple[str, str] = LEAF_ABI_TYPES

    def encode(self, record: EligibilityRecord) -> bytes:
        return leaf_for_record(record)

    def encode_many(self, records: list[EligibilityRecord]) -> list[bytes]:
        """Encode records in order. The first invalid record aborts the batch."""
        return [self.encode(record) for record in records]


__all__ = [
    "LEAF_ABI_TYPES",
    "ENCODED_RECORD_SIZE",
    "encode_record",
    "leaf_hash",
    "leaf_for_record",
    "LeafEncoder",
]
