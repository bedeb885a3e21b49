"""
Module 02 - Hashing Utilities
Keccak-256 hashing and hex helpers for airdrop commitments.

Owner: Protocol/Crypto Engineer
Module ID: M02

This module provides:
- Keccak-256 hashing for raw bytes (the EVM hash, NOT hashlib.sha3_256)
- Sorted-pair hashing used to combine Merkle siblings
- Hex encoding/decoding with 0x prefix

Security/Determinism Notes:
- Always hash raw bytes exactly as specified
- Pair ordering compares hashes as unsigned big-endian integers, which for
  equal-length byte strings is plain lexicographic byte comparison
- All operations are deterministic
"""
from __future__ import annotations

from eth_utils import keccak


# Width of every leaf, node and root hash
HASH_SIZE: int = 32


def keccak256(data: bytes) -> bytes:
    """
    Compute the Keccak-256 hash of raw bytes.

    This is the hash used by Solidity's ``keccak256`` builtin. It differs
    from the standardized SHA3-256 in its padding, so ``hashlib.sha3_256``
    must never be substituted for it.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte Keccak-256 digest

    Example:
        >>> keccak256(b"").hex()
        'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'
    """
    return keccak(primitive=data)


def hash_bytes(data: bytes) -> bytes:
    """Alias for keccak256()."""
    return keccak256(data)


def hash_sorted_pair(a: bytes, b: bytes) -> bytes:
    """
    Hash two sibling hashes in ascending order.

    parent = keccak256(min(a, b) + max(a, b))

    The result does not depend on which argument was the left child,
    so a verifier only needs the sibling value, never its position.

    Args:
        a: One child hash (32 bytes)
        b: The other child hash (32 bytes)

    Returns:
        32-byte parent hash
    """
    if b < a:
        a, b = b, a
    return keccak256(a + b)


def is_hash32(value: object) -> bool:
    """Return True if value is a bytes object of exactly 32 bytes."""
    return isinstance(value, (bytes, bytearray)) and len(value) == HASH_SIZE


def to_hex(data: bytes) -> str:
    """
    Convert bytes to a lowercase hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + bytes(data).hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Args:
        hex_string: Hex string with 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not isinstance(hex_string, str):
        raise ValueError(f"Hex value must be a string, got {type(hex_string).__name__}")

    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


def hash32_from_hex(hex_string: str) -> bytes:
    """
    Decode a 0x-prefixed hex string that must hold exactly 32 bytes.

    Raises:
        ValueError: If the string is malformed or not 32 bytes long
    """
    data = from_hex(hex_string)
    if len(data) != HASH_SIZE:
        raise ValueError(
            f"Expected {HASH_SIZE}-byte hash, got {len(data)} bytes"
        )
    return data


__all__ = [
    "HASH_SIZE",
    "keccak256",
    "hash_bytes",
    "hash_sorted_pair",
    "is_hash32",
    "to_hex",
    "from_hex",
    "hash32_from_hex",
]
