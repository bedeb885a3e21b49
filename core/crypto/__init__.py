"""
Core cryptographic utilities.

Module 02 provides Keccak-256 hashing and hex helpers.
"""
from .hashing import (
    HASH_SIZE,
    keccak256,
    hash_bytes,
    hash_sorted_pair,
    is_hash32,
    to_hex,
    from_hex,
    hash32_from_hex,
)

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
