"""
Module 02 - Leaf Encoding, Merkle Tree and Commitments
Sorted-pair Merkle commitment over airdrop eligibility records.

Owner: Protocol/Crypto Engineer
Module ID: M02

This module provides:
- encode_record / leaf_hash: abi.encodePacked(address, uint256) leaves
- MerkleCommitment: immutable tree with root and per-leaf proofs
- build_commitment: Build a commitment from leaf hashes
- verify_proof: Verify a sibling path against a root (never raises)

Canonical Commitment Rules:
1. Leaf hashing: keccak256(address(20) || amount(32, big-endian))
2. Parent hashing: keccak256(min(a, b) || max(a, b))
3. Padding: the last node of an odd level pairs with itself
4. Empty tree: EmptyLeafSetException
5. Single leaf: root = leaf

Usage:
    from core.merkle import build_commitment, leaf_hash, verify_proof

    leaves = [leaf_hash(r.address, r.amount) for r in records]
    commitment = build_commitment(leaves)

    proof = commitment.proof(2)
    assert verify_proof(leaves[2], proof.siblings, commitment.root)
"""
from .leaf_encoder import (
    ENCODED_RECORD_SIZE,
    LEAF_ABI_TYPES,
    LeafEncoder,
    encode_record,
    leaf_for_record,
    leaf_hash,
)

from .merkle_tree import (
    MerkleCommitment,
    MerkleProof,
    merkle_parent,
    build_commitment,
    compute_merkle_root,
    build_merkle_proof,
    process_proof,
    verify_proof,
    verify_merkle_proof,
    compute_tree_depth,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Leaf encoding
    "ENCODED_RECORD_SIZE",
    "LEAF_ABI_TYPES",
    "LeafEncoder",
    "encode_record",
    "leaf_for_record",
    "leaf_hash",
    # Core types
    "MerkleCommitment",
    "MerkleProof",
    # Core functions
    "merkle_parent",
    "build_commitment",
    "compute_merkle_root",
    "build_merkle_proof",
    "process_proof",
    "verify_proof",
    "verify_merkle_proof",
    "compute_tree_depth",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
