"""
Module 02 - Merkle Proofs Convenience Wrappers
Thin wrappers around the commitment functions, working from records.

Owner: Protocol/Crypto Engineer
Module ID: M02

This module provides class-based interfaces:
- MerkleProver: Generate proofs for leaves or eligibility records
- MerkleVerifier: Verify proofs, including claim-style verification that
  re-derives the leaf from (address, amount) the way the claim contract
  does from (msg.sender, amount)
"""
from __future__ import annotations

from typing import Any, Sequence

from core.merkle.leaf_encoder import leaf_for_record, leaf_hash
from core.merkle.merkle_tree import (
    MerkleProof,
    build_commitment,
    build_merkle_proof,
    verify_merkle_proof,
    verify_proof,
)
from core.schemas.errors import InvalidRecordException
from core.schemas.records import EligibilityRecord


class MerkleProver:
    """
    Convenience class for generating Merkle proofs.

    Example:
        >>> proof = MerkleProver.prove_record(records, index=1)
        >>> proof.leaf == leaf_for_record(records[1])
        True
    """

    @staticmethod
    def prove(leaves: Sequence[bytes], index: int) -> MerkleProof:
        """
        Generate a Merkle proof for the leaf at the given index.

        Raises:
            EmptyLeafSetException: If leaves is empty
            IndexOutOfRangeException: If index is out of range
        """
        return build_merkle_proof(leaves, index)

    @staticmethod
    def prove_record(records: Sequence[EligibilityRecord], index: int) -> MerkleProof:
        """
        Generate a Merkle proof for the record at the given index.

        Records are first encoded to leaves with the packed leaf rule.

        Raises:
            EmptyLeafSetException: If records is empty
            IndexOutOfRangeException: If index is out of range
        """
        leaves = [leaf_for_record(record) for record in records]
        return build_merkle_proof(leaves, index)

    @staticmethod
    def compute_root(records: Sequence[EligibilityRecord]) -> bytes:
        """Compute the 32-byte root for a sequence of records."""
        leaves = [leaf_for_record(record) for record in records]
        return build_commitment(leaves).root


class MerkleVerifier:
    """
    Convenience class for verifying Merkle proofs.

    All methods return booleans and never raise on bad input.
    """

    @staticmethod
    def verify(proof: MerkleProof) -> bool:
        return verify_merkle_proof(proof)

    @staticmethod
    def verify_leaf_in_root(
        leaf: bytes,
        siblings: Sequence[bytes],
        root: bytes,
    ) -> bool:
        """Verify a leaf is included in a Merkle root using raw components."""
        return verify_proof(leaf, siblings, root)

    @staticmethod
    def verify_claim(
        address: Any,
        amount: Any,
        siblings: Sequence[bytes],
        root: bytes,
    ) -> bool:
        """
        Pre-validate a claim before submitting it on-chain.

        The leaf is recomputed from the claimant's address and amount, so
        a proof borrowed from another recipient or replayed with a
        different amount fails here exactly as it would in the contract.

        Returns:
            True if (address, amount) is committed under root
        """
        try:
            leaf = leaf_hash(address, amount)
        except InvalidRecordException:
            return False
        return verify_proof(leaf, siblings, root)


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
]
