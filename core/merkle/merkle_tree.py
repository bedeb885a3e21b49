"""
Module 02 - Merkle Tree Implementation
Sorted-pair Merkle commitment: build, proof generation, verification.

Owner: Protocol/Crypto Engineer
Module ID: M02

Canonical Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = keccak256(abi.encodePacked(address, uint256))
   - Implemented in core.merkle.leaf_encoder
2. Parent hashing: parent = keccak256(min(a, b) + max(a, b))
   - Siblings are ordered by value, not by position
3. Padding rule: the last node of an odd-sized level is paired with itself
4. Empty leaves: no root exists, EmptyLeafSetException
5. Single leaf: root = leaf, proof is empty

Determinism Notes:
- Leaves are never sorted; only each pair is ordered at combination time
- The same ordered leaf list always yields the same root and proof table
- Verification needs the sibling values only, never the leaf position,
  which is what OpenZeppelin's MerkleProof.verify expects on-chain
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Sequence

from core.crypto.hashing import HASH_SIZE, hash_sorted_pair, is_hash32
from core.schemas.errors import (
    EmptyLeafSetException,
    IndexOutOfRangeException,
    InvalidRecordException,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MerkleProof:
    """
    An inclusion proof for a single leaf.

    Attributes:
        leaf: The leaf hash being proven (32 bytes)
        index: The 0-based position of the leaf in the original leaf list
        siblings: Sibling hashes from the leaf level up to (excluding) the root
        root: The Merkle root this proof is against
    """
    leaf: bytes
    index: int
    siblings: tuple[bytes, ...]
    root: bytes

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError(f"Leaf index must be non-negative, got {self.index}")
        # Accept lists from callers, store a tuple
        object.__setattr__(self, "siblings", tuple(self.siblings))


def merkle_parent(a: bytes, b: bytes) -> bytes:
    """Combine two children with the sorted-pair rule."""
    return hash_sorted_pair(a, b)


def _check_leaves(leaves: Sequence[bytes]) -> list[bytes]:
    if len(leaves) == 0:
        raise EmptyLeafSetException()
    checked: list[bytes] = []
    for i, leaf in enumerate(leaves):
        if not is_hash32(leaf):
            raise InvalidRecordException(
                f"Leaf {i} must be {HASH_SIZE} bytes",
                row=i,
                details={"length": len(leaf) if isinstance(leaf, (bytes, bytearray)) else None},
            )
        checked.append(bytes(leaf))
    return checked


def _next_level(level: Sequence[bytes]) -> list[bytes]:
    parents: list[bytes] = []
    for i in range(0, len(level), 2):
        left = level[i]
        right = level[i + 1] if i + 1 < len(level) else left
        parents.append(merkle_parent(left, right))
    return parents


def _iter_levels(leaves: list[bytes]) -> Iterator[list[bytes]]:
    level = leaves
    yield level
    while len(level) > 1:
        level = _next_level(level)
        yield level


@dataclass(frozen=True)
class MerkleCommitment:
    """
    An immutable Merkle tree over a fixed leaf list.

    levels[0] holds the leaves in their given order and levels[-1]
    holds the single root. Any change to the recipient set means
    building a new commitment.

    Example:
        >>> commitment = build_commitment(leaves)
        >>> proof = commitment.proof(1)
        >>> verify_proof(leaves[1], proof.siblings, commitment.root)
        True
    """
    levels: tuple[tuple[bytes, ...], ...]

    @property
    def root(self) -> bytes:
        return self.levels[-1][0]

    @property
    def leaves(self) -> tuple[bytes, ...]:
        return self.levels[0]

    @property
    def leaf_count(self) -> int:
        return len(self.levels[0])

    @property
    def depth(self) -> int:
        """Number of levels from leaves to root, inclusive."""
        return len(self.levels)

    def proof(self, index: int) -> MerkleProof:
        """
        Generate the inclusion proof for the leaf at index.

        For each level below the root the sibling is the node at
        index ^ 1, or the node itself when it is the odd last one.

        Raises:
            IndexOutOfRangeException: If index is not an original leaf
        """
        if isinstance(index, bool) or not isinstance(index, int):
            raise IndexOutOfRangeException(index, self.leaf_count)
        if index < 0 or index >= self.leaf_count:
            raise IndexOutOfRangeException(index, self.leaf_count)

        siblings: list[bytes] = []
        position = index
        for level in self.levels[:-1]:
            sibling_position = position ^ 1
            if sibling_position < len(level):
                siblings.append(level[sibling_position])
            else:
                siblings.append(level[position])
            position //= 2

        return MerkleProof(
            leaf=self.leaves[index],
            index=index,
            siblings=tuple(siblings),
            root=self.root,
        )

    def proofs(self) -> list[MerkleProof]:
        """The proof table, one proof per leaf in leaf order."""
        return [self.proof(i) for i in range(self.leaf_count)]

    def verify(self, leaf: bytes, siblings: Sequence[bytes]) -> bool:
        """Verify a leaf and sibling path against this commitment's root."""
        return verify_proof(leaf, siblings, self.root)


def build_commitment(leaves: Sequence[bytes]) -> MerkleCommitment:
    """
    Build a sorted-pair Merkle commitment over leaves, in the given order.

    O(n) hashing, O(log n) depth. The whole tree is kept so that proofs
    can be served for every leaf.

    Raises:
        EmptyLeafSetException: If leaves is empty
        InvalidRecordException: If a leaf is not 32 bytes
    """
    checked = _check_leaves(leaves)
    levels = tuple(tuple(level) for level in _iter_levels(checked))
    commitment = MerkleCommitment(levels=levels)
    logger.debug(
        "Built commitment over %d leaves, depth %d",
        commitment.leaf_count,
        commitment.depth,
    )
    return commitment


def compute_merkle_root(leaves: Sequence[bytes]) -> bytes:
    """
    Compute the root without keeping the tree resident.

    Only the current level is held in memory. Produces the same root as
    build_commitment(leaves).root.

    Raises:
        EmptyLeafSetException: If leaves is empty
        InvalidRecordException: If a leaf is not 32 bytes
    """
    level = _check_leaves(leaves)
    while len(level) > 1:
        level = _next_level(level)
    return level[0]


def build_merkle_proof(leaves: Sequence[bytes], index: int) -> MerkleProof:
    """Build the tree over leaves and return the proof for index."""
    return build_commitment(leaves).proof(index)


def process_proof(leaf: bytes, siblings: Sequence[bytes]) -> bytes:
    """
    Recompute a candidate root from a leaf and its sibling path.

    Raises:
        ValueError: If the leaf or any sibling is not 32 bytes
    """
    if not is_hash32(leaf):
        raise ValueError("Leaf must be 32 bytes")
    computed = bytes(leaf)
    for sibling in siblings:
        if not is_hash32(sibling):
            raise ValueError("Proof elements must be 32 bytes")
        computed = merkle_parent(computed, bytes(sibling))
    return computed


def verify_proof(leaf: bytes, siblings: Sequence[bytes], root: bytes) -> bool:
    """
    Check that leaf is committed under root.

    Never raises: a malformed leaf, sibling or root is simply not a
    member and yields False.

    Returns:
        True iff the recomputed root equals root exactly (all 32 bytes)
    """
    if not is_hash32(root):
        return False
    try:
        computed = process_proof(leaf, siblings)
    except (TypeError, ValueError):
        return False
    return computed == bytes(root)


def verify_merkle_proof(proof: MerkleProof) -> bool:
    """Verify a MerkleProof against the root it carries."""
    return verify_proof(proof.leaf, proof.siblings, proof.root)


def compute_tree_depth(num_leaves: int) -> int:
    """
    Compute the depth of a tree with num_leaves leaves.

    Depth counts levels from leaves to root inclusive: one leaf has
    depth 1, two leaves depth 2, three leaves depth 3.

    Returns:
        Tree depth (0 for an empty tree)
    """
    if num_leaves <= 0:
        return 0

    depth = 1
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        depth += 1

    return depth


__all__ = [
    "MerkleProof",
    "MerkleCommitment",
    "merkle_parent",
    "build_commitment",
    "compute_merkle_root",
    "build_merkle_proof",
    "process_proof",
    "verify_proof",
    "verify_merkle_proof",
    "compute_tree_depth",
]
