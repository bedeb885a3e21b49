"""
Module 03 - Airdrop Distribution
File: distribution.py

Purpose: Turn a frozen list of eligibility records into a published root
plus an address-indexed proof table.

Flow:
    records -> leaf_for_record -> build_commitment -> AirdropDistribution
        .root_hex       -> handed to the on-chain "create airdrop" call
        .proof_for(a)   -> handed to recipient a for the "claim" call

The distribution never tracks claim state. Rejecting a replayed claim is
the consuming contract's job.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Sequence

from core.config import DistributionConfig
from core.crypto.hashing import to_hex
from core.merkle import MerkleCommitment, build_commitment, leaf_for_record, verify_proof
from core.schemas.distribution import DistributionDocument, RecipientEntry
from core.schemas.errors import InvalidRecordException
from core.schemas.records import EligibilityRecord, normalize_address, parse_record


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AirdropDistribution:
    """
    An immutable commitment over one airdrop's recipient list.

    Attributes:
        records: Records in commitment order (duplicates included)
        commitment: The Merkle tree over the records' leaves
        positions: Address -> index of the leaf whose proof is published
    """
    records: tuple[EligibilityRecord, ...]
    commitment: MerkleCommitment
    positions: Mapping[str, int] = field(repr=False)

    @property
    def root(self) -> bytes:
        return self.commitment.root

    @property
    def root_hex(self) -> str:
        return to_hex(self.commitment.root)

    @property
    def recipient_count(self) -> int:
        """Number of distinct addresses."""
        return len(self.positions)

    @property
    def token_total(self) -> int:
        """Tokens needed to fund every distinct claim."""
        return sum(self.records[i].amount for i in self.positions.values())

    def _position(self, address: Any) -> int | None:
        try:
            return self.positions.get(normalize_address(address))
        except InvalidRecordException:
            return None

    def is_eligible(self, address: Any) -> bool:
        return self._position(address) is not None

    def amount_for(self, address: Any) -> int | None:
        """Allocated amount for address, or None if not a recipient."""
        index = self._position(address)
        return None if index is None else self.records[index].amount

    def leaf_for(self, address: Any) -> bytes | None:
        index = self._position(address)
        return None if index is None else self.commitment.leaves[index]

    def proof_for(self, address: Any) -> tuple[bytes, ...] | None:
        """Sibling path for address, or None if not a recipient."""
        index = self._position(address)
        if index is None:
            return None
        return self.commitment.proof(index).siblings

    def verify_claim(self, address: Any, amount: Any, proof: Sequence[bytes]) -> bool:
        """
        Check a claim the way the claim contract would.

        The leaf is rebuilt from (address, amount); stored amounts are not
        consulted, so a wrong amount fails on the hash.
        """
        try:
            leaf = leaf_for_record(EligibilityRecord(address=address, amount=amount))
        except InvalidRecordException:
            return False
        return verify_proof(leaf, proof, self.root)

    def to_document(self) -> DistributionDocument:
        """Export the published JSON document."""
        proofs: dict[str, list[str]] = {}
        leaf_lookup: dict[str, str] = {}
        for address, index in self.positions.items():
            proof = self.commitment.proof(index)
            proofs[address] = [to_hex(s) for s in proof.siblings]
            leaf_lookup[address] = to_hex(proof.leaf)

        return DistributionDocument(
            root=self.root_hex,
            recipients=[
                RecipientEntry(address=r.address, amount=str(r.amount))
                for r in self.records
            ],
            proofs=proofs,
            leaf_lookup=leaf_lookup,
        )


def _index_records(
    records: Sequence[EligibilityRecord],
    config: DistributionConfig,
) -> dict[str, int]:
    positions: dict[str, int] = {}
    for i, record in enumerate(records):
        if config.require_positive_amounts and record.amount == 0:
            raise InvalidRecordException(
                f"Zero amount for {record.address}",
                field_path="amount",
                row=i,
            )

        first = positions.get(record.address)
        if first is None:
            positions[record.address] = i
            continue

        if config.reject_duplicate_addresses:
            raise InvalidRecordException(
                f"Duplicate address {record.address}",
                field_path="address",
                row=i,
                details={"reason": "duplicate_address", "first_row": first},
            )
        if records[first].amount != record.amount:
            raise InvalidRecordException(
                f"Conflicting amounts for {record.address}",
                field_path="amount",
                row=i,
                details={"reason": "conflicting_duplicate", "first_row": first},
            )
        logger.warning(
            "Duplicate record for %s at row %d (first at row %d); "
            "both encode to the same leaf",
            record.address, i, first,
        )
    return positions


def build_distribution(
    records: Iterable[EligibilityRecord | Mapping[str, Any]],
    config: DistributionConfig | None = None,
) -> AirdropDistribution:
    """
    Build the commitment and proof table for an airdrop.

    Records are committed in the order given. The batch is atomic: the
    first invalid record aborts the build.

    Args:
        records: EligibilityRecords or {"address", "amount"} mappings
        config: Policy for zero amounts and repeated addresses

    Raises:
        InvalidRecordException: For a malformed or policy-violating record
        EmptyLeafSetException: If there are no records
    """
    config = config or DistributionConfig()
    parsed = tuple(parse_record(r, row=i) for i, r in enumerate(records))
    positions = _index_records(parsed, config)

    leaves = [leaf_for_record(record) for record in parsed]
    commitment = build_commitment(leaves)

    distribution = AirdropDistribution(
        records=parsed,
        commitment=commitment,
        positions=MappingProxyType(positions),
    )
    logger.info(
        "Built distribution: %d records, %d recipients, depth %d, root %s",
        len(parsed),
        distribution.recipient_count,
        commitment.depth,
        distribution.root_hex,
    )
    return distribution


__all__ = [
    "AirdropDistribution",
    "build_distribution",
]
