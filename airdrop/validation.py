"""
Module 03 - Airdrop Distribution
File: validation.py

Purpose: Offline consistency checks for a published distribution document.

The document is recomputed from its own recipient list, then compared
with what it claims. Every discrepancy is reported as a failed
CheckResult; nothing here raises on a bad document.
"""

from __future__ import annotations

import logging

from core.crypto.hashing import hash32_from_hex, to_hex
from core.merkle import build_commitment, leaf_for_record, verify_proof
from core.schemas.distribution import DistributionDocument
from core.schemas.errors import ErrorCodes, MerkleDropException
from core.schemas.records import EligibilityRecord
from core.schemas.verification import CheckResult, VerificationResult


logger = logging.getLogger(__name__)


def _check_duplicates(records: list[EligibilityRecord]) -> CheckResult:
    first_amounts: dict[str, int] = {}
    repeated: set[str] = set()
    conflicting: set[str] = set()
    for record in records:
        first = first_amounts.get(record.address)
        if first is None:
            first_amounts[record.address] = record.amount
        elif first == record.amount:
            repeated.add(record.address)
        else:
            conflicting.add(record.address)

    if conflicting:
        return CheckResult.failed(
            "recipients_unique",
            f"{len(conflicting)} addresses listed with conflicting amounts",
            details={
                "code": ErrorCodes.INVALID_RECORD,
                "reason": "conflicting_duplicate",
                "addresses": sorted(conflicting),
            },
        )
    if repeated:
        return CheckResult.warning(
            "recipients_unique",
            f"{len(repeated)} addresses listed more than once with the same amount",
            details={"addresses": sorted(repeated)},
        )
    return CheckResult.passed("recipients_unique", "Every address is listed once")


def _check_root(document: DistributionDocument, records: list[EligibilityRecord]) -> CheckResult:
    leaves = [leaf_for_record(r) for r in records]
    computed = to_hex(build_commitment(leaves).root)
    if computed != document.root:
        return CheckResult.failed(
            "root_matches_recipients",
            "Published root does not match the recipient list",
            details={
                "code": ErrorCodes.ROOT_MISMATCH,
                "expected": computed,
                "actual": document.root,
            },
        )
    return CheckResult.passed("root_matches_recipients", "Root matches recipient list")


def _check_leaf_lookup(
    document: DistributionDocument,
    records: list[EligibilityRecord],
) -> CheckResult:
    expected: dict[str, str] = {}
    for record in records:
        expected.setdefault(record.address, to_hex(leaf_for_record(record)))

    mismatched = sorted(
        address
        for address, leaf in document.leaf_lookup.items()
        if expected.get(address) != leaf
    )
    missing = sorted(set(expected) - set(document.leaf_lookup))
    if mismatched or missing:
        return CheckResult.failed(
            "leaf_lookup_matches",
            f"{len(mismatched)} leaf mismatches, {len(missing)} recipients without a leaf",
            details={
                "code": ErrorCodes.LEAF_HASH_MISMATCH,
                "mismatched": mismatched,
                "missing": missing,
            },
        )
    return CheckResult.passed("leaf_lookup_matches", "All leaves match their records")


def _check_proofs(
    document: DistributionDocument,
    records: list[EligibilityRecord],
) -> CheckResult:
    root = hash32_from_hex(document.root)
    amounts: dict[str, int] = {}
    for record in records:
        amounts.setdefault(record.address, record.amount)

    invalid: list[str] = []
    for address in sorted(amounts):
        proof = document.proofs.get(address)
        if proof is None:
            invalid.append(address)
            continue
        leaf = leaf_for_record(EligibilityRecord(address=address, amount=amounts[address]))
        siblings = [hash32_from_hex(p) for p in proof]
        if not verify_proof(leaf, siblings, root):
            invalid.append(address)

    unknown = sorted(set(document.proofs) - set(amounts))
    if invalid or unknown:
        return CheckResult.failed(
            "proofs_verify",
            f"{len(invalid)} recipients without a valid proof, "
            f"{len(unknown)} proofs for unknown addresses",
            details={
                "code": ErrorCodes.PROOF_INVALID,
                "invalid": invalid,
                "unknown": unknown,
            },
        )
    return CheckResult.passed(
        "proofs_verify",
        f"All {len(amounts)} proofs verify against the root",
    )


def validate_document(document: DistributionDocument) -> VerificationResult:
    """
    Check that a distribution document is internally consistent.

    Checks:
    - recipients_unique: exact repeats warn, conflicting amounts fail
    - root_matches_recipients: rebuilding from recipients gives the same root
    - leaf_lookup_matches: every published leaf equals the recomputed leaf
    - proofs_verify: every recipient's published proof verifies

    Returns:
        VerificationResult; ok is False if any check failed
    """
    records = [
        EligibilityRecord(address=entry.address, amount=entry.amount)
        for entry in document.recipients
    ]
    if not records:
        return VerificationResult(
            ok=False,
            checks=[
                CheckResult.failed(
                    "recipients_present",
                    "Document has no recipients",
                    details={"code": ErrorCodes.EMPTY_LEAF_SET},
                )
            ],
        )

    try:
        checks = [
            _check_duplicates(records),
            _check_root(document, records),
            _check_leaf_lookup(document, records),
            _check_proofs(document, records),
        ]
    except MerkleDropException as e:
        logger.warning("Document validation aborted: %s", e.message)
        return VerificationResult.from_error(e.to_error_model())

    result = VerificationResult.from_checks(checks)
    if not result.ok:
        logger.warning(
            "Distribution document failed %d checks: %s",
            result.error_count,
            "; ".join(result.get_error_messages()),
        )
    return result


__all__ = [
    "validate_document",
]
