"""
Module 03 - Airdrop Distribution Tests
Tests for airdrop/distribution.py

Tests:
1. Root and proofs match the commitment core
2. Duplicate policy (exact duplicate, conflicting amount, strict mode)
3. Lookups by address, including unknown and malformed addresses
4. Document export
"""
import logging

import pytest

from airdrop import AirdropDistribution, build_distribution
from core.config import DistributionConfig
from core.crypto.hashing import to_hex
from core.merkle import build_commitment, leaf_for_record, leaf_hash
from core.schemas.errors import (
    EmptyLeafSetException,
    ErrorCodes,
    InvalidRecordException,
)
from core.schemas.records import EligibilityRecord

from fixtures.common import ADDR_A, ADDR_B, ADDR_C, make_records


class TestBuildDistribution:

    def test_root_matches_core(self, scenario_records):
        dist = build_distribution(scenario_records)
        leaves = [leaf_for_record(r) for r in scenario_records]

        assert isinstance(dist, AirdropDistribution)
        assert dist.root == build_commitment(leaves).root
        assert dist.root_hex == to_hex(dist.root)

    def test_scenario_root_known_answer(self, distribution):
        assert distribution.root_hex == "0x7a2ec01f1dd2fba983e7386a14724122af0bd28208f525e44fdb033cac88f63b"

    def test_accepts_mappings(self):
        dist = build_distribution([
            {"address": ADDR_A, "amount": "100"},
            {"address": ADDR_B, "amount": 50},
        ])
        assert dist.amount_for(ADDR_B) == 50

    def test_empty_raises(self):
        with pytest.raises(EmptyLeafSetException):
            build_distribution([])

    def test_invalid_record_aborts_with_row(self):
        with pytest.raises(InvalidRecordException) as exc_info:
            build_distribution([
                {"address": ADDR_A, "amount": "100"},
                {"address": ADDR_B, "amount": "-1"},
            ])
        assert exc_info.value.details["row"] == 1

    def test_counts_and_total(self, distribution):
        assert distribution.recipient_count == 3
        assert distribution.token_total == 175
        assert distribution.commitment.leaf_count == 3

    def test_large_amounts_exact(self):
        big = 2**255 + 12345
        dist = build_distribution([EligibilityRecord(address=ADDR_A, amount=big)])
        assert dist.amount_for(ADDR_A) == big
        assert dist.to_document().recipients[0].amount == str(big)


class TestLookups:

    def test_proof_for_verifies(self, distribution):
        for address, amount in [(ADDR_A, 100), (ADDR_B, 50), (ADDR_C, 25)]:
            proof = distribution.proof_for(address)
            assert distribution.verify_claim(address, amount, proof)

    def test_perturbed_amount_rejected(self, distribution):
        assert not distribution.verify_claim(ADDR_A, 101, distribution.proof_for(ADDR_A))

    def test_lookup_is_case_insensitive(self, distribution):
        upper = "0x" + ADDR_A[2:].upper()
        assert distribution.is_eligible(upper)
        assert distribution.leaf_for(upper) == leaf_hash(ADDR_A, 100)

    def test_unknown_address(self, distribution):
        stranger = "0x" + "d" * 40
        assert not distribution.is_eligible(stranger)
        assert distribution.amount_for(stranger) is None
        assert distribution.leaf_for(stranger) is None
        assert distribution.proof_for(stranger) is None

    def test_malformed_address_lookup(self, distribution):
        assert distribution.proof_for("not-an-address") is None
        assert not distribution.verify_claim("not-an-address", 1, [])

    def test_single_recipient(self):
        dist = build_distribution([EligibilityRecord(address=ADDR_A, amount=1)])
        assert dist.root == leaf_hash(ADDR_A, 1)
        assert dist.proof_for(ADDR_A) == ()
        assert dist.verify_claim(ADDR_A, 1, [])


class TestDuplicatePolicy:

    def test_exact_duplicate_kept_and_warned(self, caplog):
        records = [
            EligibilityRecord(address=ADDR_A, amount=100),
            EligibilityRecord(address=ADDR_B, amount=50),
            EligibilityRecord(address=ADDR_A, amount=100),
        ]
        with caplog.at_level(logging.WARNING, logger="airdrop.distribution"):
            dist = build_distribution(records)

        assert dist.commitment.leaf_count == 3
        assert dist.recipient_count == 2
        assert dist.token_total == 150
        assert dist.positions[ADDR_A] == 0
        assert "Duplicate record" in caplog.text
        assert dist.verify_claim(ADDR_A, 100, dist.proof_for(ADDR_A))

    def test_conflicting_duplicate_rejected(self):
        records = [
            EligibilityRecord(address=ADDR_A, amount=100),
            EligibilityRecord(address=ADDR_A, amount=99),
        ]
        with pytest.raises(InvalidRecordException) as exc_info:
            build_distribution(records)
        assert exc_info.value.code == ErrorCodes.INVALID_RECORD
        assert exc_info.value.details["reason"] == "conflicting_duplicate"
        assert exc_info.value.details["row"] == 1
        assert exc_info.value.details["first_row"] == 0

    def test_strict_mode_rejects_any_repeat(self):
        records = [
            EligibilityRecord(address=ADDR_A, amount=100),
            EligibilityRecord(address=ADDR_A, amount=100),
        ]
        config = DistributionConfig(reject_duplicate_addresses=True)
        with pytest.raises(InvalidRecordException) as exc_info:
            build_distribution(records, config)
        assert exc_info.value.details["reason"] == "duplicate_address"

    def test_zero_amount_allowed_by_default(self):
        dist = build_distribution([EligibilityRecord(address=ADDR_A, amount=0)])
        assert dist.amount_for(ADDR_A) == 0

    def test_zero_amount_rejected_when_required_positive(self):
        config = DistributionConfig(require_positive_amounts=True)
        with pytest.raises(InvalidRecordException, match="Zero amount"):
            build_distribution([EligibilityRecord(address=ADDR_A, amount=0)], config)


class TestToDocument:

    def test_document_shape(self, distribution):
        doc = distribution.to_document()

        assert doc.root == distribution.root_hex
        assert [e.address for e in doc.recipients] == [ADDR_A, ADDR_B, ADDR_C]
        assert [e.amount for e in doc.recipients] == ["100", "50", "25"]
        assert set(doc.proofs) == {ADDR_A, ADDR_B, ADDR_C}
        assert doc.leaf_lookup[ADDR_B] == to_hex(leaf_hash(ADDR_B, 50))

    def test_document_json_keys(self, distribution):
        data = distribution.to_document().to_json_dict()
        assert set(data) == {"root", "recipients", "proofs", "leafLookup"}

    def test_positions_read_only(self, distribution):
        with pytest.raises(TypeError):
            distribution.positions["0x" + "0" * 40] = 0

    def test_many_records(self):
        dist = build_distribution(make_records(50))
        doc = dist.to_document()
        assert len(doc.proofs) == 50
        assert all(len(p) == dist.commitment.depth - 1 for p in doc.proofs.values())
