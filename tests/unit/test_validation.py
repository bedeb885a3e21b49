"""
Module 03 - Document Validation Tests
Tests for airdrop/validation.py
"""
from airdrop import build_distribution, validate_document
from core.schemas.distribution import DistributionDocument, RecipientEntry
from core.schemas.errors import ErrorCodes

from fixtures.common import ADDR_A, ADDR_B


ZERO_HASH = "0x" + "00" * 32


class TestValidateDocument:

    def test_valid_document(self, document, assert_check_passed):
        result = validate_document(document)

        assert result.ok
        assert result.error is None
        for check_id in (
            "recipients_unique",
            "root_matches_recipients",
            "leaf_lookup_matches",
            "proofs_verify",
        ):
            assert_check_passed(result, check_id)

    def test_wrong_root(self, document, assert_check_failed):
        tampered = document.model_copy(update={"root": ZERO_HASH})
        result = validate_document(tampered)

        assert not result.ok
        assert_check_failed(result, "root_matches_recipients")
        assert_check_failed(result, "proofs_verify")
        root_check = next(c for c in result.checks if c.check_id == "root_matches_recipients")
        assert root_check.details["code"] == ErrorCodes.ROOT_MISMATCH

    def test_tampered_amount(self, document, assert_check_failed):
        recipients = list(document.recipients)
        recipients[0] = RecipientEntry(address=ADDR_A, amount="101")
        result = validate_document(document.model_copy(update={"recipients": recipients}))

        assert_check_failed(result, "root_matches_recipients")
        assert_check_failed(result, "leaf_lookup_matches")

    def test_tampered_leaf_lookup(self, document, assert_check_passed, assert_check_failed):
        lookup = dict(document.leaf_lookup)
        lookup[ADDR_B] = ZERO_HASH
        result = validate_document(document.model_copy(update={"leaf_lookup": lookup}))

        assert_check_passed(result, "root_matches_recipients")
        assert_check_failed(result, "leaf_lookup_matches")
        check = next(c for c in result.checks if c.check_id == "leaf_lookup_matches")
        assert check.details["mismatched"] == [ADDR_B]

    def test_tampered_proof(self, document, assert_check_failed):
        proofs = {k: list(v) for k, v in document.proofs.items()}
        proofs[ADDR_A][0] = ZERO_HASH
        result = validate_document(document.model_copy(update={"proofs": proofs}))

        assert_check_failed(result, "proofs_verify")
        check = next(c for c in result.checks if c.check_id == "proofs_verify")
        assert check.details["code"] == ErrorCodes.PROOF_INVALID
        assert check.details["invalid"] == [ADDR_A]

    def test_missing_and_unknown_proofs(self, document, assert_check_failed):
        stranger = "0x" + "d" * 40
        proofs = dict(document.proofs)
        proofs.pop(ADDR_B)
        proofs[stranger] = []
        result = validate_document(document.model_copy(update={"proofs": proofs}))

        check = next(c for c in result.checks if c.check_id == "proofs_verify")
        assert check.details["invalid"] == [ADDR_B]
        assert check.details["unknown"] == [stranger]

    def test_empty_document(self, assert_check_failed):
        result = validate_document(DistributionDocument(root=ZERO_HASH))
        assert not result.ok
        assert_check_failed(result, "recipients_present")


class TestDuplicateRecipients:

    def test_exact_duplicate_warns(self):
        document = build_distribution([
            {"address": ADDR_A, "amount": "100"},
            {"address": ADDR_B, "amount": "50"},
            {"address": ADDR_A, "amount": "100"},
        ]).to_document()
        result = validate_document(document)

        assert result.ok
        check = next(c for c in result.checks if c.check_id == "recipients_unique")
        assert check.ok
        assert check.is_warning
        assert check.details["addresses"] == [ADDR_A]
        assert result.error_count == 0

    def test_conflicting_amounts_fail(self, document, assert_check_failed):
        recipients = list(document.recipients) + [RecipientEntry(address=ADDR_A, amount="7")]
        result = validate_document(document.model_copy(update={"recipients": recipients}))

        assert not result.ok
        assert_check_failed(result, "recipients_unique")
        check = next(c for c in result.checks if c.check_id == "recipients_unique")
        assert check.details["reason"] == "conflicting_duplicate"
        assert not check.is_warning

    def test_counts(self, document):
        result = validate_document(document)
        assert result.passed_count == 4
        assert result.error_count == 0
