"""
Module 05 - API Smoke Tests

Tests for the FastAPI endpoints:
1. GET /health returns ok
2. POST /distributions returns root, proofs and totals
3. POST /verify accepts a published proof and rejects a perturbed amount
4. Invalid input returns 400 with a structured error
"""

import pytest
from fastapi.testclient import TestClient

from api.app import app
from api.deps import get_distribution_config
from core.config import DistributionConfig
from core.crypto.hashing import to_hex
from core.merkle import leaf_hash

from fixtures.common import ADDR_A, ADDR_B, ADDR_C


SCENARIO = [
    {"address": ADDR_A, "amount": "100"},
    {"address": ADDR_B, "amount": "50"},
    {"address": ADDR_C, "amount": "25"},
]


@pytest.fixture
def client():
    app.dependency_overrides[get_distribution_config] = lambda: DistributionConfig()
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is True
        assert body["service"] == "merkledrop-api"

    def test_root_path(self, client):
        assert client.get("/").json()["ok"] is True


class TestDistributions:

    def test_build(self, client):
        response = client.post("/distributions", json={"recipients": SCENARIO})
        assert response.status_code == 200
        body = response.json()

        assert body["ok"] is True
        assert body["recipient_count"] == 3
        assert body["token_total"] == "175"
        assert body["root"].startswith("0x") and len(body["root"]) == 66
        assert body["leafLookup"][ADDR_A] == to_hex(leaf_hash(ADDR_A, 100))
        assert set(body["proofs"]) == {ADDR_A, ADDR_B, ADDR_C}

    def test_invalid_record(self, client):
        response = client.post("/distributions", json={
            "recipients": [{"address": ADDR_A, "amount": "1"}, {"address": "0x12", "amount": "1"}],
        })
        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "INVALID_RECORD"
        assert error["details"]["row"] == 1

    def test_skip_invalid(self, client):
        response = client.post("/distributions", json={
            "recipients": [{"address": "0x12", "amount": "1"}, {"address": ADDR_A, "amount": "1"}],
            "skip_invalid": True,
        })
        assert response.status_code == 200
        assert response.json()["recipient_count"] == 1

    def test_empty(self, client):
        response = client.post("/distributions", json={"recipients": []})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "EMPTY_LEAF_SET"

    def test_conflicting_duplicate(self, client):
        response = client.post("/distributions", json={
            "recipients": [{"address": ADDR_A, "amount": "1"}, {"address": ADDR_A, "amount": "2"}],
        })
        assert response.status_code == 400
        assert response.json()["error"]["details"]["reason"] == "conflicting_duplicate"

    def test_server_policy_applies(self, client):
        app.dependency_overrides[get_distribution_config] = lambda: DistributionConfig(
            require_positive_amounts=True
        )
        response = client.post("/distributions", json={
            "recipients": [{"address": ADDR_A, "amount": "0"}],
        })
        assert response.status_code == 400


class TestVerify:

    def setup_method(self):
        self.client = TestClient(app)
        app.dependency_overrides[get_distribution_config] = lambda: DistributionConfig()
        self.built = self.client.post("/distributions", json={"recipients": SCENARIO}).json()

    def teardown_method(self):
        app.dependency_overrides.clear()

    def _verify(self, address, amount, proof=None, root=None):
        return self.client.post("/verify", json={
            "root": root or self.built["root"],
            "address": address,
            "amount": amount,
            "proof": self.built["proofs"][address] if proof is None else proof,
        })

    def test_valid_claim(self):
        response = self._verify(ADDR_A, "100")
        assert response.status_code == 200
        assert response.json() == {"ok": True, "leaf": self.built["leafLookup"][ADDR_A]}

    def test_integer_amount(self):
        assert self._verify(ADDR_C, 25).json()["ok"] is True

    def test_perturbed_amount_is_200_not_ok(self):
        response = self._verify(ADDR_A, "101")
        assert response.status_code == 200
        assert response.json()["ok"] is False

    def test_borrowed_proof(self):
        response = self._verify(ADDR_B, "50", proof=self.built["proofs"][ADDR_A])
        assert response.json()["ok"] is False

    def test_malformed_address(self):
        response = self.client.post("/verify", json={
            "root": self.built["root"], "address": "0x12", "amount": "1", "proof": [],
        })
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_RECORD"

    def test_malformed_root(self):
        response = self._verify(ADDR_A, "100", root="0x1234")
        assert response.status_code == 400
        assert response.json()["error"]["details"]["field_path"] == "root"

    def test_malformed_proof_element(self):
        response = self._verify(ADDR_A, "100", proof=["0xzz"])
        assert response.status_code == 400
        assert response.json()["error"]["details"]["field_path"] == "proof[0]"

    @pytest.mark.parametrize("amount", [100.0, True, "100.0", -100])
    def test_non_integer_amount_rejected(self, amount):
        """Float and bool amounts are not coerced into a valid claim."""
        response = self._verify(ADDR_A, amount)
        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "INVALID_RECORD"
        assert error["details"]["field_path"] == "amount"

    def test_bool_amount_rejected_for_amount_one(self):
        built = self.client.post("/distributions", json={"recipients": [
            {"address": ADDR_A, "amount": "1"},
            {"address": ADDR_B, "amount": "2"},
        ]}).json()
        response = self.client.post("/verify", json={
            "root": built["root"],
            "address": ADDR_A,
            "amount": True,
            "proof": built["proofs"][ADDR_A],
        })
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_RECORD"
