"""
Module 04 - CLI Verify Command

Pre-validate a claim offline, exactly as the claim contract would:
the leaf is rebuilt from (address, amount) and folded with the proof
using the sorted-pair rule, then compared with the published root.

Usage:
    merkledrop verify --distribution distribution.json --address 0x.. --amount N [--proof 0x.. ...] [--json]

Without --proof the proof published for the address is used.
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace

from airdrop import DistributionIOError, load_distribution_document
from core.crypto.hashing import hash32_from_hex, to_hex
from core.merkle import MerkleVerifier, leaf_hash
from core.schemas.errors import MerkleDropException
from core.schemas.records import normalize_address
from merkledrop_cli.config import wants_json


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def verify_cmd(args: Namespace) -> int:
    """Execute the verify command."""
    try:
        document = load_distribution_document(args.distribution)
        address = normalize_address(args.address)
        leaf = leaf_hash(address, args.amount)
    except DistributionIOError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except MerkleDropException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    proof_hex = args.proof if args.proof else document.proofs.get(address)
    if proof_hex is None:
        print(f"No proof given and address not in distribution: {address}", file=sys.stderr)
        return EXIT_VERIFICATION_FAILED

    try:
        siblings = [hash32_from_hex(p) for p in proof_hex]
    except ValueError as e:
        print(f"Error: malformed proof element: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    root = hash32_from_hex(document.root)
    ok = MerkleVerifier.verify_claim(address, args.amount, siblings, root)

    if wants_json(args):
        print(json.dumps({
            "ok": ok,
            "address": address,
            "amount": str(args.amount),
            "leaf": to_hex(leaf),
            "root": document.root,
        }, indent=2))
    else:
        print(f"address: {address}")
        print(f"leaf: {to_hex(leaf)}")
        print(f"root: {document.root}")
        print(f"valid: {str(ok).lower()}")

    if ok:
        logger.info("Claim verified for %s", address)
        return EXIT_SUCCESS
    logger.warning("Claim rejected for %s", address)
    return EXIT_VERIFICATION_FAILED
