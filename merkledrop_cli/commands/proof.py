"""
Module 04 - CLI Proof Command

Print the claim credential (amount, leaf, proof) for one address.

Usage:
    merkledrop proof --distribution distribution.json --address 0x..
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace

from airdrop import DistributionIOError, load_distribution_document
from core.schemas.errors import MerkleDropException
from core.schemas.records import normalize_address


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def proof_cmd(args: Namespace) -> int:
    """Execute the proof command."""
    try:
        document = load_distribution_document(args.distribution)
        address = normalize_address(args.address)
    except DistributionIOError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except MerkleDropException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    proof = document.proofs.get(address)
    if proof is None:
        print(f"Address not found in distribution: {address}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    amount = next(
        (entry.amount for entry in document.recipients if entry.address == address),
        None,
    )
    print(json.dumps({
        "address": address,
        "amount": amount,
        "leaf": document.leaf_lookup.get(address),
        "proof": proof,
        "root": document.root,
    }, indent=2))
    return EXIT_SUCCESS
