"""
Module 04 - CLI Check Command

Verify a distribution document offline: rebuild the tree from its
recipients and check the root, the leaf lookup and every proof.

Usage:
    merkledrop check distribution.json [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace

from airdrop import DistributionIOError, load_distribution_document, validate_document
from core.schemas.errors import MerkleDropException
from merkledrop_cli.config import wants_json


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def check_cmd(args: Namespace) -> int:
    """Execute the check command."""
    try:
        document = load_distribution_document(args.distribution_path)
    except DistributionIOError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except MerkleDropException as e:
        print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    result = validate_document(document)

    if wants_json(args):
        print(json.dumps(result.model_dump(mode="json"), indent=2))
    else:
        print(f"distribution: {args.distribution_path}")
        print(f"root: {document.root}")
        print(f"ok: {str(result.ok).lower()}")
        if result.error is not None:
            print(f"error: [{result.error.code}] {result.error.message}")
        for check in result.checks:
            if check.is_warning:
                status = "!"
            else:
                status = "✓" if check.ok else "✗"
            print(f"  {status} {check.check_id}: {check.message}")
        print(f"checks: {result.passed_count} passed, {result.error_count} failed")

    if result.ok:
        return EXIT_SUCCESS
    return EXIT_VERIFICATION_FAILED
