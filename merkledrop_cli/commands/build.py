"""
Module 04 - CLI Build Command

Build the root and proof table from a recipients file.

Usage:
    merkledrop build --input recipients.json [--out distribution.json] [--skip-invalid] [--json]

Without --out the full distribution document is printed to stdout.
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass, replace
from pathlib import Path

from airdrop import (
    DistributionIOError,
    build_distribution,
    dump_document,
    load_records,
    save_distribution,
)
from core.config import DistributionConfig
from core.schemas.errors import MerkleDropException
from merkledrop_cli.config import wants_json


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


@dataclass
class BuildSummary:
    """Summary of a build for CLI output."""
    input_path: str = ""
    output_path: str = ""
    root: str = ""
    record_count: int = 0
    recipient_count: int = 0
    token_total: str = "0"
    depth: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


def print_summary_human(summary: BuildSummary) -> None:
    print(f"input: {summary.input_path}")
    print(f"output: {summary.output_path}")
    print(f"root: {summary.root}")
    print(f"records: {summary.record_count}")
    print(f"recipients: {summary.recipient_count}")
    print(f"token_total: {summary.token_total}")
    print(f"depth: {summary.depth}")


def _policy(args: Namespace) -> DistributionConfig:
    cli_config = getattr(args, "cli_config", None)
    policy = cli_config.distribution if cli_config else DistributionConfig()
    if getattr(args, "skip_invalid", False):
        policy = replace(policy, skip_invalid_records=True)
    return policy


def build_cmd(args: Namespace) -> int:
    """
    Execute the build command.

    Returns:
        Exit code
    """
    input_path = Path(args.input)
    policy = _policy(args)

    try:
        records = load_records(input_path, skip_invalid=policy.skip_invalid_records)
        distribution = build_distribution(records, policy)
    except DistributionIOError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except MerkleDropException as e:
        print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
        if e.details:
            print(f"  details: {json.dumps(e.details)}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if not args.out:
        print(dump_document(distribution.to_document()))
        return EXIT_SUCCESS

    out_path = save_distribution(distribution, args.out)
    summary = BuildSummary(
        input_path=str(input_path),
        output_path=str(out_path),
        root=distribution.root_hex,
        record_count=len(distribution.records),
        recipient_count=distribution.recipient_count,
        token_total=str(distribution.token_total),
        depth=distribution.commitment.depth,
    )

    if wants_json(args):
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    return EXIT_SUCCESS
